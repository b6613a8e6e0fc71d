# app/core/security.py
import secrets

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
CONFIRMATION_ID_BYTES = 32


def hash_password(plain_password: str) -> str:
    return pwd_context.hash(plain_password)


def new_confirmation_id() -> str:
    """
    Create an unguessable id for a pending signup.
    Whoever knows it can provision the tenant, so it must come from a CSPRNG.
    """
    return secrets.token_urlsafe(CONFIRMATION_ID_BYTES)
