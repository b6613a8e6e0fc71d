# app/core/deps.py
from functools import lru_cache

from app.core.config import settings
from app.db.mongo import get_master_db
from app.db.repositories import OrganizationRepository, SignupRepository, UserRepository
from app.services.mail_service import MailSender
from app.services.signup_service import SignupService


@lru_cache
def get_mail_sender() -> MailSender:
    return MailSender.from_settings(settings)


def get_signup_service() -> SignupService:
    """
    Wire the signup service with Mongo backed stores.
    Tests swap this out through app.dependency_overrides.
    """
    db = get_master_db()
    return SignupService(
        organizations=OrganizationRepository(db),
        signups=SignupRepository(db),
        users=UserRepository(db),
        mailer=get_mail_sender(),
        domain_suffix=settings.SIGNUP_DOMAIN_SUFFIX,
        mail_sender_address=settings.MAIL_SENDER,
    )
