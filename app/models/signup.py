# app/models/signup.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class SignupRequest(BaseModel):
    """
    Body of POST /signup/.
    `firstname` and `lastname` are honeypot fields hidden from humans;
    the real contact name comes in `contactFirstname` / `contactLastname`.
    """

    honeypot_firstname: str = Field("", alias="firstname")
    honeypot_lastname: str = Field("", alias="lastname")
    email: EmailStr
    organization: str = Field(..., min_length=1)
    domain: str = Field(..., min_length=1, description="subdomain label, suffix is added by the service")
    contact_firstname: str = Field(..., min_length=1, alias="contactFirstname")
    contact_lastname: str = Field(..., min_length=1, alias="contactLastname")
    password: str = Field(..., min_length=8)
    country: str = Field(..., min_length=2, max_length=2)
    language: str = Field(..., min_length=2, max_length=2)
    accept_terms: bool = Field(..., alias="acceptTerms")

    @field_validator("accept_terms")
    @classmethod
    def terms_must_be_accepted(cls, v: bool) -> bool:
        if not v:
            raise ValueError("terms must be accepted")
        return v

    def is_honeypot_hit(self) -> bool:
        return bool(self.honeypot_firstname or self.honeypot_lastname)


class Signup(BaseModel):
    # pending signup as stored in Mongo; the id doubles as confirmation token
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(None, alias="_id")
    created_at: datetime
    email: str
    password_hash: str
    firstname: str
    lastname: str
    organization: str
    country: str
    language: str
    domain: str

    @property
    def recipient_name(self) -> str:
        return f"{self.firstname} {self.lastname}"

    @property
    def admin_username(self) -> str:
        return f"admin@{self.domain}"
