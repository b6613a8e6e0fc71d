# app/services/signup_service.py
import logging
from datetime import datetime
from typing import Optional

from app.core.errors import ConflictError, DownstreamError, NotFoundError, ValidationError
from app.db.repositories import OrganizationRepository, SignupRepository, UserRepository
from app.models.organization import Organization
from app.models.signup import Signup, SignupRequest
from app.models.user import User
from app.services.mail_service import MailSender, MailTemplate, select_locale

logger = logging.getLogger(__name__)

VALID_COUNTRY_CODES = frozenset(
    {
        "BE", "BG", "DK", "DE", "EE", "FJ", "FR", "GR", "IE", "IT", "HR", "LV", "LT", "LU",
        "MT", "NL", "AT", "PL", "PT", "RO", "SE", "SK", "SI", "ES", "CZ", "HU", "CY",
    }
)
VALID_LANGUAGE_CODES = frozenset({"de"})


class SignupService:
    """
    Self-service tenant signup with double opt-in.

    signup() stores a pending Signup and mails its confirmation id,
    confirm() turns that Signup into an organization, a primary domain
    binding and an org admin user.
    """

    def __init__(
        self,
        organizations: OrganizationRepository,
        signups: SignupRepository,
        users: UserRepository,
        mailer: MailSender,
        domain_suffix: str,
        mail_sender_address: str,
    ) -> None:
        self.organizations = organizations
        self.signups = signups
        self.users = users
        self.mailer = mailer
        self.domain_suffix = domain_suffix
        self.mail_sender_address = mail_sender_address

    def full_domain(self, label: str) -> str:
        return label.lower() + self.domain_suffix

    @staticmethod
    def is_valid_country_code(iso_country_code: str) -> bool:
        return iso_country_code.upper() in VALID_COUNTRY_CODES

    @staticmethod
    def is_valid_language_code(iso_language_code: str) -> bool:
        return iso_language_code.lower() in VALID_LANGUAGE_CODES

    async def is_domain_available(self, domain: str) -> bool:
        try:
            org = await self.organizations.get_by_domain(domain)
        except Exception as e:
            raise DownstreamError("domain lookup failed") from e
        return org is None

    async def is_domain_pending(self, domain: str) -> bool:
        """A pending signup holding the domain blocks new signups for it, not confirmation."""
        try:
            signup = await self.signups.get_by_domain(domain)
        except Exception as e:
            raise DownstreamError("domain lookup failed") from e
        return signup is not None

    async def is_email_available(self, email: str) -> bool:
        try:
            org = await self.organizations.get_by_email(email)
            if org is not None:
                return False
            signup = await self.signups.get_by_email(email)
        except Exception as e:
            raise DownstreamError("email lookup failed") from e
        return signup is None

    async def signup(self, request: SignupRequest) -> Optional[Signup]:
        """
        Create a pending signup and send the double opt-in mail.
        Returns None for honeypot hits, which callers answer like a success.
        """
        if request.is_honeypot_hit():
            logger.info("honeypot field filled, ignoring signup for domain %r", request.domain)
            return None

        domain = self.full_domain(request.domain)
        if not await self.is_domain_available(domain):
            raise ConflictError(f"domain {domain} is not available")
        if await self.is_domain_pending(domain):
            raise ConflictError(f"domain {domain} is already pending")
        if not await self.is_email_available(request.email):
            raise ConflictError("email is already in use")
        if not self.is_valid_country_code(request.country):
            raise ValidationError(f"unsupported country {request.country!r}")
        if not self.is_valid_language_code(request.language):
            raise ValidationError(f"unsupported language {request.language!r}")

        signup = Signup(
            created_at=datetime.now(),
            email=request.email,
            password_hash=self.users.hash_password(request.password),
            firstname=request.contact_firstname,
            lastname=request.contact_lastname,
            organization=request.organization,
            country=request.country,
            language=request.language,
            domain=domain,
        )
        try:
            await self.signups.create(signup)
        except Exception as e:
            raise DownstreamError("could not store signup") from e

        try:
            await self._send_double_opt_in_mail(signup)
        except Exception as e:
            # nobody could ever confirm this signup, so drop it again
            await self._discard_signup(signup)
            raise DownstreamError("could not send double opt-in mail") from e

        logger.info("pending signup created for %s", domain)
        return signup

    async def confirm(self, signup_id: str) -> Organization:
        """
        Provision organization, domain binding and admin user for a pending signup.

        The signup is deleted after success, or when its domain has been taken
        meanwhile. If provisioning fails halfway the organization is rolled back
        and the signup is kept, so the same link can be used again.
        """
        try:
            signup = await self.signups.get_by_id(signup_id)
        except Exception as e:
            raise DownstreamError("signup lookup failed") from e
        if signup is None:
            raise NotFoundError("signup not found")

        if not await self.is_domain_available(signup.domain):
            await self._discard_signup(signup)
            raise ConflictError(f"domain {signup.domain} was taken before confirmation")

        org = Organization(
            name=signup.organization,
            contact_firstname=signup.firstname,
            contact_lastname=signup.lastname,
            contact_email=signup.email,
            language=signup.language,
            country=signup.country,
        )
        try:
            await self.organizations.create(org)
        except Exception as e:
            raise DownstreamError("could not create organization") from e

        try:
            await self.organizations.add_domain(org, signup.domain, True)
            user = User(
                email=signup.admin_username,
                password_hash=signup.password_hash,
                org_id=org.id,
                org_admin=True,
                super_admin=False,
            )
            await self.users.create(user)
        except Exception as e:
            await self._rollback_organization(org)
            raise DownstreamError("could not provision organization") from e

        try:
            await self._send_confirm_mail(signup)
        except Exception:
            logger.exception("confirmation mail to %s failed", signup.email)

        await self._discard_signup(signup)
        logger.info("organization %s provisioned for %s", org.id, signup.domain)
        return org

    async def _discard_signup(self, signup: Signup) -> None:
        try:
            await self.signups.delete(signup)
        except Exception as e:
            raise DownstreamError("could not delete signup") from e

    async def _rollback_organization(self, org: Organization) -> None:
        try:
            await self.organizations.delete(org)
        except Exception:
            logger.exception("rollback of organization %s failed", org.id)

    async def _send_double_opt_in_mail(self, signup: Signup) -> None:
        variables = {
            "recipientName": signup.recipient_name,
            "recipientEmail": signup.email,
            "confirmID": signup.id,
        }
        await self.mailer.send(
            signup.email,
            self.mail_sender_address,
            MailTemplate.SIGNUP,
            select_locale(signup.language),
            variables,
        )

    async def _send_confirm_mail(self, signup: Signup) -> None:
        variables = {
            "recipientName": signup.recipient_name,
            "recipientEmail": signup.email,
            "username": signup.admin_username,
        }
        await self.mailer.send(
            signup.email,
            self.mail_sender_address,
            MailTemplate.CONFIRM,
            select_locale(signup.language),
            variables,
        )
