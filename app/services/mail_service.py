# app/services/mail_service.py
import logging
import smtplib
from email.message import EmailMessage
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Tuple

from fastapi.concurrency import run_in_threadpool
from jinja2 import Environment, FileSystemLoader, StrictUndefined

from app.core.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"
SUPPORTED_LOCALES = frozenset({"en", "de"})


class MailTemplate(str, Enum):
    SIGNUP = "signup"
    CONFIRM = "confirm"


def select_locale(language: str) -> str:
    """Map an applicant language to a template locale, falling back to English."""
    lng = language.lower()
    if lng == "de":
        return lng
    return DEFAULT_LOCALE


class MailSender:
    """
    Renders localized plain text mails and delivers them over SMTP.
    Templates live in <template_dir>/<locale>/<kind>.txt, the first line is the subject.
    """

    def __init__(
        self,
        template_dir: Path,
        smtp_host: str,
        smtp_port: int,
        username: str = "",
        password: str = "",
        starttls: bool = False,
    ) -> None:
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.username = username
        self.password = password
        self.starttls = starttls

    @classmethod
    def from_settings(cls, settings: Settings) -> "MailSender":
        return cls(
            template_dir=settings.MAIL_TEMPLATE_DIR,
            smtp_host=settings.SMTP_HOST,
            smtp_port=settings.SMTP_PORT,
            username=settings.SMTP_USERNAME,
            password=settings.SMTP_PASSWORD,
            starttls=settings.SMTP_STARTTLS,
        )

    def render(self, kind: MailTemplate, locale: str, variables: Dict[str, str]) -> Tuple[str, str]:
        if locale not in SUPPORTED_LOCALES:
            locale = DEFAULT_LOCALE
        template = self.env.get_template(f"{locale}/{kind.value}.txt")
        text = template.render(**variables)
        subject, _, body = text.partition("\n")
        return subject.strip(), body.lstrip("\n")

    def build_message(
        self, to: str, sender: str, kind: MailTemplate, locale: str, variables: Dict[str, str]
    ) -> EmailMessage:
        subject, body = self.render(kind, locale, variables)
        msg = EmailMessage()
        msg["From"] = sender
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content(body)
        return msg

    def _deliver(self, msg: EmailMessage) -> None:
        with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=30) as smtp:
            if self.starttls:
                smtp.starttls()
            if self.username:
                smtp.login(self.username, self.password)
            smtp.send_message(msg)

    async def send(
        self,
        to: str,
        sender: str,
        kind: MailTemplate,
        locale: str,
        variables: Optional[Dict[str, str]] = None,
    ) -> None:
        msg = self.build_message(to, sender, kind, locale, variables or {})
        # smtplib blocks, keep it off the event loop
        await run_in_threadpool(self._deliver, msg)
        logger.info("sent %s mail (%s) to %s", kind.value, locale, to)
