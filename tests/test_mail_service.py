import pytest

from app.core.config import settings
from app.services.mail_service import MailSender, MailTemplate, select_locale


@pytest.fixture
def sender():
    return MailSender.from_settings(settings)


@pytest.mark.parametrize("language,locale", [("de", "de"), ("DE", "de"), ("en", "en"), ("fr", "en"), ("", "en")])
def test_select_locale(language, locale):
    assert select_locale(language) == locale


def test_render_double_opt_in_mail(sender):
    subject, body = sender.render(
        MailTemplate.SIGNUP,
        "en",
        {"recipientName": "Jane Doe", "recipientEmail": "jane@example.org", "confirmID": "abc123"},
    )
    assert subject == "Please confirm your Seatsurfing registration"
    assert "Hello Jane Doe" in body
    assert "abc123" in body


def test_render_german_confirm_mail(sender):
    subject, body = sender.render(
        MailTemplate.CONFIRM,
        "de",
        {"recipientName": "Jane Doe", "recipientEmail": "jane@example.org", "username": "admin@x.on.seatsurfing.de"},
    )
    assert "Organisation" in subject
    assert "admin@x.on.seatsurfing.de" in body


def test_render_unknown_locale_falls_back_to_english(sender):
    subject, _ = sender.render(MailTemplate.CONFIRM, "xx", {"recipientName": "J", "recipientEmail": "j@example.org", "username": "u"})
    assert subject == "Your Seatsurfing organization is ready"


def test_build_message_headers(sender):
    msg = sender.build_message(
        "jane@example.org",
        "info@seatsurfing.de",
        MailTemplate.SIGNUP,
        "de",
        {"recipientName": "Jane Doe", "recipientEmail": "jane@example.org", "confirmID": "abc123"},
    )
    assert msg["To"] == "jane@example.org"
    assert msg["From"] == "info@seatsurfing.de"
    assert msg["Subject"].startswith("Bitte")
    assert "abc123" in msg.get_content()


@pytest.mark.asyncio
async def test_send_delivers_over_smtp(sender, monkeypatch):
    delivered = []
    monkeypatch.setattr(sender, "_deliver", delivered.append)
    await sender.send(
        "jane@example.org",
        "info@seatsurfing.de",
        MailTemplate.SIGNUP,
        "en",
        {"recipientName": "Jane Doe", "recipientEmail": "jane@example.org", "confirmID": "abc123"},
    )
    assert len(delivered) == 1
    assert delivered[0]["To"] == "jane@example.org"
