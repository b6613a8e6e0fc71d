import pytest
from fastapi.testclient import TestClient

from app.core.deps import get_signup_service
from app.main import app
from app.services.signup_service import SignupService
from tests.fakes import (
    FakeOrganizationRepository,
    FakeSignupRepository,
    FakeUserRepository,
    RecordingMailSender,
)

DOMAIN_SUFFIX = ".on.seatsurfing.de"
MAIL_FROM = "info@seatsurfing.de"


@pytest.fixture
def organizations():
    return FakeOrganizationRepository()


@pytest.fixture
def signups():
    return FakeSignupRepository()


@pytest.fixture
def users():
    return FakeUserRepository()


@pytest.fixture
def mailer():
    return RecordingMailSender()


@pytest.fixture
def service(organizations, signups, users, mailer):
    return SignupService(
        organizations=organizations,
        signups=signups,
        users=users,
        mailer=mailer,
        domain_suffix=DOMAIN_SUFFIX,
        mail_sender_address=MAIL_FROM,
    )


@pytest.fixture
def client(service):
    app.dependency_overrides[get_signup_service] = lambda: service
    try:
        # no context manager: the lifespan would try to reach MongoDB
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def signup_payload():
    return {
        "email": "a@b.com",
        "organization": "Acme",
        "domain": "acme",
        "contactFirstname": "A",
        "contactLastname": "B",
        "password": "longpass1",
        "country": "DE",
        "language": "de",
        "acceptTerms": True,
    }
