import os

import pytest

from dynamic_mailer.core.config import DynamicMailSettings
from dynamic_mailer.core.container import MailerContainer
from dynamic_mailer.mailing_service.test_doubles.credentials import FakeCredentialsRepository
from dependency_injector import providers

# Environment setup for testing
os.environ['ENVIRONMENT'] = 'test'
os.environ['LOG_LEVEL'] = 'DEBUG'


@pytest.fixture
def custom_defaults():
    """Static defaults registered for the 'custom' prefix"""
    return {
        "host": "smtp.example.com",
        "port": 587,
        "secure": "tls",
        "auth_mode": "plain",
        "timeout": 30,
        "stream": {"ssl": {"verify_peer": False, "verify_peer_name": False}},
        "from": {"address": "noreply@example.com", "name": "Example"},
    }


@pytest.fixture
def mail_settings(custom_defaults):
    """Mail settings with only the 'custom' prefix registered"""
    return DynamicMailSettings(
        MAIL_DYNAMIC={"custom": custom_defaults},
        MAIL_DYNAMIC_STRICT=False,
        MAIL_DRY_RUN=True,
        MAIL_SUPPRESS_SEND=True,
        MAIL_SEND_TIMEOUT=60,
        MAIL_SEND_TIMEOUT_MIN=20,
    )


@pytest.fixture
def credentials_repository():
    repo = FakeCredentialsRepository()
    repo.add(7, user="db-user", password="db-secret")
    return repo


@pytest.fixture
def test_container(mail_settings, credentials_repository):
    """Create test container with test settings and an in-memory credentials repository"""
    container = MailerContainer()
    container.mail_settings.override(providers.Object(mail_settings))
    container.credentials_repository.override(providers.Object(credentials_repository))
    yield container
    container.reset_override()
