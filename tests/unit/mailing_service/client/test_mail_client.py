import asyncio

import pytest

from dynamic_mailer.core.config import DynamicMailSettings
from dynamic_mailer.mailing_service.client.client import DynamicMailClient
from dynamic_mailer.mailing_service.exception.mail_exceptions import MailSendError
from dynamic_mailer.mailing_service.models.base_models import EmailAddress, OutgoingHtmlEmail, OutgoingTextEmail
from dynamic_mailer.mailing_service.models.base_preview_models import PreviewOutgoingHtmlEmail, PreviewOutgoingTextEmail
from dynamic_mailer.mailing_service.transport.smtp_transport import SmtpTransport


# --------------------------- Local Fake FastMail ---------------------------

class _FakeFastMail:
    """
    Minimal fake that mimics the FastMail surface our client uses:
    - send_message(message, template_name=None)
    """
    def __init__(self, conf):
        self.conf = conf
        self.sent = []
        self._raise_on_send: Exception | None = None

    def set_send_exception(self, exc: Exception | None):
        self._raise_on_send = exc

    async def send_message(self, message, template_name=None):
        if self._raise_on_send:
            raise self._raise_on_send
        self.sent.append({"message": message, "template_name": template_name})


# --------------------------- Common fixtures/builders ---------------------------

def _mk_settings(dry_run: bool = False) -> DynamicMailSettings:
    return DynamicMailSettings(
        MAIL_DYNAMIC={},
        MAIL_DRY_RUN=dry_run,
        MAIL_SUPPRESS_SEND=True,
        MAIL_DEBUG=0,
        MAIL_SEND_TIMEOUT=60,
        MAIL_SEND_TIMEOUT_MIN=20,
    )


def _mk_transport(timeout=None) -> SmtpTransport:
    transport = SmtpTransport("smtp.example.com", 587).set_encryption("tls")
    if timeout is not None:
        transport.set_timeout(timeout)
    return transport


_SENDER = EmailAddress(address="noreply@example.com", name="Example")


def _html_msg():
    return OutgoingHtmlEmail(
        subject="HTML Subj",
        sender=_SENDER,
        recipients=["to@example.com"],
        html_body="<b>Hello</b>",
        text_fallback="Hello",
    )


def _text_msg():
    return OutgoingTextEmail(
        subject="TEXT Subj",
        sender=_SENDER,
        recipients=["to@example.com"],
        text_body="Hello",
    )


# ============================ Tests ============================

class TestInit:
    def test_settings_are_wired(self):
        client = DynamicMailClient(_mk_transport(), _mk_settings(dry_run=True))

        assert client.dry_run is True
        assert client.suppress_send is True
        assert client.send_timeout_seconds == 60
        assert client.minimum_timeout_seconds == 20

    def test_explicit_dry_run_wins_over_settings(self):
        client = DynamicMailClient(_mk_transport(), _mk_settings(dry_run=True), dry_run=False)
        assert client.dry_run is False


class TestEffectiveTimeout:
    def test_call_timeout_above_minimum_wins(self):
        client = DynamicMailClient(_mk_transport(timeout=30), _mk_settings())
        assert client._effective_timeout(45) == 45

    def test_small_call_timeout_falls_back_to_transport(self):
        client = DynamicMailClient(_mk_transport(timeout=30), _mk_settings())
        assert client._effective_timeout(5) == 30

    def test_falls_back_to_settings(self):
        client = DynamicMailClient(_mk_transport(), _mk_settings())
        assert client._effective_timeout(None) == 60


@pytest.mark.asyncio
class TestDryRunSends:
    @pytest.fixture
    def client(self):
        return DynamicMailClient(_mk_transport(), _mk_settings(dry_run=True))

    async def test_send_html_email_dry(self, client):
        out = await client.send_html_email(_html_msg())
        assert isinstance(out, PreviewOutgoingHtmlEmail)
        assert out.html_body == "<b>Hello</b>"
        assert out.text_fallback == "Hello"
        assert out.server == "smtp.example.com:587"

    async def test_send_text_email_dry(self, client):
        out = await client.send_text_email(_text_msg())
        assert isinstance(out, PreviewOutgoingTextEmail)
        assert out.text_body == "Hello"
        assert out.sender.address == "noreply@example.com"


@pytest.mark.asyncio
class TestLiveSendsViaFakeFastMail:
    """
    Exercise the "real send" code path (_send_fast_mail) using an in-memory fake FastMail.
    """

    @pytest.fixture
    def fake_holder(self):
        return {}

    @pytest.fixture
    def client(self, monkeypatch, fake_holder):
        client = DynamicMailClient(_mk_transport(), _mk_settings(dry_run=False))

        def _build(envelope):
            fake = _FakeFastMail(client._connection_config(envelope))
            fake_holder["fake"] = fake
            return fake

        monkeypatch.setattr(client, "_build_fast_mail", _build)
        return client

    async def test_send_html_email_live_sets_alternative(self, client, fake_holder):
        await client.send_html_email(_html_msg())

        fake = fake_holder["fake"]
        assert len(fake.sent) == 1
        payload = fake.sent[0]["message"]
        assert payload.subject == "HTML Subj"
        assert payload.body == "<b>Hello</b>"
        assert payload.alternative_body == "Hello"

    async def test_send_text_email_live(self, client, fake_holder):
        await client.send_text_email(_text_msg())

        payload = fake_holder["fake"].sent[0]["message"]
        assert payload.body == "Hello"
        assert payload.subtype.name.lower() == "plain"

    async def test_connection_config_comes_from_transport_and_sender(self, client, fake_holder):
        await client.send_text_email(_text_msg())

        conf = fake_holder["fake"].conf
        assert conf.MAIL_SERVER == "smtp.example.com"
        assert conf.MAIL_PORT == 587
        assert conf.MAIL_STARTTLS is True
        assert conf.MAIL_FROM == "noreply@example.com"
        assert conf.SUPPRESS_SEND == 1


@pytest.mark.asyncio
class TestTimeoutsAndFailures:
    async def test_timeout_raises_mailsenderror(self, monkeypatch):
        client = DynamicMailClient(_mk_transport(), _mk_settings(dry_run=False))
        monkeypatch.setattr(client, "_build_fast_mail", lambda envelope: _FakeFastMail(None))

        async def _boom(aw, *args, **kwargs):
            aw.close()
            raise asyncio.TimeoutError

        monkeypatch.setattr(asyncio, "wait_for", _boom)

        with pytest.raises(MailSendError) as exc:
            await client.send_text_email(_text_msg())

        assert "SMTP send timed out after 60s" in str(exc.value)
        assert "smtp.example.com:587" in str(exc.value)

    async def test_generic_send_failure_is_wrapped_with_context(self, monkeypatch):
        client = DynamicMailClient(_mk_transport(), _mk_settings(dry_run=False))
        fake = _FakeFastMail(None)
        fake.set_send_exception(RuntimeError("SMTP down"))
        monkeypatch.setattr(client, "_build_fast_mail", lambda envelope: fake)

        with pytest.raises(MailSendError) as exc:
            await client.send_html_email(_html_msg())

        msg = str(exc.value)
        assert "SMTP send failed" in msg
        assert "subject='HTML Subj'" in msg
        assert "server='smtp.example.com:587'" in msg
        assert isinstance(exc.value.__cause__, RuntimeError)
