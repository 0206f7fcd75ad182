import logging
from typing import Any, List, Optional

from pydantic import EmailStr, TypeAdapter, ValidationError

from dynamic_mailer.mailing_service.client.client import IMailClient
from dynamic_mailer.mailing_service.exception import exception_constants
from dynamic_mailer.mailing_service.exception.mail_exceptions import MailConfigError
from dynamic_mailer.mailing_service.models.base_models import (
    EmailAddress,
    OutgoingHtmlEmail,
    OutgoingTextEmail,
    dedupe,
)
from dynamic_mailer.mailing_service.models.base_preview_models import PreviewOutgoingHtmlEmail, PreviewOutgoingTextEmail
from .interfaces import IMailer

logger = logging.getLogger(__name__)

_EMAIL_ADAPTER = TypeAdapter(EmailStr)


def _checked(address: Optional[EmailAddress], address_type: str) -> Optional[EmailAddress]:
    if address is None:
        return None
    try:
        _EMAIL_ADAPTER.validate_python(address.address)
    except ValidationError as e:
        raise MailConfigError(
            exception_constants.INVALID_GLOBAL_ADDRESS.format(address_type=address_type, address=address.address)
        ) from e
    return address


class Mailer(IMailer):
    """
    Mail-sending object handed out by a dynamic mailer provider.

    Global addresses registered through ``always_*`` apply to every message:
      - ``from``: the sender of every message (required before sending),
      - ``reply_to``: appended to the Reply-To list,
      - ``to``: replaces all recipients and clears Cc/Bcc (debug/staging catch-all).
    """

    def __init__(self, client: IMailClient):
        self._client = client
        self.from_address: Optional[EmailAddress] = None
        self.reply_to_address: Optional[EmailAddress] = None
        self.to_address: Optional[EmailAddress] = None

    @property
    def client(self) -> IMailClient:
        return self._client

    def always_from(self, address: EmailStr, name: Optional[str] = None) -> None:
        self.from_address = EmailAddress(address=address, name=name)

    def always_reply_to(self, address: EmailStr, name: Optional[str] = None) -> None:
        self.reply_to_address = EmailAddress(address=address, name=name)

    def always_to(self, address: EmailStr, name: Optional[str] = None) -> None:
        self.to_address = EmailAddress(address=address, name=name)

    def _envelope_fields(
            self,
            to: List[EmailStr],
            subject: str,
            cc: Optional[List[EmailStr]],
            bcc: Optional[List[EmailStr]],
            headers: Optional[dict[str, str]],
    ) -> dict[str, Any]:
        if self.from_address is None:
            raise MailConfigError(exception_constants.SENDER_NOT_CONFIGURED)

        # addresses are registered as configured and only checked once a message goes out
        sender = _checked(self.from_address, "from")
        to_address = _checked(self.to_address, "to")
        reply_to_address = _checked(self.reply_to_address, "reply_to")

        recipients, cc, bcc = list(to), list(cc or []), list(bcc or [])
        if to_address is not None:
            logger.debug(f"Redirecting {len(recipients) + len(cc) + len(bcc)} recipient(s) to the global 'to' address")
            recipients, cc, bcc = [to_address.address], [], []

        reply_to = [reply_to_address.address] if reply_to_address else []

        return {
            "subject": subject,
            "sender": sender,
            "recipients": dedupe(recipients),
            "cc": cc,
            "bcc": bcc,
            "reply_to": reply_to,
            "headers": headers,
        }

    async def send_text(
            self,
            to: List[EmailStr],
            subject: str,
            body: str,
            cc: Optional[List[EmailStr]] = None,
            bcc: Optional[List[EmailStr]] = None,
            headers: Optional[dict[str, str]] = None,
            timeout: Optional[int] = None,
    ) -> PreviewOutgoingTextEmail | None:
        message = OutgoingTextEmail(
            **self._envelope_fields(to, subject, cc, bcc, headers),
            text_body=body,
        )
        return await self._client.send_text_email(message, timeout=timeout)

    async def send_html(
            self,
            to: List[EmailStr],
            subject: str,
            html: str,
            text_fallback: Optional[str] = None,
            cc: Optional[List[EmailStr]] = None,
            bcc: Optional[List[EmailStr]] = None,
            headers: Optional[dict[str, str]] = None,
            timeout: Optional[int] = None,
    ) -> PreviewOutgoingHtmlEmail | None:
        message = OutgoingHtmlEmail(
            **self._envelope_fields(to, subject, cc, bcc, headers),
            html_body=html,
            text_fallback=text_fallback,
        )
        return await self._client.send_html_email(message, timeout=timeout)
