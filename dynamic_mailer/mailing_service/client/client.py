import asyncio
import logging
from abc import abstractmethod
from typing import Optional, Protocol

from fastapi_mail import ConnectionConfig, FastMail, MessageSchema, MessageType, MultipartSubtypeEnum

from dynamic_mailer.core.config import DynamicMailSettings
from dynamic_mailer.mailing_service.exception.mail_exceptions import MailSendError
from dynamic_mailer.mailing_service.models.base_models import EmailEnvelope, OutgoingHtmlEmail, OutgoingTextEmail
from dynamic_mailer.mailing_service.models.base_preview_models import PreviewOutgoingHtmlEmail, PreviewOutgoingTextEmail
from dynamic_mailer.mailing_service.transport.smtp_transport import SmtpTransport

logger = logging.getLogger(__name__)


class IMailClient(Protocol):
	@abstractmethod
	async def send_html_email(self, message: OutgoingHtmlEmail, timeout: int|None = None) -> PreviewOutgoingHtmlEmail | None: ...

	@abstractmethod
	async def send_text_email(self, message: OutgoingTextEmail, timeout: int|None = None) -> PreviewOutgoingTextEmail | None: ...

class DynamicMailClient(IMailClient):

	def __init__(self, transport: SmtpTransport, settings: DynamicMailSettings, dry_run: Optional[bool] = None):
		"""
			:param transport: The SMTP transport built from the resolved dynamic configuration.
			:param settings: The mail settings (send timeouts, suppress/debug flags).
			:param dry_run: If True, return a preview payload instead of sending.
			       Defaults to ``settings.MAIL_DRY_RUN``.
		"""

		self.transport = transport

		self.dry_run = settings.MAIL_DRY_RUN if dry_run is None else dry_run

		self.suppress_send = settings.MAIL_SUPPRESS_SEND

		self.debug = settings.MAIL_DEBUG

		self.send_timeout_seconds = settings.MAIL_SEND_TIMEOUT

		self.minimum_timeout_seconds = settings.MAIL_SEND_TIMEOUT_MIN

	# ---------- Internal operations ----------

	def _connection_config(self, envelope: EmailEnvelope) -> ConnectionConfig:
		return self.transport.to_connection_config(
			envelope.sender, suppress_send=self.suppress_send, debug=self.debug
		)

	def _build_fast_mail(self, envelope: EmailEnvelope) -> FastMail:
		return FastMail(self._connection_config(envelope))

	def _generate_message_schema(self, envelope:EmailEnvelope, subtype:MessageType) -> MessageSchema:
		headers = dict(envelope.headers) if envelope.headers else None

		return MessageSchema(
			subject=envelope.subject,
			recipients=envelope.recipients,
			cc=envelope.cc,
			bcc=envelope.bcc,
			reply_to=envelope.reply_to,
			headers=headers,
			subtype=subtype
		)

	def _effective_timeout(self, timeout: int|None) -> int|None:
		if timeout is not None and timeout > self.minimum_timeout_seconds:
			return timeout
		if self.transport.timeout is not None:
			return self.transport.timeout
		return self.send_timeout_seconds

	async def _send_fast_mail(self, envelope: EmailEnvelope, message: MessageSchema, timeout: int|None = None) -> None:
		effective_timeout = self._effective_timeout(timeout)
		fm = self._build_fast_mail(envelope)
		try:
			# timeout guard so sends don't hang forever
			await asyncio.wait_for(
				fm.send_message(message=message),
				timeout=effective_timeout,
			)
			return None
		except asyncio.TimeoutError as e:
			logger.error(f"SMTP send to {self.transport.server} timed out after {effective_timeout}s")
			raise MailSendError(
				f"SMTP send timed out after {effective_timeout}s "
				f"(subject='{message.subject}', server='{self.transport.server}')"
			) from e
		except Exception as e:
			logger.error(f"SMTP send to {self.transport.server} failed: {e}")
			raise MailSendError(
				f"SMTP send failed "
				f"(subject='{message.subject}', to={len(message.recipients)}, "
				f"cc={len(message.cc)}, bcc={len(message.bcc)}, "
				f"server='{self.transport.server}')"
			) from e

	# ---------- Send Methods ----------

	async def send_html_email(self, message: OutgoingHtmlEmail, timeout: int|None = None) -> PreviewOutgoingHtmlEmail | None:

		if self.dry_run:
			return PreviewOutgoingHtmlEmail(**message.model_dump(), server=self.transport.server)

		message_schema = self._generate_message_schema(envelope=message, subtype=MessageType.html)
		message_schema.body = message.html_body

		if message.text_fallback:
			message_schema.alternative_body = message.text_fallback
			message_schema.multipart_subtype= MultipartSubtypeEnum.alternative

		return await self._send_fast_mail(envelope=message, message=message_schema, timeout=timeout)

	async def send_text_email(self, message: OutgoingTextEmail, timeout: int|None = None) -> PreviewOutgoingTextEmail | None:

		if self.dry_run:
			return PreviewOutgoingTextEmail(**message.model_dump(), server=self.transport.server)

		message_schema = self._generate_message_schema(envelope=message, subtype=MessageType.plain)
		message_schema.body=message.text_body

		return await self._send_fast_mail(envelope=message, message=message_schema, timeout=timeout)
