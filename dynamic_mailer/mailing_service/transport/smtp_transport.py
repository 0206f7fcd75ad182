import copy
import logging
from typing import Any, Mapping, Optional

from fastapi_mail import ConnectionConfig

from dynamic_mailer.mailing_service.exception import exception_constants
from dynamic_mailer.mailing_service.exception.mail_exceptions import MailConfigError
from dynamic_mailer.mailing_service.models.base_models import EmailAddress

logger = logging.getLogger(__name__)

ENCRYPTION_TLS = "tls"
ENCRYPTION_SSL = "ssl"
SUPPORTED_ENCRYPTION = (ENCRYPTION_TLS, ENCRYPTION_SSL)


class SmtpTransport:
	"""
	Connection parameters for one SMTP server.

	Built step by step through setters from a resolved dynamic configuration and
	turned into a ``fastapi_mail.ConnectionConfig`` only when a message is sent,
	once the sender is known.
	"""

	def __init__(self, host: str, port: int):
		self.host = host
		self.port = port
		self.encryption: Optional[str] = None
		self.username: Optional[str] = None
		self.password: Optional[str] = None
		self.auth_mode: Optional[str] = None
		self.timeout: Optional[int] = None
		self.stream_options: dict[str, Any] = {}

	@classmethod
	def from_options(cls, config: Mapping[str, Any]) -> "SmtpTransport":
		"""
		Configure a transport from a resolved dynamic configuration.

		Only ``host`` and ``port`` are required; every other recognised key is applied
		when present. Unrecognised keys are ignored.

		:raises MailConfigError: host missing, port not an integer, or unknown ``secure`` value.
		"""
		host = config.get("host")
		if not host or not isinstance(host, str):
			raise MailConfigError(exception_constants.MISSING_HOST)

		port = config.get("port")
		if isinstance(port, bool) or not isinstance(port, int):
			raise MailConfigError(exception_constants.INVALID_PORT.format(port=port))

		transport = cls(host, port)

		if config.get("secure"):
			transport.set_encryption(config["secure"])

		# Credentials are only applied as a pair
		if config.get("user") is not None and config.get("password") is not None:
			transport.set_username(config["user"])
			transport.set_password(config["password"])

		if config.get("auth_mode") is not None:
			transport.set_auth_mode(config["auth_mode"])

		if config.get("timeout") is not None:
			transport.set_timeout(config["timeout"])

		if config.get("stream") is not None:
			transport.set_stream_options(config["stream"])

		logger.debug(
			f"SMTP transport configured for {transport.server} "
			f"(encryption={transport.encryption}, credentials={transport.has_credentials})"
		)
		return transport

	# ---------- Setters ----------

	def set_encryption(self, secure: str) -> "SmtpTransport":
		mode = str(secure).strip().lower()
		if mode not in SUPPORTED_ENCRYPTION:
			raise MailConfigError(
				exception_constants.UNSUPPORTED_ENCRYPTION.format(secure=secure, allowed=", ".join(SUPPORTED_ENCRYPTION))
			)
		self.encryption = mode
		return self

	def set_username(self, username: str) -> "SmtpTransport":
		self.username = username
		return self

	def set_password(self, password: str) -> "SmtpTransport":
		self.password = password
		return self

	def set_auth_mode(self, auth_mode: str) -> "SmtpTransport":
		self.auth_mode = auth_mode
		return self

	def set_timeout(self, timeout: int) -> "SmtpTransport":
		self.timeout = int(timeout)
		return self

	def set_stream_options(self, stream: Mapping[str, Any]) -> "SmtpTransport":
		self.stream_options = copy.deepcopy(dict(stream))
		return self

	# ---------- Derived values ----------

	@property
	def server(self) -> str:
		return f"{self.host}:{self.port}"

	@property
	def has_credentials(self) -> bool:
		return self.username is not None and self.password is not None

	@property
	def validate_certs(self) -> bool:
		ssl_options = self.stream_options.get("ssl")
		if not isinstance(ssl_options, Mapping):
			return True
		return ssl_options.get("verify_peer", True) is not False and ssl_options.get("verify_peer_name", True) is not False

	def to_connection_config(self, sender: EmailAddress, suppress_send: bool = False, debug: int = 0) -> ConnectionConfig:
		return ConnectionConfig(
			MAIL_USERNAME=self.username or "",
			MAIL_PASSWORD=self.password or "",
			MAIL_FROM=sender.address,
			MAIL_FROM_NAME=sender.name,
			MAIL_PORT=self.port,
			MAIL_SERVER=self.host,
			MAIL_STARTTLS=self.encryption == ENCRYPTION_TLS,
			MAIL_SSL_TLS=self.encryption == ENCRYPTION_SSL,
			USE_CREDENTIALS=self.has_credentials,
			VALIDATE_CERTS=self.validate_certs,
			SUPPRESS_SEND=int(suppress_send),
			MAIL_DEBUG=debug,
		)
