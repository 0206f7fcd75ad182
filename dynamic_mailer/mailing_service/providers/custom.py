import logging
from abc import abstractmethod
from typing import Any, Mapping, Optional, Protocol

from dynamic_mailer.core.config import DefaultsLookup, DynamicMailSettings
from dynamic_mailer.mailing_service.providers.base import AbstractDynamicMailerProvider

logger = logging.getLogger(__name__)

DYNAMIC_BEHAVIOUR_FLAG = "flag_to_trigger_dynamic_behaviour"
MAILER_ID_KEY = "mailer_id"


class ICredentialsRepository(Protocol):
	@abstractmethod
	def get_credentials(self, mailer_id: Any) -> Optional[Mapping[str, Any]]: ...


class CustomMailerProvider(AbstractDynamicMailerProvider):
	"""
	Mailers bound to ``custom.dynamic.*``, with defaults under ``MAIL_DYNAMIC["custom"]``.

	Call-site options drive two behaviours:
	  - ``flag_to_trigger_dynamic_behaviour`` set to anything but None: the flag is consumed, TLS is
	    switched off and the remaining options are passed on.
	  - otherwise: ``user``/``password`` are recovered from the credentials
	    repository for ``mailer_id`` when both are available; nothing else is passed on.
	"""

	def __init__(
			self,
			defaults_lookup: DefaultsLookup,
			settings: DynamicMailSettings,
			credentials_repository: Optional[ICredentialsRepository] = None,
	):
		super().__init__(defaults_lookup=defaults_lookup, settings=settings)
		self._credentials_repository = credentials_repository

	def get_prefix(self) -> str:
		return "custom"

	def get_subclass_options(self, options: dict[str, Any]) -> dict[str, Any]:
		if options.get(DYNAMIC_BEHAVIOUR_FLAG) is not None:
			options["tls"] = False
			# consumed flags must not reach the transport
			options.pop(DYNAMIC_BEHAVIOUR_FLAG)
			return options

		mailer_id = options.get(MAILER_ID_KEY)
		if mailer_id is None or self._credentials_repository is None:
			return {}

		credentials = self._credentials_repository.get_credentials(mailer_id)
		if not credentials:
			logger.warning(f"No SMTP credentials stored for mailer_id={mailer_id!r}")
			return {}

		return {key: credentials[key] for key in ("user", "password") if credentials.get(key) is not None}
