"""
Base class for dynamic mailer providers.

A provider resolves mailers whose SMTP parameters are decided when the mailer is
requested. The configuration handed to the transport is built from three layers,
lowest precedence first:

  1. the static defaults registered under the provider's prefix
     (``MAIL_DYNAMIC[<prefix>]`` in the mail settings),
  2. whatever ``get_subclass_options`` contributes for the call-site options,
  3. the call-site options themselves, used as-is when the hook is not overridden.

Example of static defaults (``MAIL_DYNAMIC`` env value, JSON)::

    {"custom": {"host": "smtp.example.com", "port": 587, "auth_mode": "plain", "timeout": 2,
                "stream": {"ssl": {"verify_peer": false, "verify_peer_name": false}},
                "from": {"address": "noreply@example.com", "name": "Example"}}}
"""
import copy
import logging
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from dynamic_mailer.core.config import DefaultsLookup, DynamicMailSettings
from dynamic_mailer.mailing_service.client.client import DynamicMailClient
from dynamic_mailer.mailing_service.exception import exception_constants
from dynamic_mailer.mailing_service.exception.mail_exceptions import MailConfigNotFoundError
from dynamic_mailer.mailing_service.providers.options import GLOBAL_ADDRESS_TYPES, deep_merge, set_global_address
from dynamic_mailer.mailing_service.service.mailer import Mailer
from dynamic_mailer.mailing_service.transport.smtp_transport import SmtpTransport

logger = logging.getLogger(__name__)


class AbstractDynamicMailerProvider(ABC):

    def __init__(self, defaults_lookup: DefaultsLookup, settings: DynamicMailSettings):
        self._defaults_lookup = defaults_lookup
        self._settings = settings

    @abstractmethod
    def get_prefix(self) -> str:
        """Key of the static defaults and prefix of the bound resource names."""

    @property
    def settings(self) -> DynamicMailSettings:
        return self._settings

    # ---------- Option layers ----------

    def get_default_options(self) -> dict[str, Any]:
        prefix = self.get_prefix()
        defaults = self._defaults_lookup(prefix)
        if defaults is None:
            if self._settings.MAIL_DYNAMIC_STRICT:
                raise MailConfigNotFoundError(exception_constants.DEFAULTS_NOT_FOUND.format(prefix=prefix))
            logger.debug(f"No dynamic mail defaults for prefix '{prefix}', using an empty mapping")
            return {}
        return copy.deepcopy(dict(defaults))

    def get_subclass_options(self, options: dict[str, Any]) -> dict[str, Any]:
        """
        Hook for per-provider options, computed from the call-site options.

        Receives a private copy of the call-site options: it may read flags, pop
        keys so they never reach the transport, or look values up elsewhere
        (e.g. credentials from a repository). The returned mapping takes
        precedence over the static defaults.

        The default passes the call-site options through unchanged.
        """
        return options

    def get_options(self, options: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
        """Resolve the final configuration for one mailer resolution."""
        call_site = copy.deepcopy(dict(options or {}))
        defaults = self.get_default_options()
        contribution = self.get_subclass_options(call_site)
        resolved = deep_merge(defaults, contribution)
        logger.debug(f"Resolved dynamic mail options for '{self.get_prefix()}': keys={sorted(resolved)}")
        return resolved

    # ---------- Factories ----------

    def build_transport(self, config: Mapping[str, Any]) -> SmtpTransport:
        return SmtpTransport.from_options(config)

    def build_mail_client(self, config: Mapping[str, Any]) -> DynamicMailClient:
        return DynamicMailClient(transport=self.build_transport(config), settings=self._settings)

    def build_mailer(self, config: Mapping[str, Any]) -> Mailer:
        mailer = Mailer(client=self.build_mail_client(config))
        # only mapping-shaped from/reply_to/to entries are registered
        for address_type in GLOBAL_ADDRESS_TYPES:
            set_global_address(mailer, config, address_type)
        return mailer

    def make_transport(self, options: Optional[Mapping[str, Any]] = None) -> SmtpTransport:
        return self.build_transport(self.get_options(options))

    def make_mail_client(self, options: Optional[Mapping[str, Any]] = None) -> DynamicMailClient:
        return self.build_mail_client(self.get_options(options))

    def make_mailer(self, options: Optional[Mapping[str, Any]] = None) -> Mailer:
        return self.build_mailer(self.get_options(options))

    def provides(self) -> list[str]:
        prefix = self.get_prefix()
        return [
            f"{prefix}.dynamic.mailer", f"{prefix}.dynamic.mail_client", f"{prefix}.dynamic.transport"
        ]
