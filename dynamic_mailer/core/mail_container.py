from typing import Any, Mapping, Optional

from dependency_injector import providers

from dynamic_mailer.core.container import MailerContainer
from dynamic_mailer.mailing_service import Mailer
from dynamic_mailer.mailing_service.exception import exception_constants
from dynamic_mailer.mailing_service.exception.mail_exceptions import MailConfigError

mailer_container = MailerContainer()


def resolve(name: str, options: Optional[Mapping[str, Any]] = None) -> Any:
	"""
	Resolve a bound dynamic mail resource by name, e.g. ``"custom.dynamic.mailer"``.

	Every call builds a fresh object from freshly merged options.
	"""
	provider = getattr(mailer_container, name.replace(".", "_"), None) if ".dynamic." in name else None
	if not isinstance(provider, providers.Factory):
		raise MailConfigError(exception_constants.UNKNOWN_RESOURCE.format(name=name))
	return provider(options=options)


def get_custom_mailer(options: Optional[Mapping[str, Any]] = None) -> Mailer:
	# resolves on every call, so test overrides still work
	return mailer_container.custom_dynamic_mailer(options=options)
