from typing import Any, Mapping, Optional

from dependency_injector import containers, providers

from dynamic_mailer.core.config import settings, settings_defaults_lookup
from dynamic_mailer.mailing_service import (
    AbstractDynamicMailerProvider,
    CustomMailerProvider,
    DynamicMailClient,
    Mailer,
    SmtpTransport,
)


def _make_transport(provider: AbstractDynamicMailerProvider, options: Optional[Mapping[str, Any]] = None) -> SmtpTransport:
    return provider.make_transport(options)


def _make_mail_client(provider: AbstractDynamicMailerProvider, options: Optional[Mapping[str, Any]] = None) -> DynamicMailClient:
    return provider.make_mail_client(options)


def _make_mailer(provider: AbstractDynamicMailerProvider, options: Optional[Mapping[str, Any]] = None) -> Mailer:
    return provider.make_mailer(options)


class MailerContainer(containers.DeclarativeContainer):
    """Dependency injection container"""

    mail_settings = providers.Object(settings.mail)

    # read-only view over MAIL_DYNAMIC
    defaults_lookup = providers.Callable(settings_defaults_lookup, settings=mail_settings)

    # Infrastructure - override with a real repository to look credentials up per mailer_id
    credentials_repository = providers.Object(None)

    # -------------------------
    # Dynamic mailer: custom
    # -------------------------

    custom_mailer_provider = providers.Singleton(
        CustomMailerProvider,
        defaults_lookup=defaults_lookup,
        settings=mail_settings,
        credentials_repository=credentials_repository,
    )

    # Factories: call-site options are passed when resolving, e.g.
    # container.custom_dynamic_mailer(options={"mailer_id": 7})
    custom_dynamic_transport = providers.Factory(_make_transport, custom_mailer_provider)

    custom_dynamic_mail_client = providers.Factory(_make_mail_client, custom_mailer_provider)

    custom_dynamic_mailer = providers.Factory(_make_mailer, custom_mailer_provider)
