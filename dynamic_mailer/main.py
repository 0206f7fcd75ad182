"""
Example entry point: resolve the ``custom`` dynamic mailer with call-site options.

The options below are handed to ``CustomMailerProvider.get_subclass_options`` and the
result is merged over ``MAIL_DYNAMIC["custom"]``.
"""
import logging

from dynamic_mailer.core.config import settings
from dynamic_mailer.core.logging_config import configure_logging
from dynamic_mailer.core.mail_container import resolve
from dynamic_mailer.mailing_service import Mailer

logger = logging.getLogger(__name__)

EXAMPLE_OPTIONS = {
    "username": "provided_in_user_code",
    "flag_to_trigger_dynamic_behaviour": True,
}


def main() -> Mailer:
    configure_logging(settings.LOG_LEVEL)
    logger.info(f"Starting {settings.app_name} v{settings.VERSION}")

    try:
        mailer = resolve("custom.dynamic.mailer", EXAMPLE_OPTIONS)
    except Exception as e:
        logger.error(f"Failed to resolve custom.dynamic.mailer: {e}", exc_info=True)
        raise

    transport = mailer.client.transport
    logger.info(
        f"Resolved custom.dynamic.mailer -> {transport.server} "
        f"(encryption={transport.encryption}, sender={mailer.from_address})"
    )
    return mailer


if __name__ == "__main__":
    main()
