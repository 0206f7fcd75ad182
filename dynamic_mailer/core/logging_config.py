"""Logging configuration for the dynamic mailer."""

import logging

from dynamic_mailer.core.config import LogLevel

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_CONFIGURED_ATTR = "_is_dynamic_mailer_handler"


def configure_logging(level: LogLevel | str = LogLevel.INFO) -> logging.Logger:
    """Attach a single stream handler to the root logger and set its level.

    Calling it again only updates the level; handlers are never duplicated.
    """
    root = logging.getLogger()
    level_name = level.value if isinstance(level, LogLevel) else str(level).upper()

    for handler in root.handlers:
        if getattr(handler, _CONFIGURED_ATTR, False):
            break
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        setattr(handler, _CONFIGURED_ATTR, True)
        root.addHandler(handler)

    root.setLevel(level_name)
    return root
