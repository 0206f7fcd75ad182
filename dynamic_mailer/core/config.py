from pathlib import Path

from pydantic import Field, field_validator
from typing import Any, Callable, Dict, Mapping, Optional
from enum import Enum

from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_DIR = Path(__file__).parent


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class DynamicMailSettings(BaseSettings):
    MAIL_DYNAMIC: Dict[str, Dict[str, Any]] = Field(
        default_factory=dict,
        description=(
            "Static defaults for every dynamic mailer, keyed by prefix (e.g. 'custom'). Each entry "
            "may carry host, port, user, password, secure ('tls'/'ssl'), auth_mode, timeout, a nested "
            "'stream' mapping and the global 'from'/'reply_to'/'to' addresses. Read from env as JSON."
        ),
    )
    MAIL_DYNAMIC_STRICT: bool = Field(
        default=False,
        description=(
            "If True, resolving a prefix with no registered defaults raises MailConfigNotFoundError. "
            "If False, the missing defaults resolve to an empty mapping."
        ),
    )
    MAIL_DRY_RUN: bool = Field(
        default=False,
        description="If True, mail clients return a preview payload instead of talking to the SMTP server.",
    )
    MAIL_SUPPRESS_SEND: bool = Field(
        default=False,
        description="If True, suppresses actual sending (emails are 'mocked'). Useful in testing.",
    )
    MAIL_DEBUG: int = Field(
        default=0,
        ge=0,
        le=1,
        description="Debug output level for SMTP interactions. 0 = silent, 1 = verbose.",
    )

    MAIL_SEND_TIMEOUT: int | None = Field(
        default=60,
        ge=1,
        description=(
            "Max seconds to wait for the SMTP send to complete when neither the caller nor the "
            "resolved 'timeout' option provides one. Set to None to disable the timeout entirely."
        ),
    )

    MAIL_SEND_TIMEOUT_MIN: int = Field(
        default=20,
        ge=0,
        description="Per-call timeouts at or below this value are ignored in favour of the configured ones.",
    )

    # ---- Normalizers & validation ----

    @field_validator("MAIL_SEND_TIMEOUT", mode="before")
    @classmethod
    def _noneify_timeout(cls, v: str) -> str | None:
        # Allow '', 'none', 'null' (case-insensitive) to disable the timeout via env
        if v is None:
            return None
        if isinstance(v, str):
            s = v.strip().lower()
            if s in {"", "none", "null"}:
                return None
        return v

    @field_validator("MAIL_DYNAMIC", mode="after")
    @classmethod
    def _validate_prefixes(cls, v: Dict[str, Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
        for prefix in v:
            if not prefix.strip():
                raise ValueError("MAIL_DYNAMIC prefixes must be non-empty strings.")
        return v

    # ---- Configuration manager ----
    model_config = SettingsConfigDict(
        env_file=CONFIG_DIR.parent.parent / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


DefaultsLookup = Callable[[str], Optional[Mapping[str, Any]]]


def settings_defaults_lookup(settings: DynamicMailSettings) -> DefaultsLookup:
    """
    Expose the prefix-scoped defaults of ``settings`` as a read-only lookup.

    The returned callable answers ``None`` for unknown prefixes; deciding
    whether that is an error belongs to the caller.
    """

    def lookup(prefix: str) -> Optional[Mapping[str, Any]]:
        return settings.MAIL_DYNAMIC.get(prefix)

    return lookup


class Settings(BaseSettings):
    # Application
    app_name: str = "Dynamic Mailer"
    Environment: str = "development"

    VERSION: str = "0.1.0"

    LOG_LEVEL: LogLevel = Field(default=LogLevel.INFO, description="Root log level")

    mail: DynamicMailSettings = Field(default_factory=DynamicMailSettings)

    model_config = SettingsConfigDict(
        env_file=CONFIG_DIR.parent.parent / ".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


# Global settings instance
settings = Settings()
