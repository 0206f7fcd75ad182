class MailError(RuntimeError):
    """Base class for all mail-layer errors."""

class MailConfigError(MailError):
    """Misconfiguration (e.g., missing host, unknown encryption mode, no sender)."""

class MailConfigNotFoundError(MailConfigError):
    """No static defaults registered for the requested prefix (strict mode only)."""

class MailSendError(MailError):
    """SMTP/connect/send failure (including timeouts)."""
