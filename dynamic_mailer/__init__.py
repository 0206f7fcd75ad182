"""Mailers whose SMTP settings are resolved when the mailer is requested."""

__version__ = "0.1.0"
