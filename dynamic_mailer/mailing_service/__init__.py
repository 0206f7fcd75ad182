from .client.client import DynamicMailClient, IMailClient
from .transport.smtp_transport import SmtpTransport
from .service.interfaces import IMailer
from .service.mailer import Mailer
from .providers import (
    AbstractDynamicMailerProvider,
    CustomMailerProvider,
    ICredentialsRepository,
    deep_merge,
    set_global_address,
)

from .exception import mail_exceptions
from .exception import exception_constants

from .models.base_models import (
    EmailAddress,
    EmailEnvelope,
    OutgoingHtmlEmail,
    OutgoingTextEmail,
)
from .models.base_preview_models import (
    PreviewOutgoingHtmlEmail,
    PreviewOutgoingTextEmail,
)

from .test_doubles.client import SpyMailClient
from .test_doubles.credentials import FakeCredentialsRepository


__all__ = [
    
    # client/ + transport/
    "IMailClient",
    "DynamicMailClient",
    "SmtpTransport",
    
    # service/
    "IMailer",
    "Mailer",
    
    # providers/
    "AbstractDynamicMailerProvider",
    "CustomMailerProvider",
    "ICredentialsRepository",
    "deep_merge",
    "set_global_address",
    
    # exception/
    "mail_exceptions",
    "exception_constants",

    # models/
    "EmailAddress",
    "EmailEnvelope",
    "OutgoingHtmlEmail",
    "OutgoingTextEmail",
    "PreviewOutgoingHtmlEmail",
    "PreviewOutgoingTextEmail",
    
    # test_doubles/
    "SpyMailClient",
    "FakeCredentialsRepository",
]
