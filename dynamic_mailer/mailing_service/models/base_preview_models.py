from pydantic import ConfigDict, Field

from dynamic_mailer.mailing_service.models.base_models import NonBlankStr, OutgoingHtmlEmail, OutgoingTextEmail


class PreviewOutgoingHtmlEmail(OutgoingHtmlEmail):
    model_config = ConfigDict(frozen=True)

    server: NonBlankStr = Field(..., description="host:port the email would have been delivered through")


class PreviewOutgoingTextEmail(OutgoingTextEmail):
    model_config = ConfigDict(frozen=True)

    server: NonBlankStr = Field(..., description="host:port the email would have been delivered through")
