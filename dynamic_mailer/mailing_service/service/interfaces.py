from abc import abstractmethod
from typing import List, Optional, Protocol

from pydantic import EmailStr

from ..models.base_preview_models import PreviewOutgoingHtmlEmail, PreviewOutgoingTextEmail


class IMailer(Protocol):
    @abstractmethod
    def always_from(self, address: EmailStr, name: Optional[str] = None) -> None: ...

    @abstractmethod
    def always_reply_to(self, address: EmailStr, name: Optional[str] = None) -> None: ...

    @abstractmethod
    def always_to(self, address: EmailStr, name: Optional[str] = None) -> None: ...

    @abstractmethod
    async def send_text(
            self,
            to: List[EmailStr],
            subject: str,
            body: str,
            cc: Optional[List[EmailStr]] = None,
            bcc: Optional[List[EmailStr]] = None,
            headers: Optional[dict[str, str]] = None,
            timeout: Optional[int] = None,
    ) -> PreviewOutgoingTextEmail | None: ...

    @abstractmethod
    async def send_html(
            self,
            to: List[EmailStr],
            subject: str,
            html: str,
            text_fallback: Optional[str] = None,
            cc: Optional[List[EmailStr]] = None,
            bcc: Optional[List[EmailStr]] = None,
            headers: Optional[dict[str, str]] = None,
            timeout: Optional[int] = None,
    ) -> PreviewOutgoingHtmlEmail | None: ...
