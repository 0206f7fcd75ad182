from typing import Any, Mapping, Optional

from dynamic_mailer.mailing_service.providers.custom import ICredentialsRepository
from dynamic_mailer.mailing_service.test_doubles.base import FakeBase


class FakeCredentialsRepository(FakeBase, ICredentialsRepository):
    """In-memory credentials keyed by mailer id."""

    def __init__(self, store: Optional[dict[Any, Mapping[str, Any]]] = None) -> None:
        super().__init__()
        self.store: dict[Any, Mapping[str, Any]] = dict(store or {})

    def add(self, mailer_id: Any, user: str, password: str) -> None:
        self.store[mailer_id] = {"user": user, "password": password}

    def get_credentials(self, mailer_id: Any) -> Optional[Mapping[str, Any]]:
        self._before(self.get_credentials, mailer_id)
        return self.store.get(mailer_id)
