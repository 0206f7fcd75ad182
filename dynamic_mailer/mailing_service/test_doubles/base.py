from __future__ import annotations

from typing import Callable, Dict, List, Tuple

RecordedCall = Tuple[str, tuple, dict]


class CallSpyMixin:
    """Collects (method_name, args, kwargs) for assertions."""

    def __init__(self) -> None:
        self.received_calls: List[RecordedCall] = []

    def _touch(self, method: Callable, /, *args, **kwargs) -> str:
        name = method.__name__
        self.received_calls.append((name, args, kwargs))
        return name

    def calls_to(self, method: Callable) -> List[RecordedCall]:
        return [c for c in self.received_calls if c[0] == method.__name__]


class ExceptionPlanMixin:
    """Pre-wires an exception per method name; raised on the next call to that method."""

    def __init__(self) -> None:
        self._exceptions: Dict[str, Exception] = {}

    def set_exception(self, method: Callable, exc: Exception) -> None:
        self._exceptions[method.__name__] = exc

    def clear_exception(self, method: Callable) -> None:
        self._exceptions.pop(method.__name__, None)

    def _maybe_raise(self, method_name: str) -> None:
        exc = self._exceptions.get(method_name)
        if exc:
            raise exc


class FakeBase(CallSpyMixin, ExceptionPlanMixin):
    """Call tracking + planned exceptions; subclasses keep their own state."""

    def __init__(self) -> None:
        CallSpyMixin.__init__(self)
        ExceptionPlanMixin.__init__(self)

    def _before(self, method: Callable, /, *args, **kwargs) -> str:
        mname = self._touch(method, *args, **kwargs)
        self._maybe_raise(mname)
        return mname
