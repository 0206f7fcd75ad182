import pytest
from dynamic_mailer.mailing_service.test_doubles.base import (
    CallSpyMixin, ExceptionPlanMixin, FakeBase
)
from dynamic_mailer.mailing_service.test_doubles.credentials import FakeCredentialsRepository

# -------- tiny concrete helpers local to the test module --------
class _SpyOnly(CallSpyMixin):
    def __init__(self): super().__init__()
    def ping(self, *args, **kw): return self._touch(self.ping, *args, **kw)
    def pong(self, *args, **kw): return self._touch(self.pong, *args, **kw)

class _FakeForBefore(FakeBase):
    def __init__(self): super().__init__()
    def op(self, *args, **kw): return self._before(self.op, *args, **kw)
    def op2(self, *args, **kw): return self._before(self.op2, *args, **kw)

class _ExcOnly(ExceptionPlanMixin):
    def __init__(self): super().__init__()
    def danger(self):
        self._maybe_raise("danger")
        return "ok"

# -------------------- grouped tests --------------------

class TestCallSpyMixin:
    @pytest.fixture
    def spy(self):
        return _SpyOnly()

    def test_records_and_returns_name(self, spy):
        assert spy.ping(1, y=2) == "ping"
        assert spy.received_calls == [("ping", (1,), {"y": 2})]

    def test_calls_to_filters_by_method(self, spy):
        spy.ping(10); spy.pong(a="A"); spy.ping(20, b="B")
        assert spy.calls_to(_SpyOnly.ping) == [
            ("ping", (10,), {}),
            ("ping", (20,), {"b": "B"}),
        ]
        assert spy.calls_to(_SpyOnly.pong) == [("pong", (), {"a": "A"})]


class TestExceptionPlanViaFakeBase:
    @pytest.fixture
    def fake(self):
        return _FakeForBefore()

    def test_before_records_then_raises(self, fake):
        fake.set_exception(_FakeForBefore.op, RuntimeError("boom"))
        with pytest.raises(RuntimeError, match="boom"):
            fake.op(42, k="v")
        assert fake.received_calls == [("op", (42,), {"k": "v"})]

    def test_exception_scoped_per_method(self, fake):
        fake.set_exception(_FakeForBefore.op, ValueError("x"))
        assert fake.op2("safe") == "op2"
        with pytest.raises(ValueError):
            fake.op("fail")

    def test_clear_exception(self, fake):
        fake.set_exception(_FakeForBefore.op, ValueError("x"))
        fake.clear_exception(_FakeForBefore.op)
        assert fake.op() == "op"


class TestExceptionPlanMixinIsolation:
    def test_raise_by_method_name(self):
        exc_only = _ExcOnly()
        exc_only.set_exception(_ExcOnly.danger, KeyError("nope"))
        with pytest.raises(KeyError, match="nope"):
            exc_only.danger()

    def test_no_raise_when_unplanned(self):
        assert _ExcOnly().danger() == "ok"


class TestFakeCredentialsRepository:
    def test_add_and_lookup(self):
        repo = FakeCredentialsRepository()
        repo.add("m-1", user="u", password="p")

        assert repo.get_credentials("m-1") == {"user": "u", "password": "p"}
        assert repo.get_credentials("m-2") is None
        assert repo.received_calls == [
            ("get_credentials", ("m-1",), {}),
            ("get_credentials", ("m-2",), {}),
        ]

    def test_seeded_store_is_copied(self):
        seed = {"m-1": {"user": "u", "password": "p"}}
        repo = FakeCredentialsRepository(seed)
        repo.add("m-2", user="x", password="y")
        assert "m-2" not in seed
