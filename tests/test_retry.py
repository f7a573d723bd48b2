"""Tests for RetryPolicy."""

import pytest

from tracker.errors import InvalidArgument, PoolNotFound, TransientFetchError
from tracker.monitor import RetryPolicy
from tests.fakes import FakeClock


def flaky(failures):
    """Operation failing with the given exceptions before returning "ok"."""
    calls = {"n": 0}
    pending = list(failures)

    async def operation():
        calls["n"] += 1
        if pending:
            raise pending.pop(0)
        return "ok"

    return operation, calls


class TestRetryPolicy:

    @pytest.mark.asyncio
    async def test_unbounded_retries_until_success(self):
        clock = FakeClock()
        operation, calls = flaky([TransientFetchError("a")] * 7 + [PoolNotFound("EQ")])
        result = await RetryPolicy(delay=10.0).call(operation, clock, "fetch")
        assert result == "ok"
        assert calls["n"] == 9
        assert clock.sleeps == [10.0] * 8

    @pytest.mark.asyncio
    async def test_zero_delay(self):
        clock = FakeClock()
        operation, _ = flaky([TransientFetchError("a")])
        assert await RetryPolicy().call(operation, clock) == "ok"
        assert clock.sleeps == [0.0]

    @pytest.mark.asyncio
    async def test_bounded_reraises(self):
        clock = FakeClock()
        operation, calls = flaky([TransientFetchError(str(i)) for i in range(5)])
        with pytest.raises(TransientFetchError):
            await RetryPolicy(delay=1.0, max_attempts=3).call(operation, clock)
        assert calls["n"] == 3
        assert clock.sleeps == [1.0, 1.0]

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self):
        clock = FakeClock()
        operation, calls = flaky([InvalidArgument("amount")])
        with pytest.raises(InvalidArgument):
            await RetryPolicy().call(operation, clock)
        assert calls["n"] == 1
        assert clock.sleeps == []

    @pytest.mark.asyncio
    async def test_errors_logged(self, caplog):
        operation, _ = flaky([TransientFetchError("gateway timeout")])
        with caplog.at_level("ERROR"):
            await RetryPolicy(delay=2.0).call(operation, FakeClock(), "fetch pools")
        assert "Unable to fetch pools: gateway timeout" in caplog.text

    @pytest.mark.parametrize("kwargs", [{"delay": -1}, {"max_attempts": 0}])
    def test_invalid_policy(self, kwargs):
        with pytest.raises(ValueError):
            RetryPolicy(**kwargs)
