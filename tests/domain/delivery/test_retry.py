from __future__ import annotations

import asyncio

import pytest

from botrecon.domain.delivery import BackoffPolicy, RetryBudgetExceededError, call_with_retry
from botrecon.domain.ports import TransportStatusError


class FlakyOperation:
    def __init__(self, failures: list[TransportStatusError], result: str = "ok") -> None:
        self._failures = list(failures)
        self._result = result
        self.calls = 0

    async def __call__(self) -> str:
        self.calls += 1
        if self._failures:
            raise self._failures.pop(0)
        return self._result


class RecordingSleep:
    def __init__(self) -> None:
        self.waits: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.waits.append(seconds)


def _status(code: int, retry_after: float | None = None) -> TransportStatusError:
    return TransportStatusError(f"HTTP {code}", status_code=code, retry_after_seconds=retry_after)


def test_rate_limits_back_off_multiplicatively() -> None:
    operation = FlakyOperation([_status(429), _status(429), _status(429)])
    sleep = RecordingSleep()
    retries: list[tuple[int, float]] = []

    result = asyncio.run(
        call_with_retry(
            operation,
            policy=BackoffPolicy(),
            context="test",
            sleep=sleep,
            on_retry=lambda attempt, wait: retries.append((attempt, wait)),
        )
    )

    assert result == "ok"
    assert operation.calls == 4
    assert sleep.waits == [2.0, 3.0, 4.5]
    assert [attempt for attempt, _ in retries] == [1, 2, 3]


def test_retry_after_hint_is_honoured() -> None:
    operation = FlakyOperation([_status(429, retry_after=7.0)])
    sleep = RecordingSleep()

    asyncio.run(call_with_retry(operation, policy=BackoffPolicy(), context="test", sleep=sleep))

    assert sleep.waits == [7.0]


def test_server_errors_are_retried() -> None:
    operation = FlakyOperation([_status(503), _status(500)])
    sleep = RecordingSleep()

    asyncio.run(call_with_retry(operation, policy=BackoffPolicy(), context="test", sleep=sleep))

    assert operation.calls == 3
    assert sleep.waits == [2.0, 3.0]


def test_client_errors_propagate_immediately() -> None:
    operation = FlakyOperation([_status(404)])
    sleep = RecordingSleep()

    with pytest.raises(TransportStatusError) as excinfo:
        asyncio.run(call_with_retry(operation, policy=BackoffPolicy(), context="test", sleep=sleep))

    assert excinfo.value.status_code == 404
    assert operation.calls == 1
    assert sleep.waits == []


def test_retry_budget_is_bounded() -> None:
    operation = FlakyOperation([_status(503)] * 5)
    sleep = RecordingSleep()

    with pytest.raises(RetryBudgetExceededError) as excinfo:
        asyncio.run(
            call_with_retry(
                operation, policy=BackoffPolicy(max_retries=2), context="test", sleep=sleep
            )
        )

    assert excinfo.value.attempts == 3
    assert excinfo.value.last_error.status_code == 503
    assert operation.calls == 3
    assert len(sleep.waits) == 2


def test_default_budget_allows_ten_retries() -> None:
    operation = FlakyOperation([_status(429)] * 10)
    sleep = RecordingSleep()

    asyncio.run(call_with_retry(operation, policy=BackoffPolicy(), context="test", sleep=sleep))

    assert operation.calls == 11
    assert max(sleep.waits) <= 60.0


def test_backoff_is_capped() -> None:
    policy = BackoffPolicy()

    assert policy.next_backoff(50.0) == 60.0
    assert policy.is_retryable(429)
    assert policy.is_retryable(502)
    assert not policy.is_retryable(400)


def test_other_exceptions_are_not_retried() -> None:
    async def broken() -> None:
        raise ValueError("boom")

    sleep = RecordingSleep()

    with pytest.raises(ValueError, match="boom"):
        asyncio.run(call_with_retry(broken, policy=BackoffPolicy(), context="test", sleep=sleep))

    assert sleep.waits == []
