"""Rate-limit aware retries with multiplicative backoff.

Only :class:`~botrecon.domain.ports.TransportStatusError` with a retryable status
(429 or 5xx) is retried. A 429 carrying a retry-after hint waits for the hinted
delay; everything else waits for the current backoff. The backoff grows after
every retry, capped at ``max_seconds``.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from botrecon.domain.ports import TransportStatusError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

log = getLogger(__name__)

RATE_LIMITED = 429

type Sleep = Callable[[float], Awaitable[None]]
type RetryHook = Callable[[int, float], None]


class DeliveryError(RuntimeError):
    """Base class for terminal delivery failures."""


class RetryBudgetExceededError(DeliveryError):
    def __init__(self, context: str, *, attempts: int, last_error: TransportStatusError) -> None:
        super().__init__(f"Max retries exceeded for {context} after {attempts} attempts")
        self.context = context
        self.attempts = attempts
        self.last_error = last_error


@dataclass(slots=True, frozen=True)
class BackoffPolicy:
    initial_seconds: float = 2.0
    multiplier: float = 1.5
    max_seconds: float = 60.0
    max_retries: int = 10

    def is_retryable(self, status_code: int) -> bool:
        return status_code == RATE_LIMITED or 500 <= status_code <= 599

    def next_backoff(self, current: float) -> float:
        return min(current * self.multiplier, self.max_seconds)


async def call_with_retry[T](
    operation: Callable[[], Awaitable[T]],
    *,
    policy: BackoffPolicy,
    context: str,
    sleep: Sleep = asyncio.sleep,
    on_retry: RetryHook | None = None,
) -> T:
    """Run ``operation`` until it succeeds or the retry budget is spent."""

    backoff = policy.initial_seconds
    retries = 0
    while True:
        try:
            return await operation()
        except TransportStatusError as exc:
            if not policy.is_retryable(exc.status_code):
                raise
            if retries >= policy.max_retries:
                raise RetryBudgetExceededError(
                    context, attempts=retries + 1, last_error=exc
                ) from exc

            retries += 1
            hinted = exc.retry_after_seconds if exc.status_code == RATE_LIMITED else None
            wait = hinted if hinted and hinted > 0 else backoff
            if exc.status_code == RATE_LIMITED:
                log.warning("[429] Rate limited (%s). Waiting %.1fs...", context, wait)
            else:
                log.warning(
                    "[%s] Server error (%s). Waiting %.1fs...", exc.status_code, context, wait
                )
            if on_retry is not None:
                on_retry(retries, wait)
            await sleep(wait)
            backoff = policy.next_backoff(backoff)
