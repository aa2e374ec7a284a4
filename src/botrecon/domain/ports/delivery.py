"""Ports for delivering events to the analytics platform."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from botrecon.domain.model import OutboundEvent


class TransportStatusError(RuntimeError):
    """Raised by adapters when the remote side answered with an error status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        retry_after_seconds: float | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.retry_after_seconds = retry_after_seconds


@runtime_checkable
class EventSink(Protocol):
    """Accepts a batch of events; success or failure is reported per batch."""

    async def send_batch(self, events: Sequence[OutboundEvent]) -> None: ...


__all__ = ["EventSink", "TransportStatusError"]
