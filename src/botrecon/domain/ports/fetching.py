"""Ports for fetching identity records and reputation facts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from botrecon.domain.model import PersonRecord, ReputationEntry


@runtime_checkable
class RecordSource(Protocol):
    """Paginated, identifier-ordered access to identity records.

    ``cursor`` is the last record identifier seen (``None`` for the first page).
    An empty page signals the end of the data.
    """

    async def fetch_page(self, *, cursor: str | None, limit: int) -> Sequence[PersonRecord]: ...


@runtime_checkable
class ReputationFeed(Protocol):
    """A single third-party list, already parsed into reputation entries."""

    name: str

    async def load(self) -> Sequence[ReputationEntry]: ...


__all__ = ["RecordSource", "ReputationFeed"]
