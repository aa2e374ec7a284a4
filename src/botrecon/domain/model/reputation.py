"""Reputation facts contributed by IP intelligence feeds.

Absence is modelled with ``None`` throughout the domain. The placeholder strings
used by feed payloads ("Unknown", "Uncategorized") are only understood by
:meth:`ReputationEntry.from_feed`, which is the boundary where feed tuples enter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .enums import EntryKind, Rating

UNKNOWN_NAME: Final[str] = "Unknown"
UNCATEGORIZED: Final[str] = "Uncategorized"

_PLACEHOLDERS: Final[frozenset[str]] = frozenset({UNKNOWN_NAME, UNCATEGORIZED})


def _clean_label(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    if not stripped or stripped in _PLACEHOLDERS:
        return None
    return stripped


@dataclass(slots=True, frozen=True)
class DatacenterTag:
    """Datacenter fact absorbed by a bot entry covering the same scope."""

    name: str | None = None


@dataclass(slots=True, frozen=True, kw_only=True)
class ReputationEntry:
    scope: str
    kind: EntryKind
    provenance: str
    name: str | None = None
    category: str | None = None
    rating: Rating = Rating.NEUTRAL
    datacenter: DatacenterTag | None = None

    def __post_init__(self) -> None:
        if not self.provenance.strip():
            raise ValueError("Reputation entries require a provenance")

    @classmethod
    def from_feed(
        cls,
        scope: str,
        kind: EntryKind | str,
        name: str | None,
        category: str | None,
        rating: Rating | str | None,
        provenance: str,
    ) -> ReputationEntry:
        """Build an entry from a raw feed tuple, mapping placeholders to ``None``."""

        return cls(
            scope=scope.strip(),
            kind=EntryKind(kind),
            provenance=provenance,
            name=_clean_label(name),
            category=_clean_label(category),
            rating=Rating(rating) if rating else Rating.NEUTRAL,
        )

    @property
    def has_specific_name(self) -> bool:
        return self.name is not None

    @property
    def is_bot(self) -> bool:
        return self.kind is EntryKind.BOT

    @property
    def is_datacenter(self) -> bool:
        return self.kind is EntryKind.DATACENTER
