"""In-memory IP intelligence index.

Construction is strictly ingest, then sort, then freeze: :class:`IndexBuilder`
accumulates entries and :meth:`IndexBuilder.freeze` hands out an immutable
:class:`IpIntelligenceIndex`. Nothing is shared between runs.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from logging import getLogger
from types import MappingProxyType
from typing import TYPE_CHECKING

from .addresses import canonical_ipv4, is_range_scope, parse_cidr, parse_ipv4
from .merge import merge_entries

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from botrecon.domain.model import ReputationEntry

log = getLogger(__name__)


class IndexFrozenError(RuntimeError):
    """Raised when a builder is used after it has been frozen."""


@dataclass(slots=True, frozen=True)
class AddressRange:
    start: int
    end: int
    entry: ReputationEntry

    def contains(self, value: int) -> bool:
        return self.start <= value <= self.end


@dataclass(slots=True)
class IndexBuilder:
    _exact: dict[str, ReputationEntry] = field(default_factory=dict["str", "ReputationEntry"])
    _ranges: list[AddressRange] = field(default_factory=list["AddressRange"])
    _range_positions: dict[tuple[int, int], int] = field(
        default_factory=dict["tuple[int, int]", "int"]
    )
    _frozen: bool = False
    dropped: int = 0

    def ingest(self, entry: ReputationEntry) -> bool:
        """Merge ``entry`` into the index; return ``False`` if its scope was malformed."""

        if self._frozen:
            raise IndexFrozenError("Cannot ingest into a frozen index")

        if is_range_scope(entry.scope):
            return self._ingest_range(entry)
        return self._ingest_exact(entry)

    def ingest_many(self, entries: Iterable[ReputationEntry]) -> int:
        return sum(1 for entry in entries if self.ingest(entry))

    def freeze(self) -> IpIntelligenceIndex:
        if self._frozen:
            raise IndexFrozenError("Index has already been frozen")
        self._frozen = True

        ordered = tuple(sorted(self._ranges, key=lambda item: item.start))
        log.info(
            "Index frozen: %s exact addresses, %s ranges, %s malformed scopes dropped",
            len(self._exact),
            len(ordered),
            self.dropped,
        )
        return IpIntelligenceIndex(exact=MappingProxyType(dict(self._exact)), ranges=ordered)

    def _ingest_exact(self, entry: ReputationEntry) -> bool:
        key = canonical_ipv4(entry.scope)
        if key is None:
            self._drop(entry)
            return False
        self._exact[key] = merge_entries(self._exact.get(key), entry)
        return True

    def _ingest_range(self, entry: ReputationEntry) -> bool:
        bounds = parse_cidr(entry.scope)
        if bounds is None:
            self._drop(entry)
            return False

        position = self._range_positions.get(bounds)
        if position is None:
            self._range_positions[bounds] = len(self._ranges)
            self._ranges.append(AddressRange(*bounds, entry))
        else:
            current = self._ranges[position]
            self._ranges[position] = AddressRange(
                current.start, current.end, merge_entries(current.entry, entry)
            )
        return True

    def _drop(self, entry: ReputationEntry) -> None:
        self.dropped += 1
        log.debug("Dropping malformed scope %r from %s", entry.scope, entry.provenance)


class IpIntelligenceIndex:
    """Read-only view over exact and range reputation entries."""

    __slots__ = ("_exact", "_max_ends", "_ranges", "_starts")

    def __init__(
        self,
        *,
        exact: Mapping[str, ReputationEntry],
        ranges: tuple[AddressRange, ...],
    ) -> None:
        self._exact = exact
        self._ranges = ranges
        self._starts = tuple(item.start for item in ranges)
        # running maximum of range ends, lets lookups step over nested ranges
        max_ends: list[int] = []
        for item in ranges:
            max_ends.append(max(item.end, max_ends[-1]) if max_ends else item.end)
        self._max_ends = tuple(max_ends)

    @property
    def exact_count(self) -> int:
        return len(self._exact)

    @property
    def range_count(self) -> int:
        return len(self._ranges)

    def lookup_exact(self, address: str | None) -> ReputationEntry | None:
        key = canonical_ipv4(address)
        if key is None:
            return None
        return self._exact.get(key)

    def lookup_range(self, address: str | None) -> ReputationEntry | None:
        value = parse_ipv4(address)
        if value is None:
            return None
        position = bisect_right(self._starts, value) - 1
        while position >= 0 and self._max_ends[position] >= value:
            candidate = self._ranges[position]
            if candidate.contains(value):
                return candidate.entry
            position -= 1
        return None

    def lookup(self, address: str | None) -> ReputationEntry | None:
        """Return the exact entry for ``address``, else the range containing it."""

        return self.lookup_exact(address) or self.lookup_range(address)


def build_index(entries: Iterable[ReputationEntry]) -> IpIntelligenceIndex:
    builder = IndexBuilder()
    builder.ingest_many(entries)
    return builder.freeze()
