"""Parsers turning raw feed payloads into reputation entries.

Parsers are total: lines or items that cannot be understood are skipped, and
scopes are validated later by the index builder.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping, Sequence
from typing import TYPE_CHECKING, Final

from pydantic import ValidationError

from botrecon.domain.model import EntryKind, Rating, ReputationEntry

from .schema import RangeList

if TYPE_CHECKING:
    from collections.abc import Iterable

COMMENT_PREFIX: Final[str] = "#"
HIGH_CONFIDENCE: Final[frozenset[str]] = frozenset({"1", "1.0"})
CIDR_PATTERN: Final[re.Pattern[str]] = re.compile(r"(?:[0-9]{1,3}\.){3}[0-9]{1,3}/[0-9]{1,2}")


def iter_list_lines(text: str) -> Iterator[tuple[str, str | None]]:
    """Yield ``(value, inline_comment)`` for every non-blank, non-comment line."""

    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith(COMMENT_PREFIX):
            continue
        value, _, comment = stripped.partition(COMMENT_PREFIX)
        value = value.strip()
        if value:
            yield value, comment.strip() or None


def parse_line_list(
    text: str,
    *,
    kind: EntryKind,
    name: str | None,
    category: str | None,
    rating: Rating,
    provenance: str,
    name_from_comment: bool = False,
) -> list[ReputationEntry]:
    return [
        ReputationEntry.from_feed(
            scope,
            kind,
            (comment or name) if name_from_comment else name,
            category,
            rating,
            provenance,
        )
        for scope, comment in iter_list_lines(text)
    ]


def parse_range_list(
    payload: object,
    *,
    kind: EntryKind,
    category: str | None,
    rating: Rating,
    provenance: str,
) -> list[ReputationEntry]:
    try:
        items = RangeList.model_validate(payload).root
    except ValidationError:
        return []
    return [
        ReputationEntry.from_feed(item.range, kind, item.name, category, rating, provenance)
        for item in items
        if item.range
    ]


def parse_avastel(text: str, *, provenance: str = "Avastel") -> list[ReputationEntry]:
    """Parse ``ip;as;confidence`` lines, keeping only full-confidence proxies."""

    entries: list[ReputationEntry] = []
    for value, _ in iter_list_lines(text):
        parts = value.split(";")
        if len(parts) < 3:
            continue
        address, autonomous_system, confidence = parts[:3]
        if confidence.strip() not in HIGH_CONFIDENCE:
            continue
        entries.append(
            ReputationEntry.from_feed(
                address,
                EntryKind.BOT,
                f"Residential Proxy ({autonomous_system.strip()})",
                "ResProxy",
                Rating.BAD,
                provenance,
            )
        )
    return entries


def iter_ipv4_prefixes(payload: object) -> Iterator[str]:
    """Walk a JSON document and yield every ``ipv4Prefix`` value."""

    if isinstance(payload, Mapping):
        prefix = payload.get("ipv4Prefix")
        if isinstance(prefix, str):
            yield prefix
        for value in payload.values():
            yield from iter_ipv4_prefixes(value)
    elif isinstance(payload, Sequence) and not isinstance(payload, str | bytes):
        for value in payload:
            yield from iter_ipv4_prefixes(value)


def scrape_cidrs(text: str) -> list[str]:
    return CIDR_PATTERN.findall(text)


def entries_for_scopes(
    scopes: Iterable[str],
    *,
    kind: EntryKind,
    name: str | None,
    category: str | None,
    rating: Rating,
    provenance: str,
) -> list[ReputationEntry]:
    return [
        ReputationEntry.from_feed(scope, kind, name, category, rating, provenance)
        for scope in scopes
    ]
