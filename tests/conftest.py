from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from botrecon.domain.classification import ClassificationResolver
from botrecon.domain.intelligence import build_index
from botrecon.domain.model import EntryKind, Rating, ReputationEntry
from botrecon.domain.reconciliation import ReconciliationPlanner

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping


class FakeBotMatcher:
    """Matches only the user agents it was given, returning the mapped label."""

    def __init__(self, labels: Mapping[str, str | None] | None = None) -> None:
        self._labels = dict(labels or {})
        self.calls: list[str] = []

    def matches(self, user_agent: str) -> bool:
        self.calls.append(user_agent)
        return user_agent in self._labels

    def best_label(self, user_agent: str) -> str | None:
        return self._labels.get(user_agent)


def make_entry(
    scope: str,
    *,
    kind: EntryKind = EntryKind.BOT,
    name: str | None = None,
    category: str | None = None,
    rating: Rating = Rating.NEUTRAL,
    provenance: str = "test-feed",
) -> ReputationEntry:
    return ReputationEntry.from_feed(scope, kind, name, category, rating, provenance)


GOOGLEBOT_UA = "Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)"


@pytest.fixture
def entry_factory() -> Callable[..., ReputationEntry]:
    return make_entry


@pytest.fixture
def matcher_factory() -> Callable[..., FakeBotMatcher]:
    return FakeBotMatcher


@pytest.fixture
def reference_entries() -> list[ReputationEntry]:
    return [
        make_entry(
            "66.249.64.0/19",
            name="Googlebot",
            category="Search Engine",
            rating=Rating.GOOD,
            provenance="Official-Source",
        ),
        make_entry(
            "198.51.100.9",
            name="Firehol Blocklist",
            category="Malicious",
            rating=Rating.BAD,
            provenance="Firehol",
        ),
        make_entry(
            "192.0.2.44",
            name="Residential Proxy (AS64500)",
            category="ResProxy",
            rating=Rating.BAD,
            provenance="Avastel",
        ),
        make_entry(
            "203.0.113.0/24",
            kind=EntryKind.DATACENTER,
            name="ExampleCloud",
            category="Datacenter",
            provenance="Hexydec-Datacenters",
        ),
        make_entry(
            "100.64.0.0/16",
            name="Uncategorized",
            category="Uncategorized",
            provenance="PostHog-Bot-List",
        ),
    ]


@pytest.fixture
def resolver(reference_entries: list[ReputationEntry]) -> ClassificationResolver:
    return ClassificationResolver(
        build_index(reference_entries),
        FakeBotMatcher({GOOGLEBOT_UA: "Googlebot"}),
    )


@pytest.fixture
def planner(resolver: ClassificationResolver) -> ReconciliationPlanner:
    return ReconciliationPlanner(resolver)
