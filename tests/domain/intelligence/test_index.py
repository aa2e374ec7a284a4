from __future__ import annotations

import pytest

from botrecon.domain.intelligence import IndexBuilder, IndexFrozenError, build_index
from botrecon.domain.model import DatacenterTag, EntryKind, Rating, ReputationEntry


def _entry(scope: str, name: str | None = "Bot", kind: EntryKind = EntryKind.BOT) -> ReputationEntry:
    return ReputationEntry.from_feed(scope, kind, name, "Crawler", Rating.GOOD, "test")


def test_exact_lookup_uses_canonical_address() -> None:
    index = build_index([_entry(" 192.0.2.10 ", name="Exact")])

    found = index.lookup_exact("192.0.2.10")

    assert found is not None
    assert found.name == "Exact"
    assert index.exact_count == 1


def test_range_lookup_includes_both_boundaries() -> None:
    index = build_index([_entry("10.0.0.0/24", name="Net")])

    assert index.lookup_range("10.0.0.0") is not None
    assert index.lookup_range("10.0.0.255") is not None
    assert index.lookup_range("10.0.1.0") is None
    assert index.lookup_range("9.255.255.255") is None


def test_slash_zero_matches_everything_and_slash_32_one_address() -> None:
    everything = build_index([_entry("0.0.0.0/0", name="All")])
    single = build_index([_entry("192.0.2.1/32", name="One")])

    assert everything.lookup_range("0.0.0.0") is not None
    assert everything.lookup_range("255.255.255.255") is not None
    assert single.lookup_range("192.0.2.1") is not None
    assert single.lookup_range("192.0.2.2") is None


def test_nested_ranges_are_found_past_inner_ranges() -> None:
    index = build_index(
        [
            _entry("10.0.0.0/8", name="Outer"),
            _entry("10.1.0.0/16", name="Inner"),
            _entry("10.200.0.0/16", name="Later"),
        ]
    )

    inner = index.lookup_range("10.1.2.3")
    outer = index.lookup_range("10.2.0.1")
    past_all = index.lookup_range("10.250.0.1")

    assert inner is not None and inner.name == "Inner"
    assert outer is not None and outer.name == "Outer"
    assert past_all is not None and past_all.name == "Outer"


def test_lookup_prefers_exact_entry() -> None:
    index = build_index([_entry("10.0.0.0/8", name="Range"), _entry("10.0.0.1", name="Exact")])

    found = index.lookup("10.0.0.1")

    assert found is not None
    assert found.name == "Exact"


def test_malformed_input_never_matches() -> None:
    index = build_index([_entry("10.0.0.0/8")])

    assert index.lookup("not-an-ip") is None
    assert index.lookup(None) is None
    assert index.lookup("") is None


def test_malformed_scopes_are_dropped() -> None:
    builder = IndexBuilder()

    accepted = builder.ingest_many(
        [_entry("10.0.0.0/33"), _entry("banana"), _entry("10.0.0.0/8"), _entry("1.2.3.4")]
    )
    index = builder.freeze()

    assert accepted == 2
    assert builder.dropped == 2
    assert index.range_count == 1
    assert index.exact_count == 1


def test_duplicate_ranges_are_merged() -> None:
    index = build_index(
        [
            _entry("203.0.113.0/24", name="ExampleCloud", kind=EntryKind.DATACENTER),
            _entry("203.0.113.0/24", name="Crawler"),
        ]
    )

    found = index.lookup_range("203.0.113.50")

    assert index.range_count == 1
    assert found is not None
    assert found.kind is EntryKind.BOT
    assert found.datacenter == DatacenterTag("ExampleCloud")


def test_freeze_only_once() -> None:
    builder = IndexBuilder()
    builder.freeze()

    with pytest.raises(IndexFrozenError):
        builder.freeze()


def test_ingest_after_freeze_fails() -> None:
    builder = IndexBuilder()
    builder.freeze()

    with pytest.raises(IndexFrozenError):
        builder.ingest(_entry("10.0.0.1"))
