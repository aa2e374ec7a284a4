from __future__ import annotations

from botrecon.domain.delivery import RunStats
from botrecon.domain.model import Classification, PersonRecord, RecordState
from botrecon.domain.model import records as props
from botrecon.domain.reconciliation import ReconciliationPlan


def _plan(classification: Classification, patch: dict[str, object]) -> ReconciliationPlan:
    return ReconciliationPlan(
        classification=classification,
        distinct_id="d1",
        effective_identity="d1",
        patch=patch,
    )


def test_counts_new_good_bot() -> None:
    stats = RunStats()
    record = PersonRecord(record_id="p1", distinct_id="d1", current_address="66.249.66.1")
    classification = Classification(
        is_bot=True, is_good_bot=True, bot_name="Googlebot", bot_category="Search Engine"
    )

    stats.record(
        record,
        _plan(
            classification,
            {props.IS_BOT: True, props.INITIAL_ADDRESS: "66.249.66.1", props.LATEST_ADDRESS: "66.249.66.1"},
        ),
    )

    assert stats.processed == 1
    assert stats.modified == 1
    assert stats.bots_found == 1
    assert stats.bots_with_names == 1
    assert stats.good_bots_new == 1
    assert stats.initial_addresses_new == 1
    assert stats.latest_addresses_new == 1


def test_counts_already_tagged_bad_bot_and_datacenter() -> None:
    stats = RunStats()
    record = PersonRecord(
        record_id="p1",
        distinct_id="d1",
        current_address="203.0.113.9",
        state=RecordState(
            is_bot="true",
            is_good_bot="false",
            datacenter="ExampleCloud",
            initial_address="203.0.113.9",
            latest_address="203.0.113.9",
        ),
    )
    classification = Classification(
        is_bot=True, is_good_bot=False, is_datacenter=True, datacenter_name="ExampleCloud"
    )

    stats.record(record, _plan(classification, {}))

    assert stats.modified == 0
    assert stats.bad_bots_already == 1
    assert stats.datacenters_already == 1
    assert stats.initial_addresses_already == 1
    assert stats.latest_addresses_already == 1


def test_summary_reports_abort() -> None:
    stats = RunStats(processed=3, aborted=True, errors=2)

    lines = stats.summary_lines()

    assert lines[0].startswith("Run aborted early: 3 persons processed")
    assert any("errors: 2" in line for line in lines)


def test_latest_address_compared_loosely() -> None:
    stats = RunStats()
    record = PersonRecord(
        record_id="p1",
        distinct_id="d1",
        current_address="192.0.2.200",
        state=RecordState(is_bot="false", latest_address=" 192.0.2.200 "),
    )

    stats.record(record, _plan(Classification(), {}))

    assert stats.latest_addresses_already == 1
    assert stats.latest_addresses_new == 0
