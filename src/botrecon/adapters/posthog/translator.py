"""Translate between PostHog payloads and domain records/events."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from botrecon.domain.model import EventKind, PersonRecord, RecordState
from botrecon.domain.model import records as props

from .schema import BatchEvent, BatchEventProperties, PersonRow

if TYPE_CHECKING:
    from botrecon.domain.model import OutboundEvent, PropertyPatch

# canonical property name -> PostHog person property
PROPERTY_NAMES: Final[dict[str, str]] = {
    props.INITIAL_ADDRESS: "$initial_ip",
    props.LATEST_ADDRESS: "$latest_ip",
    props.LATEST_NONPROXY_ADDRESS: "$latest_nonproxy_ip",
}

EVENT_NAMES: Final[dict[EventKind, str]] = {
    EventKind.SET: "$set",
    EventKind.IDENTIFY: "$identify",
}

_PERSON_QUERY: Final[str] = """
SELECT
    person.id,
    any(distinct_id),
    any(person.properties.is_bot),
    argMax(properties['$ip'], timestamp),
    argMax(properties['$raw_user_agent'], timestamp),
    any(person.properties['$initial_ip']),
    any(person.properties['$latest_ip']),
    any(person.properties.is_good_bot),
    any(person.properties.datacenter),
    any(person.properties['$latest_nonproxy_ip']),
    any(person.properties.bot_name),
    any(person.properties.bot_type),
    any(person.properties.bot_identification_source)
FROM events
{where}
GROUP BY person.id
ORDER BY person.id
LIMIT {limit}
"""


def quote_literal(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def build_person_query(*, cursor: str | None, limit: int) -> str:
    where = f"WHERE person.id > {quote_literal(cursor)}" if cursor else ""
    return _PERSON_QUERY.format(where=where, limit=int(limit))


def parse_person_row(row: object) -> PersonRecord:
    parsed = PersonRow.model_validate(row)
    return PersonRecord(
        record_id=parsed.person_id,
        distinct_id=parsed.distinct_id,
        current_address=parsed.current_ip,
        current_user_agent=parsed.current_user_agent,
        state=RecordState(
            is_bot=parsed.is_bot,
            is_good_bot=parsed.is_good_bot,
            initial_address=parsed.initial_ip,
            latest_address=parsed.latest_ip,
            datacenter=parsed.datacenter,
            latest_nonproxy_address=parsed.latest_nonproxy_ip,
            bot_name=parsed.bot_name,
            bot_category=parsed.bot_type,
            bot_source=parsed.bot_identification_source,
        ),
    )


def translate_patch(patch: PropertyPatch) -> dict[str, object]:
    return {PROPERTY_NAMES.get(name, name): value for name, value in patch.items()}


def to_batch_event(event: OutboundEvent) -> BatchEvent:
    return BatchEvent(
        event=EVENT_NAMES[event.kind],
        distinct_id=event.distinct_id,
        properties=BatchEventProperties(
            set_=translate_patch(event.patch),
            anon_distinct_id=event.alias,
        ),
    )
