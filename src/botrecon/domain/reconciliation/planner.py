"""Compute the minimal property patch that converges a record with its classification."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Final

from botrecon.domain.model import records as props

from .normalize import is_truthy, values_match
from .plan import ReconciliationPlan

if TYPE_CHECKING:
    from botrecon.domain.classification import ClassificationResolver
    from botrecon.domain.model import Classification, PropertyPatch, RecordState

UNKNOWN_BAD_BOT: Final[str] = "Unknown Bad Bot"
NO_ADDRESS: Final[str] = "No IP"


class ReconciliationPlanner:
    def __init__(self, resolver: ClassificationResolver) -> None:
        self._resolver = resolver

    def plan(
        self,
        classification: Classification,
        *,
        distinct_id: str,
        raw_address: str | None,
        previous_address: str | None,
        state: RecordState,
        user_agent: str | None = None,
    ) -> ReconciliationPlan:
        """Plan the update for one record.

        ``classification`` is keyed on ``raw_address`` (the most recent address);
        ``previous_address`` is the record's initial address, re-checked when the
        most recent one yields no bot.
        """

        final = self._recheck_previous(classification, raw_address, previous_address, user_agent)
        candidates = _candidate_properties(final, raw_address, state)
        patch: PropertyPatch = {
            name: value
            for name, value in candidates.items()
            if _should_write(name, value, state)
        }
        return ReconciliationPlan(
            classification=final,
            distinct_id=distinct_id,
            effective_identity=_effective_identity(final, distinct_id, raw_address),
            patch=patch,
        )

    def _recheck_previous(
        self,
        classification: Classification,
        raw_address: str | None,
        previous_address: str | None,
        user_agent: str | None,
    ) -> Classification:
        if classification.is_bot or not previous_address or previous_address == raw_address:
            return classification

        earlier = self._resolver.classify(previous_address, user_agent)
        result = classification
        if earlier.is_bot:
            result = earlier
            if not earlier.is_datacenter and classification.is_datacenter:
                result = replace(
                    earlier,
                    is_datacenter=True,
                    datacenter_name=classification.datacenter_name,
                )
        elif earlier.is_datacenter and not classification.is_datacenter:
            result = replace(
                classification,
                is_datacenter=True,
                datacenter_name=earlier.datacenter_name,
            )
        return result


def _candidate_properties(
    classification: Classification,
    raw_address: str | None,
    state: RecordState,
) -> PropertyPatch:
    candidates: PropertyPatch = {
        props.IS_BOT: classification.is_bot,
        props.IS_GOOD_BOT: classification.is_good_bot if classification.is_bot else None,
        props.BOT_NAME: classification.bot_name,
        props.BOT_TYPE: classification.bot_category,
        props.BOT_SOURCE: classification.bot_source,
        props.DATACENTER: classification.datacenter_name,
    }

    if raw_address and not values_match(raw_address, state.latest_address):
        if not state.initial_address:
            candidates[props.INITIAL_ADDRESS] = raw_address
        candidates[props.LATEST_ADDRESS] = raw_address

    if raw_address and not classification.is_bot and not classification.is_datacenter:
        candidates[props.LATEST_NONPROXY_ADDRESS] = raw_address

    return candidates


def _should_write(name: str, value: object, state: RecordState) -> bool:
    if value is None:
        return False
    stored = state.stored_value(name)
    if values_match(value, stored):
        return False
    # a confirmed bot is never downgraded
    return not (name == props.IS_BOT and value is False and is_truthy(stored))


def _effective_identity(
    classification: Classification,
    distinct_id: str,
    raw_address: str | None,
) -> str:
    if not classification.is_bot:
        return distinct_id
    if classification.is_good_bot and classification.bot_name:
        return classification.bot_name
    if classification.is_good_bot is False:
        return f"{classification.bot_name or UNKNOWN_BAD_BOT} ({raw_address or NO_ADDRESS})"
    return distinct_id
