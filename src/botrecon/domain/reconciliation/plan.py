"""Plan produced for one record by the reconciliation planner."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from botrecon.domain.model import EventKind, OutboundEvent

if TYPE_CHECKING:
    from botrecon.domain.model import Classification, PropertyPatch


@dataclass(slots=True, frozen=True, kw_only=True)
class ReconciliationPlan:
    """Minimal patch plus the identity it should be recorded under.

    ``classification`` is the final classification after the initial-address
    re-check, which can differ from the one handed to the planner.
    """

    classification: Classification
    distinct_id: str
    effective_identity: str
    patch: PropertyPatch

    @property
    def identity_changed(self) -> bool:
        return self.effective_identity != self.distinct_id

    @property
    def event_kind(self) -> EventKind | None:
        if self.identity_changed:
            return EventKind.IDENTIFY
        if self.patch:
            return EventKind.SET
        return None

    @property
    def event(self) -> OutboundEvent | None:
        kind = self.event_kind
        if kind is None:
            return None
        return OutboundEvent(
            kind=kind,
            distinct_id=self.effective_identity,
            patch=dict(self.patch),
            alias=self.distinct_id if kind is EventKind.IDENTIFY else None,
        )
