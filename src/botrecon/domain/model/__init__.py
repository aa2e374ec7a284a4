"""Domain model for reputation facts, classifications and identity records."""

from __future__ import annotations

from .classification import NOT_A_BOT, Classification
from .enums import EntryKind, EventKind, Rating
from .records import OutboundEvent, PersonRecord, PropertyPatch, RecordState
from .reputation import UNCATEGORIZED, UNKNOWN_NAME, DatacenterTag, ReputationEntry

__all__ = [
    "NOT_A_BOT",
    "UNCATEGORIZED",
    "UNKNOWN_NAME",
    "Classification",
    "DatacenterTag",
    "EntryKind",
    "EventKind",
    "OutboundEvent",
    "PersonRecord",
    "PropertyPatch",
    "Rating",
    "RecordState",
    "ReputationEntry",
]
