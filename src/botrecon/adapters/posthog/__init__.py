"""Public interface for the PostHog adapter."""

from __future__ import annotations

from .client import (
    PostHogAPIError,
    PostHogClient,
    PostHogEventSink,
    PostHogRecordSource,
    parse_retry_after,
)
from .schema import BatchEvent, HogQLQueryResponse, PersonRow
from .translator import build_person_query, parse_person_row, to_batch_event

__all__ = [
    "BatchEvent",
    "HogQLQueryResponse",
    "PersonRow",
    "PostHogAPIError",
    "PostHogClient",
    "PostHogEventSink",
    "PostHogRecordSource",
    "build_person_query",
    "parse_person_row",
    "parse_retry_after",
    "to_batch_event",
]
