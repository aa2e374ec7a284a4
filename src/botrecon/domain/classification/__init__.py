"""Per-record bot / datacenter classification."""

from __future__ import annotations

from .resolver import (
    CRAWLER_CATEGORY,
    IP_LIST_SOURCE,
    UNKNOWN_CATEGORY,
    USER_AGENT_SOURCE,
    ClassificationResolver,
    scrub_name,
)
from .user_agent import has_minimal_signal, normalize_label

__all__ = [
    "CRAWLER_CATEGORY",
    "IP_LIST_SOURCE",
    "UNKNOWN_CATEGORY",
    "USER_AGENT_SOURCE",
    "ClassificationResolver",
    "has_minimal_signal",
    "normalize_label",
    "scrub_name",
]
