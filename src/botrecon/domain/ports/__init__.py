"""Domain ports implemented by adapters."""

from __future__ import annotations

from .delivery import EventSink, TransportStatusError
from .fetching import RecordSource, ReputationFeed
from .matching import BotMatcher

__all__ = [
    "BotMatcher",
    "EventSink",
    "RecordSource",
    "ReputationFeed",
    "TransportStatusError",
]
