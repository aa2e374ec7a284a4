"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EntryKind(StrEnum):
    BOT = "bot"
    DATACENTER = "datacenter"


class Rating(StrEnum):
    GOOD = "good"
    BAD = "bad"
    NEUTRAL = "neutral"


class EventKind(StrEnum):
    """How a planned update is delivered to the analytics platform."""

    SET = "set"
    IDENTIFY = "identify"
