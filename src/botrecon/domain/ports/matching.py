"""Port for user-agent bot signature matching."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class BotMatcher(Protocol):
    """Capability reporting whether a user-agent string belongs to a known bot."""

    def matches(self, user_agent: str) -> bool: ...

    def best_label(self, user_agent: str) -> str | None: ...


__all__ = ["BotMatcher"]
