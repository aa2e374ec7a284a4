"""Per-lookup classification produced by the resolver."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True, kw_only=True)
class Classification:
    is_bot: bool = False
    is_good_bot: bool | None = None
    bot_name: str | None = None
    bot_category: str | None = None
    bot_source: str | None = None
    is_datacenter: bool = False
    datacenter_name: str | None = None

    @property
    def is_bad_bot(self) -> bool:
        return self.is_bot and self.is_good_bot is False


NOT_A_BOT = Classification()
