"""Identity records read from, and events written to, the analytics platform."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from .enums import EventKind

type PropertyPatch = dict[str, object]

IS_BOT: Final[str] = "is_bot"
IS_GOOD_BOT: Final[str] = "is_good_bot"
BOT_NAME: Final[str] = "bot_name"
BOT_TYPE: Final[str] = "bot_type"
BOT_SOURCE: Final[str] = "bot_identification_source"
DATACENTER: Final[str] = "datacenter"
INITIAL_ADDRESS: Final[str] = "initial_address"
LATEST_ADDRESS: Final[str] = "latest_address"
LATEST_NONPROXY_ADDRESS: Final[str] = "latest_nonproxy_address"


@dataclass(slots=True, frozen=True, kw_only=True)
class RecordState:
    """Reputation-relevant properties already stored on a record.

    Values are kept exactly as the platform returned them; comparisons go
    through :func:`botrecon.domain.reconciliation.normalize.normalize_value`.
    """

    is_bot: object = None
    is_good_bot: object = None
    initial_address: str | None = None
    latest_address: str | None = None
    datacenter: object = None
    latest_nonproxy_address: str | None = None
    bot_name: object = None
    bot_category: object = None
    bot_source: object = None

    def stored_value(self, prop: str) -> object:
        return {
            IS_BOT: self.is_bot,
            IS_GOOD_BOT: self.is_good_bot,
            BOT_NAME: self.bot_name,
            BOT_TYPE: self.bot_category,
            BOT_SOURCE: self.bot_source,
            DATACENTER: self.datacenter,
            INITIAL_ADDRESS: self.initial_address,
            LATEST_ADDRESS: self.latest_address,
            LATEST_NONPROXY_ADDRESS: self.latest_nonproxy_address,
        }[prop]


@dataclass(slots=True, frozen=True, kw_only=True)
class PersonRecord:
    record_id: str
    distinct_id: str
    current_address: str | None = None
    current_user_agent: str | None = None
    state: RecordState = field(default_factory=RecordState)


@dataclass(slots=True, frozen=True, kw_only=True)
class OutboundEvent:
    kind: EventKind
    distinct_id: str
    patch: PropertyPatch
    alias: str | None = None
