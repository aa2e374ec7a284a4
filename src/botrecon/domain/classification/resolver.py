"""Resolve an address / user-agent pair into a single classification."""

from __future__ import annotations

from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING, Final

from botrecon.domain.intelligence import merge_entries
from botrecon.domain.model import (
    NOT_A_BOT,
    UNCATEGORIZED,
    UNKNOWN_NAME,
    Classification,
    DatacenterTag,
    Rating,
)

from .user_agent import normalize_label

if TYPE_CHECKING:
    from botrecon.domain.intelligence import IpIntelligenceIndex
    from botrecon.domain.model import ReputationEntry
    from botrecon.domain.ports import BotMatcher

log = getLogger(__name__)

IP_LIST_SOURCE: Final[str] = "IP List"
USER_AGENT_SOURCE: Final[str] = "User Agent"
CRAWLER_CATEGORY: Final[str] = "Crawler"
UNKNOWN_CATEGORY: Final[str] = "Unknown"

# labels some feeds use in place of a real name
UNTAGGED_NAMES: Final[frozenset[str]] = frozenset(
    {UNKNOWN_NAME, UNCATEGORIZED, "Firehol Blocklist", "Avastel Blocklist"}
)

_GOOD_BOT_BY_RATING: Final[dict[Rating, bool | None]] = {
    Rating.GOOD: True,
    Rating.BAD: False,
    Rating.NEUTRAL: None,
}


def scrub_name(name: str | None) -> str | None:
    if name is None or name in UNTAGGED_NAMES:
        return None
    return name


class ClassificationResolver:
    """Combine IP intelligence with user-agent matching.

    ``classify`` never raises on malformed input: missing or unparsable
    addresses simply produce no IP-based match.
    """

    def __init__(self, index: IpIntelligenceIndex, matcher: BotMatcher) -> None:
        self._index = index
        self._matcher = matcher

    def match_address(self, address: str | None) -> ReputationEntry | None:
        if not address:
            return None
        exact = self._index.lookup_exact(address)
        ranged = self._index.lookup_range(address)
        if exact is None:
            return ranged
        if ranged is None:
            return exact
        merged = merge_entries(exact, ranged)
        tag = _datacenter_tag(exact, ranged)
        if merged.is_bot and tag is not None:
            # the exact side keeps its datacenter name over the range's
            return replace(merged, datacenter=tag)
        return merged

    def classify(self, address: str | None, user_agent: str | None) -> Classification:
        match = self.match_address(address)
        result = _classify_entry(match) if match is not None else NOT_A_BOT

        if not result.is_bot and user_agent:
            result = self._classify_user_agent(result, user_agent)

        log.debug("Classified %s / %r as %s", address, user_agent, result)
        return result

    def _classify_user_agent(self, result: Classification, user_agent: str) -> Classification:
        if not self._matcher.matches(user_agent):
            return result
        label = normalize_label(self._matcher.best_label(user_agent), user_agent)
        return Classification(
            is_bot=True,
            is_good_bot=True,
            bot_name=label,
            bot_category=CRAWLER_CATEGORY,
            bot_source=USER_AGENT_SOURCE,
            is_datacenter=result.is_datacenter,
            datacenter_name=result.datacenter_name,
        )


def _datacenter_tag(exact: ReputationEntry, ranged: ReputationEntry) -> DatacenterTag | None:
    for entry in (exact, ranged):
        if entry.datacenter is not None:
            return entry.datacenter
        if entry.is_datacenter:
            return DatacenterTag(entry.name)
    return None


def _classify_entry(match: ReputationEntry) -> Classification:
    is_bot = match.is_bot
    is_datacenter = match.is_datacenter or match.datacenter is not None

    datacenter_name: str | None = None
    if match.datacenter is not None:
        datacenter_name = match.datacenter.name
    elif match.is_datacenter:
        datacenter_name = match.name

    if not is_bot:
        return Classification(
            is_datacenter=is_datacenter,
            datacenter_name=scrub_name(datacenter_name),
        )

    return Classification(
        is_bot=True,
        is_good_bot=_GOOD_BOT_BY_RATING[match.rating],
        bot_name=scrub_name(match.name),
        bot_category=scrub_name(match.category) or UNKNOWN_CATEGORY,
        bot_source=match.provenance or IP_LIST_SOURCE,
        is_datacenter=is_datacenter,
        datacenter_name=scrub_name(datacenter_name),
    )
