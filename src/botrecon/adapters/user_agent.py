"""User-agent bot matching backed by the ``user-agents`` parser."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import TYPE_CHECKING, Final

from user_agents import parse as parse_ua

if TYPE_CHECKING:
    from user_agents.parsers import UserAgent

    from botrecon.domain.ports import BotMatcher

_UNKNOWN_FAMILY: Final[str] = "Other"

# automation clients that ua-parser does not flag as spiders
_CLIENT_PATTERNS: Final[tuple[re.Pattern[str], ...]] = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"(curl)/",
        r"(wget)/",
        r"(python-requests)",
        r"(python-urllib)",
        r"(Go-http-client)",
        r"(scrapy)",
        r"(aiohttp)",
        r"(node-fetch)",
        r"(axios)/",
        r"(libwww-perl)",
        r"(HeadlessChrome)",
        r"(PhantomJS)",
    )
)
_BOT_TOKEN: Final[re.Pattern[str]] = re.compile(
    r"([\w.\-]*(?:bot|crawler|spider|slurp|fetcher|archiver)[\w.\-]*)", re.IGNORECASE
)


@lru_cache(maxsize=4096)
def _parse(user_agent: str) -> UserAgent:
    return parse_ua(user_agent)


class UserAgentsBotMatcher:
    def matches(self, user_agent: str) -> bool:
        if not user_agent.strip():
            return False
        if _parse(user_agent).is_bot:
            return True
        return any(pattern.search(user_agent) for pattern in _CLIENT_PATTERNS)

    def best_label(self, user_agent: str) -> str | None:
        family = _parse(user_agent).browser.family
        if family and family != _UNKNOWN_FAMILY:
            return family
        for pattern in _CLIENT_PATTERNS:
            found = pattern.search(user_agent)
            if found:
                return found.group(1)
        token = _BOT_TOKEN.search(user_agent)
        return token.group(1) if token else None


if TYPE_CHECKING:
    _matcher_check: BotMatcher = UserAgentsBotMatcher()
