"""Downloadable reputation feeds.

Every feed is best-effort: a failed download is logged and contributes no
entries, so one unreachable list never blocks a run.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from logging import getLogger
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from botrecon.domain.model import EntryKind, Rating

from .parsers import (
    entries_for_scopes,
    iter_ipv4_prefixes,
    parse_avastel,
    parse_line_list,
    parse_range_list,
    scrape_cidrs,
)
from .schema import GitTree

if TYPE_CHECKING:
    from collections.abc import Callable

    from botrecon.adapters.http_resilience import ResilientClient
    from botrecon.domain.model import ReputationEntry
    from botrecon.domain.ports import ReputationFeed

log = getLogger(__name__)


async def _download(client: ResilientClient, url: str) -> httpx.Response | None:
    try:
        response = await client.get(url)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        log.warning("Failed to fetch %s: %s", url, exc)
        return None
    return response


async def fetch_text(client: ResilientClient, url: str) -> str | None:
    response = await _download(client, url)
    return None if response is None else response.text


async def fetch_json(client: ResilientClient, url: str) -> object | None:
    response = await _download(client, url)
    if response is None:
        return None
    try:
        return response.json()
    except ValueError:
        log.warning("Feed %s did not return JSON", url)
        return None


@dataclass(slots=True)
class LineListFeed:
    """Plain list of addresses / CIDR ranges, one per line."""

    name: str
    url: str
    client: ResilientClient
    kind: EntryKind
    label: str | None
    category: str | None
    rating: Rating

    async def load(self) -> list[ReputationEntry]:
        text = await fetch_text(self.client, self.url)
        if text is None:
            return []
        return parse_line_list(
            text,
            kind=self.kind,
            name=self.label,
            category=self.category,
            rating=self.rating,
            provenance=self.name,
        )


@dataclass(slots=True)
class RangeListFeed:
    """JSON array of ``{"range": ..., "name": ...}`` objects."""

    name: str
    url: str
    client: ResilientClient
    kind: EntryKind
    category: str | None
    rating: Rating

    async def load(self) -> list[ReputationEntry]:
        payload = await fetch_json(self.client, self.url)
        if payload is None:
            return []
        return parse_range_list(
            payload,
            kind=self.kind,
            category=self.category,
            rating=self.rating,
            provenance=self.name,
        )


@dataclass(slots=True)
class AvastelFeed:
    url: str
    client: ResilientClient
    name: str = "Avastel"

    async def load(self) -> list[ReputationEntry]:
        text = await fetch_text(self.client, self.url)
        if text is None:
            return []
        entries = parse_avastel(text, provenance=self.name)
        log.info("Loaded %s high-confidence proxies from %s", len(entries), self.name)
        return entries


@dataclass(slots=True, frozen=True)
class OfficialRanges:
    bot_name: str
    url: str
    category: str


@dataclass(slots=True)
class OfficialPrefixFeed:
    """Crawler operators publishing their ranges as JSON ``ipv4Prefix`` objects."""

    sources: tuple[OfficialRanges, ...]
    client: ResilientClient
    name: str = "Official-Source"

    async def load(self) -> list[ReputationEntry]:
        payloads = await asyncio.gather(
            *(fetch_json(self.client, source.url) for source in self.sources)
        )
        entries: list[ReputationEntry] = []
        for source, payload in zip(self.sources, payloads, strict=True):
            if payload is None:
                continue
            entries.extend(
                entries_for_scopes(
                    iter_ipv4_prefixes(payload),
                    kind=EntryKind.BOT,
                    name=source.bot_name,
                    category=source.category,
                    rating=Rating.GOOD,
                    provenance=self.name,
                )
            )
        return entries


@dataclass(slots=True)
class ScrapedCidrFeed:
    """CIDR ranges scraped from a documentation page."""

    name: str
    url: str
    client: ResilientClient
    bot_name: str
    category: str

    async def load(self) -> list[ReputationEntry]:
        text = await fetch_text(self.client, self.url)
        if text is None:
            return []
        return entries_for_scopes(
            scrape_cidrs(text),
            kind=EntryKind.BOT,
            name=self.bot_name,
            category=self.category,
            rating=Rating.GOOD,
            provenance=self.name,
        )


type PathFilter = Callable[[str], bool]
type PathLabeller = Callable[[str], tuple[str | None, str | None]]


@dataclass(slots=True)
class GitHubDirectoryFeed:
    """A GitHub repository whose files are individual address lists.

    ``labeller`` maps a file path to ``(name, category)`` for its entries.
    """

    name: str
    tree_url: str
    raw_base_url: str
    client: ResilientClient
    include: PathFilter
    labeller: PathLabeller
    rating: Rating
    name_from_comment: bool = False
    concurrency: int = 5

    async def load(self) -> list[ReputationEntry]:
        payload = await fetch_json(self.client, self.tree_url)
        if payload is None:
            return []
        try:
            tree = GitTree.model_validate(payload)
        except ValidationError:
            log.warning("Unexpected tree listing for %s", self.name)
            return []

        paths = [item.path for item in tree.tree if item.type == "blob" and self.include(item.path)]
        semaphore = asyncio.Semaphore(self.concurrency)
        chunks = await asyncio.gather(*(self._load_file(path, semaphore) for path in paths))
        entries = [entry for chunk in chunks for entry in chunk]
        log.info("Loaded %s entries from %s files of %s", len(entries), len(paths), self.name)
        return entries

    async def _load_file(
        self, path: str, semaphore: asyncio.Semaphore
    ) -> list[ReputationEntry]:
        async with semaphore:
            text = await fetch_text(self.client, f"{self.raw_base_url.rstrip('/')}/{path}")
        if text is None:
            return []
        label, category = self.labeller(path)
        return parse_line_list(
            text,
            kind=EntryKind.BOT,
            name=label,
            category=category,
            rating=self.rating,
            provenance=self.name,
            name_from_comment=self.name_from_comment,
        )


def _goodbots_path(path: str) -> bool:
    return path.startswith("iplists/") and path.endswith(".ips")


def _goodbots_label(path: str) -> tuple[str | None, str | None]:
    return PurePosixPath(path).stem, "Crawler"


_SHADOW_WHISPERER_DIRS = ("BruteForce", "Malware", "Other")


def _shadow_whisperer_path(path: str) -> bool:
    return (
        any(path.startswith(f"{directory}/") for directory in _SHADOW_WHISPERER_DIRS)
        and not path.endswith((".md", ".json"))
        and "LICENSE" not in path
    )


def _shadow_whisperer_label(path: str) -> tuple[str | None, str | None]:
    parts = PurePosixPath(path).parts
    return parts[-1], parts[0]


OFFICIAL_RANGES: tuple[OfficialRanges, ...] = (
    OfficialRanges(
        "Googlebot",
        "https://developers.google.com/static/search/apis/ipranges/googlebot.json",
        "Search Engine",
    ),
    OfficialRanges("Bingbot", "https://www.bing.com/toolbox/bingbot.json", "Search Engine"),
    OfficialRanges("GPTBot", "https://openai.com/gptbot.json", "AI Training"),
    OfficialRanges("ChatGPT-User", "https://openai.com/chatgpt-user.json", "AI User"),
    OfficialRanges("PerplexityBot", "https://www.perplexity.ai/perplexitybot.json", "AI Training"),
)

_RAW = "https://raw.githubusercontent.com"


def default_feeds(client: ResilientClient, *, concurrency: int = 5) -> list[ReputationFeed]:
    """The feed catalog, in ingestion order."""

    return [
        RangeListFeed(
            name="Hexydec-Crawlers",
            url=f"{_RAW}/hexydec/ip-ranges/main/output/crawlers.json",
            client=client,
            kind=EntryKind.BOT,
            category="Crawler",
            rating=Rating.GOOD,
        ),
        RangeListFeed(
            name="Hexydec-Datacenters",
            url=f"{_RAW}/hexydec/ip-ranges/main/output/datacentres.json",
            client=client,
            kind=EntryKind.DATACENTER,
            category="Datacenter",
            rating=Rating.NEUTRAL,
        ),
        GitHubDirectoryFeed(
            name="GoodBots",
            tree_url="https://api.github.com/repos/AnTheMaker/GoodBots/git/trees/main?recursive=1",
            raw_base_url=f"{_RAW}/AnTheMaker/GoodBots/main",
            client=client,
            include=_goodbots_path,
            labeller=_goodbots_label,
            rating=Rating.GOOD,
            concurrency=concurrency,
        ),
        AvastelFeed(
            url=(
                f"{_RAW}/antoinevastel/avastel-bot-ips-lists/refs/heads/master/"
                "avastel-proxy-bot-ips-blocklist-8days.txt"
            ),
            client=client,
        ),
        LineListFeed(
            name="Firehol",
            url=f"{_RAW}/ktsaou/blocklist-ipsets/master/firehol_level1.netset",
            client=client,
            kind=EntryKind.BOT,
            label="Firehol Blocklist",
            category="Malicious",
            rating=Rating.BAD,
        ),
        GitHubDirectoryFeed(
            name="ShadowWhisperer",
            tree_url="https://api.github.com/repos/ShadowWhisperer/IPs/git/trees/master?recursive=1",
            raw_base_url=f"{_RAW}/ShadowWhisperer/IPs/master",
            client=client,
            include=_shadow_whisperer_path,
            labeller=_shadow_whisperer_label,
            rating=Rating.BAD,
            name_from_comment=True,
            concurrency=concurrency,
        ),
        OfficialPrefixFeed(sources=OFFICIAL_RANGES, client=client),
        ScrapedCidrFeed(
            name="Anthropic",
            url="https://platform.claude.com/docs/en/api/ip-addresses",
            client=client,
            bot_name="ClaudeBot",
            category="AI Training",
        ),
        LineListFeed(
            name="PostHog-Bot-List",
            url=f"{_RAW}/PostHog/posthog/refs/heads/master/nodejs/assets/bot-ips.txt",
            client=client,
            kind=EntryKind.BOT,
            label=None,
            category="Crawler",
            rating=Rating.GOOD,
        ),
    ]
