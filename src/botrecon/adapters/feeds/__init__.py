"""Public interface for the reputation feed adapter."""

from __future__ import annotations

from .loader import load_index
from .parsers import (
    iter_ipv4_prefixes,
    parse_avastel,
    parse_line_list,
    parse_range_list,
    scrape_cidrs,
)
from .sources import (
    OFFICIAL_RANGES,
    AvastelFeed,
    GitHubDirectoryFeed,
    LineListFeed,
    OfficialPrefixFeed,
    OfficialRanges,
    RangeListFeed,
    ScrapedCidrFeed,
    default_feeds,
)

__all__ = [
    "OFFICIAL_RANGES",
    "AvastelFeed",
    "GitHubDirectoryFeed",
    "LineListFeed",
    "OfficialPrefixFeed",
    "OfficialRanges",
    "RangeListFeed",
    "ScrapedCidrFeed",
    "default_feeds",
    "iter_ipv4_prefixes",
    "load_index",
    "parse_avastel",
    "parse_line_list",
    "parse_range_list",
    "scrape_cidrs",
]
