"""IP intelligence index built from reputation feeds."""

from __future__ import annotations

from .addresses import canonical_ipv4, parse_cidr, parse_ipv4
from .index import (
    AddressRange,
    IndexBuilder,
    IndexFrozenError,
    IpIntelligenceIndex,
    build_index,
)
from .merge import merge_entries

__all__ = [
    "AddressRange",
    "IndexBuilder",
    "IndexFrozenError",
    "IpIntelligenceIndex",
    "build_index",
    "canonical_ipv4",
    "merge_entries",
    "parse_cidr",
    "parse_ipv4",
]
