"""Build the IP intelligence index from a set of feeds."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from botrecon.domain.intelligence import IndexBuilder

if TYPE_CHECKING:
    from collections.abc import Sequence

    from botrecon.domain.intelligence import IpIntelligenceIndex
    from botrecon.domain.ports import ReputationFeed

log = getLogger(__name__)


async def load_index(feeds: Sequence[ReputationFeed]) -> IpIntelligenceIndex:
    """Download all feeds concurrently, ingest them in catalog order, then freeze.

    Ingesting in catalog order keeps first-writer-wins merges deterministic
    regardless of which download finishes first.
    """

    results = await asyncio.gather(*(feed.load() for feed in feeds))

    builder = IndexBuilder()
    for feed, entries in zip(feeds, results, strict=True):
        accepted = builder.ingest_many(entries)
        log.info("Loaded %s: %s entries (%s accepted)", feed.name, len(entries), accepted)
    return builder.freeze()
