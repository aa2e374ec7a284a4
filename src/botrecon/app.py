"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from botrecon.adapters.feeds import default_feeds, load_index
from botrecon.adapters.http_resilience import ResilientClient
from botrecon.adapters.posthog import PostHogClient, PostHogEventSink, PostHogRecordSource
from botrecon.adapters.user_agent import UserAgentsBotMatcher
from botrecon.config import get_feeds_config, get_posthog_config, get_sync_config
from botrecon.domain.classification import ClassificationResolver
from botrecon.domain.delivery import PipelineSettings, ReconciliationPipeline
from botrecon.domain.reconciliation import ReconciliationPlanner

if TYPE_CHECKING:
    from botrecon.config import FeedsConfig, PostHogConfig, ResilienceConfig
    from botrecon.domain.delivery import RunStats
    from botrecon.domain.intelligence import IpIntelligenceIndex
    from botrecon.domain.model import Classification
    from botrecon.domain.ports import BotMatcher, ReputationFeed

type ClientFactory = Callable[[ResilienceConfig], ResilientClient]
type FeedsFactory = Callable[[ResilientClient], list[ReputationFeed]]

log = getLogger(__name__)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


async def build_index_async(
    *,
    feeds_config: FeedsConfig | None = None,
    feeds_factory: FeedsFactory | None = None,
    client_factory: ClientFactory | None = None,
) -> IpIntelligenceIndex:
    """Download every reputation feed and return the frozen index."""

    config = feeds_config or get_feeds_config()
    make_client = client_factory or _default_client_factory
    log.info("Loading bot data sources from live URLs...")
    async with make_client(config.resilience) as client:
        feeds = (
            feeds_factory(client)
            if feeds_factory is not None
            else default_feeds(client, concurrency=config.directory_concurrency)
        )
        index = await load_index(feeds)
    log.info(
        "Total loaded: %s single IPs, %s CIDR ranges", index.exact_count, index.range_count
    )
    return index


def build_index(
    *,
    feeds_config: FeedsConfig | None = None,
    feeds_factory: FeedsFactory | None = None,
    client_factory: ClientFactory | None = None,
) -> IpIntelligenceIndex:
    return asyncio.run(
        build_index_async(
            feeds_config=feeds_config,
            feeds_factory=feeds_factory,
            client_factory=client_factory,
        )
    )


def reconcile_persons(
    *,
    dry_run: bool = False,
    page_size: int | None = None,
    batch_size: int | None = None,
    index: IpIntelligenceIndex | None = None,
    posthog_config: PostHogConfig | None = None,
    client_factory: ClientFactory | None = None,
    matcher: BotMatcher | None = None,
) -> RunStats:
    """Classify every person and push the resulting updates to PostHog."""

    return asyncio.run(
        _reconcile_async(
            dry_run=dry_run,
            page_size=page_size,
            batch_size=batch_size,
            index=index,
            posthog_config=posthog_config,
            client_factory=client_factory,
            matcher=matcher,
        )
    )


async def _reconcile_async(
    *,
    dry_run: bool,
    page_size: int | None,
    batch_size: int | None,
    index: IpIntelligenceIndex | None,
    posthog_config: PostHogConfig | None,
    client_factory: ClientFactory | None,
    matcher: BotMatcher | None,
) -> RunStats:
    config = posthog_config or get_posthog_config()
    sync_config = get_sync_config()
    make_client = client_factory or _default_client_factory

    effective_index = index or await build_index_async(client_factory=client_factory)
    resolver = ClassificationResolver(effective_index, matcher or UserAgentsBotMatcher())
    settings = PipelineSettings(
        page_size=page_size or sync_config.page_size,
        batch_size=batch_size or sync_config.batch_size,
        dry_run=dry_run,
        progress_every=sync_config.progress_every,
    )

    async with make_client(config.resilience) as http:
        client = PostHogClient(config=config, client=http)
        pipeline = ReconciliationPipeline(
            source=PostHogRecordSource(client),
            sink=PostHogEventSink(client),
            resolver=resolver,
            planner=ReconciliationPlanner(resolver),
            settings=settings,
        )
        return await pipeline.run_async()


def classify_address(
    address: str | None,
    user_agent: str | None = None,
    *,
    index: IpIntelligenceIndex | None = None,
    matcher: BotMatcher | None = None,
) -> Classification:
    """Classify a single address / user-agent pair against freshly loaded feeds."""

    effective_index = index or build_index()
    resolver = ClassificationResolver(effective_index, matcher or UserAgentsBotMatcher())
    return resolver.classify(address, user_agent)
