"""Reputation feed download settings."""

from __future__ import annotations

from dataclasses import dataclass, field

from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

FEED_TIMEOUT_SECONDS = 15.0
DEFAULT_DIRECTORY_CONCURRENCY = 5


@dataclass(frozen=True, slots=True)
class FeedsConfig:
    resilience: ResilienceConfig = field(
        default_factory=lambda: ResilienceConfig(
            name="feeds",
            timeout_seconds=FEED_TIMEOUT_SECONDS,
            retry=RetryPolicy(),
            ratelimit=RateLimit(max_calls=20, per_seconds=1.0),
            default_headers={"User-Agent": "botrecon"},
        )
    )
    directory_concurrency: int = DEFAULT_DIRECTORY_CONCURRENCY


def get_feeds_config() -> FeedsConfig:
    return FeedsConfig()
