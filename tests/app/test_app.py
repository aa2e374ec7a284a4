from __future__ import annotations

import json
from typing import TYPE_CHECKING

import httpx

from botrecon.adapters.http_resilience import ResilientClient
from botrecon.app import build_index, classify_address, reconcile_persons
from botrecon.config import FeedsConfig, PostHogConfig, ResilienceConfig
from botrecon.domain.intelligence import build_index as build_static_index

if TYPE_CHECKING:
    from collections.abc import Callable

    from botrecon.domain.model import ReputationEntry

GOOGLEBOT_ROW = [
    "0191-aaaa",
    "abc-123",
    None,
    "66.249.66.1",
    "Googlebot/2.1",
    None,
    None,
    None,
    None,
    None,
    None,
    None,
    None,
]


def _posthog_config() -> PostHogConfig:
    return PostHogConfig(
        api_key="phx_personal",
        project_id="42",
        project_key="phc_project",
        batch_url="https://ingest.posthog.test/batch/",
        resilience=ResilienceConfig(name="posthog", base_url="https://posthog.test", retry=None),
    )


def test_reconcile_persons_end_to_end(
    reference_entries: list[ReputationEntry],
    matcher_factory: Callable[..., object],
) -> None:
    batches: list[dict[str, object]] = []
    queries: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/query/"):
            queries.append(json.loads(request.content)["query"]["query"])
            rows = [GOOGLEBOT_ROW] if len(queries) == 1 else []
            return httpx.Response(200, json={"results": rows})
        batches.append(json.loads(request.content))
        return httpx.Response(200, json={"status": 1})

    def client_factory(config: ResilienceConfig) -> ResilientClient:
        return ResilientClient(config, transport=httpx.MockTransport(handler))

    stats = reconcile_persons(
        index=build_static_index(reference_entries),
        posthog_config=_posthog_config(),
        client_factory=client_factory,
        matcher=matcher_factory(),
    )

    assert stats.processed == 1
    assert stats.delivered == 1
    assert len(queries) == 2
    assert "person.id > '0191-aaaa'" in queries[1]

    (payload,) = batches
    (event,) = payload["batch"]  # type: ignore[misc]
    assert event["event"] == "$identify"
    assert event["distinct_id"] == "Googlebot"
    assert event["properties"]["$anon_distinct_id"] == "abc-123"
    assert event["properties"]["$set"]["$initial_ip"] == "66.249.66.1"


def test_reconcile_persons_dry_run_sends_nothing(
    reference_entries: list[ReputationEntry],
    matcher_factory: Callable[..., object],
) -> None:
    posted_batches: list[httpx.Request] = []
    pages = iter([[GOOGLEBOT_ROW], []])

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/query/"):
            return httpx.Response(200, json={"results": next(pages)})
        posted_batches.append(request)
        return httpx.Response(200)

    stats = reconcile_persons(
        dry_run=True,
        index=build_static_index(reference_entries),
        posthog_config=_posthog_config(),
        client_factory=lambda config: ResilientClient(
            config, transport=httpx.MockTransport(handler)
        ),
        matcher=matcher_factory(),
    )

    assert stats.modified == 1
    assert posted_batches == []


def test_build_index_from_custom_feeds(reference_entries: list[ReputationEntry]) -> None:
    class StaticFeed:
        name = "static"

        async def load(self) -> list[ReputationEntry]:
            return reference_entries

    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(404)

    index = build_index(
        feeds_config=FeedsConfig(resilience=ResilienceConfig(name="feeds", retry=None)),
        feeds_factory=lambda _client: [StaticFeed()],
        client_factory=lambda config: ResilientClient(
            config, transport=httpx.MockTransport(handler)
        ),
    )

    assert index.exact_count == 2
    assert index.range_count == 3


def test_classify_address_with_prebuilt_index(
    reference_entries: list[ReputationEntry],
    matcher_factory: Callable[..., object],
) -> None:
    result = classify_address(
        "203.0.113.8",
        index=build_static_index(reference_entries),
        matcher=matcher_factory(),
    )

    assert not result.is_bot
    assert result.datacenter_name == "ExampleCloud"
