"""HTTP client for the PostHog query and batch APIs."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from botrecon.domain.ports import TransportStatusError

from .schema import BatchRequest, HogQLQueryResponse
from .translator import build_person_query, parse_person_row, to_batch_event

if TYPE_CHECKING:
    from collections.abc import Sequence

    import httpx

    from botrecon.adapters.http_resilience import ResilientClient
    from botrecon.config.posthog import PostHogConfig
    from botrecon.domain.model import OutboundEvent, PersonRecord

log = getLogger(__name__)


class PostHogAPIError(RuntimeError):
    """Raised when PostHog returns a payload we cannot interpret."""


def parse_retry_after(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        seconds = float(value.strip())
    except ValueError:
        return None
    return seconds if seconds > 0 else None


def raise_for_transport_status(response: httpx.Response, *, context: str) -> None:
    if response.is_success:
        return
    raise TransportStatusError(
        f"{context} failed with HTTP {response.status_code}",
        status_code=response.status_code,
        retry_after_seconds=parse_retry_after(response.headers.get("retry-after")),
    )


class PostHogClient:
    """Low-level access to the HogQL query endpoint and the batch capture endpoint."""

    def __init__(self, *, config: PostHogConfig, client: ResilientClient) -> None:
        self._config = config
        self._client = client

    async def query(self, sql: str) -> HogQLQueryResponse:
        response = await self._client.post(
            self._config.query_path,
            json={"query": {"kind": "HogQLQuery", "query": sql}},
            headers={"Authorization": f"Bearer {self._config.api_key}"},
        )
        raise_for_transport_status(response, context="HogQL query")
        try:
            return HogQLQueryResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise PostHogAPIError("Unexpected HogQL response payload") from exc

    async def send_batch(self, events: Sequence[OutboundEvent]) -> None:
        request = BatchRequest(
            api_key=self._config.project_key,
            batch=[to_batch_event(event) for event in events],
        )
        response = await self._client.post(
            self._config.batch_url,
            json=request.model_dump(mode="json", by_alias=True, exclude_none=True),
            headers={"Content-Type": "application/json"},
        )
        raise_for_transport_status(response, context="Batch capture")
        log.debug("Delivered batch of %s events", len(events))


class PostHogRecordSource:
    """Cursor-paginated person records read through HogQL."""

    def __init__(self, client: PostHogClient) -> None:
        self._client = client

    async def fetch_page(self, *, cursor: str | None, limit: int) -> Sequence[PersonRecord]:
        response = await self._client.query(build_person_query(cursor=cursor, limit=limit))
        return [parse_person_row(row) for row in response.results]


class PostHogEventSink:
    def __init__(self, client: PostHogClient) -> None:
        self._client = client

    async def send_batch(self, events: Sequence[OutboundEvent]) -> None:
        if events:
            await self._client.send_batch(events)

