"""Pydantic models describing the PostHog query and batch payloads."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# column order of the person query, see ``translator.build_person_query``
PERSON_COLUMNS: tuple[str, ...] = (
    "person_id",
    "distinct_id",
    "is_bot",
    "current_ip",
    "current_user_agent",
    "initial_ip",
    "latest_ip",
    "is_good_bot",
    "datacenter",
    "latest_nonproxy_ip",
    "bot_name",
    "bot_type",
    "bot_identification_source",
)


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped or stripped == "null":
            return None
        return stripped
    return value


class PostHogBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class HogQLQueryResponse(PostHogBaseModel):
    results: list[list[Any]] = Field(default_factory=list)
    columns: list[str] | None = None


class PersonRow(PostHogBaseModel):
    person_id: str
    distinct_id: str
    is_bot: Any = None
    current_ip: str | None = None
    current_user_agent: str | None = None
    initial_ip: str | None = None
    latest_ip: str | None = None
    is_good_bot: Any = None
    datacenter: Any = None
    latest_nonproxy_ip: str | None = None
    bot_name: Any = None
    bot_type: Any = None
    bot_identification_source: Any = None

    @model_validator(mode="before")
    @classmethod
    def _from_positional(cls, value: object) -> object:
        if isinstance(value, Sequence) and not isinstance(value, str):
            return dict(zip(PERSON_COLUMNS, value, strict=False))
        return value

    @field_validator("person_id", "distinct_id", mode="before")
    @classmethod
    def _stringify_identifier(cls, value: object) -> object:
        return str(value) if value is not None else value

    _normalize_strings = field_validator(
        "current_ip",
        "current_user_agent",
        "initial_ip",
        "latest_ip",
        "latest_nonproxy_ip",
        mode="before",
    )(_blank_to_none)


class BatchEventProperties(PostHogBaseModel):
    set_: dict[str, object] = Field(alias="$set")
    set_once: dict[str, object] = Field(default_factory=dict, alias="$set_once")
    anon_distinct_id: str | None = Field(default=None, alias="$anon_distinct_id")


class BatchEvent(PostHogBaseModel):
    event: Literal["$set", "$identify"]
    distinct_id: str
    properties: BatchEventProperties


class BatchRequest(PostHogBaseModel):
    api_key: str
    batch: list[BatchEvent]
