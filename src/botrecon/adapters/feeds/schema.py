"""Pydantic models for the JSON-shaped reputation feeds."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, RootModel


class FeedBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RangeItem(FeedBaseModel):
    """One element of the hexydec crawler / datacentre lists."""

    range: str | None = None
    name: str | None = None


class RangeList(RootModel[list[RangeItem]]):
    pass


class GitTreeItem(FeedBaseModel):
    path: str
    type: str = "blob"


class GitTree(FeedBaseModel):
    tree: list[GitTreeItem] = Field(default_factory=list)
    truncated: bool = False
