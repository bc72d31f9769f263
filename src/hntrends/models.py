"""Domain models shared by the extractor, the search matcher and ingestion."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class Story(BaseModel):
    """A story record as handed over by the ingestion layer."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    title: str
    url: str = ""
    domain: str | None = None
    points: int = 0
    user: str = ""
    time: str = ""
    comments_count: int = Field(default=0, alias="commentsCount")
    preview: str | None = None
    tags: list[str] | None = None


class TagCount(BaseModel):
    name: str
    count: int


class HNItem(BaseModel):
    """Raw item as returned by the public news API."""

    id: int
    type: str = "story"
    title: str = ""
    url: str | None = None
    time: int = 0  # UNIX seconds
    score: int = 0
    by: str = ""
    descendants: int | None = None
    kids: list[int] = Field(default_factory=list)
    text: str | None = None


class SearchFilter(StrEnum):
    ALL = "all"
    STORIES = "stories"
    USERS = "users"
    DOMAINS = "domains"
