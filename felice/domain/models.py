"""Pydantic models shared across the search pipeline."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SearchCategory = Literal["web", "images"]
SessionStatus = Literal["idle", "loading", "error"]


class SearchResult(BaseModel):
    """One normalized search hit, web page or image."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: str = Field(min_length=1)
    snippet: str = ""
    display_url: str | None = None
    favicon_url: str | None = None
    content_url: str | None = None
    thumbnail_url: str | None = None


class SearchPage(BaseModel):
    model_config = ConfigDict(frozen=True)

    results: tuple[SearchResult, ...] = ()
    total_results: int = Field(default=0, ge=0)


class SearchRequest(BaseModel):
    """A single dispatch intent issued by a session transition."""

    model_config = ConfigDict(frozen=True)

    request_id: int = Field(ge=1)
    category: SearchCategory
    query: str
    page: int = Field(ge=1)


__all__ = [
    "SearchCategory",
    "SearchPage",
    "SearchRequest",
    "SearchResult",
    "SessionStatus",
]
