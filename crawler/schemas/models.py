"""
Pydantic models for crawler outputs.
Listing entries carry absolute URLs only; relative links are rejected at construction.
"""
from __future__ import annotations

from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, field_validator


class ListingItem(BaseModel):
    """One article entry scraped from a paginated listing page."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    date: str = ""
    link: str = ""
    image: str = ""
    user: str = ""
    tags: str = ""

    @field_validator("title", "date", "user", "tags", mode="before")
    @classmethod
    def _trim(cls, value: str) -> str:
        return (value or "").strip()

    @field_validator("link", "image", mode="before")
    @classmethod
    def _require_absolute(cls, value: str) -> str:
        value = (value or "").strip()
        if value and urlsplit(value).scheme not in ("http", "https"):
            raise ValueError(f"expected an absolute URL, got {value!r}")
        return value


class ArticleDetail(BaseModel):
    title: str = ""
    author: str = ""
    date: str = ""
    content: str = ""
    category: str = ""

    @field_validator("title", "author", "date", "content", "category", mode="before")
    @classmethod
    def _trim(cls, value: str) -> str:
        return (value or "").strip()
