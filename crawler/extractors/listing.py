"""
Extract article entries from one listing page.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup, Tag

from crawler.schemas.models import ListingItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListingSelectors:
    item: str = ".card-body.card-padding-lg .media"
    title: str = "h3.media-heading"
    date: str = "ul.list-inline li:nth-child(3) span"
    tags: str = "ul.list-inline li:nth-child(5) span"
    user: str = "ul.list-inline li:nth-child(1) span"
    image: str = "img"
    link: str = "a.pull-left"

    @classmethod
    def from_mapping(cls, data: Optional[Dict[str, str]]) -> "ListingSelectors":
        if not data:
            return cls()
        if not isinstance(data, dict):
            logger.warning("Listing selectors must be a mapping, got %s; using defaults", type(data).__name__)
            return cls()
        known = {k: str(v) for k, v in data.items() if k in cls.__dataclass_fields__ and v}
        unknown = sorted(set(data) - set(known))
        if unknown:
            logger.warning("Ignoring unknown listing selectors: %s", ", ".join(unknown))
        return cls(**known)


def _child_text(node: Tag, selector: str) -> str:
    return "".join(match.get_text() for match in node.select(selector)).strip()


def _child_attr(node: Tag, selector: str, attr: str) -> str:
    match = node.select_one(selector)
    if match is None:
        return ""
    value = match.get(attr) or ""
    if isinstance(value, list):
        value = " ".join(value)
    return value.strip()


def absolutize(origin: str, value: str) -> str:
    """Join ``value`` onto ``origin``; links that are not http(s) (``javascript:``, ``mailto:``) become empty."""
    if not value:
        return ""
    joined = urljoin(origin, value)
    if urlsplit(joined).scheme not in ("http", "https"):
        logger.debug("Dropping non-http URL %r", value)
        return ""
    return joined


def parse_listing(html: str, origin: str, selectors: Optional[ListingSelectors] = None) -> List[ListingItem]:
    sel = selectors or ListingSelectors()
    soup = BeautifulSoup(html, "lxml")
    items: List[ListingItem] = []
    for node in soup.select(sel.item):
        items.append(
            ListingItem(
                title=_child_text(node, sel.title),
                date=_child_text(node, sel.date),
                link=absolutize(origin, _child_attr(node, sel.link, "href")),
                image=absolutize(origin, _child_attr(node, sel.image, "src")),
                user=_child_text(node, sel.user),
                tags=_child_text(node, sel.tags),
            )
        )
    return items
