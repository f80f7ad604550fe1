"""
Page parser for the paginated news listing, built on the crawler helpers.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from crawler.extractors.listing import ListingSelectors, parse_listing
from crawler.infra.http import HttpFetcher
from crawler.schemas.models import ListingItem

logger = logging.getLogger(__name__)


class ListingPageParser:
    def __init__(
        self,
        origin: str,
        fetcher: Optional[HttpFetcher] = None,
        selectors: Optional[ListingSelectors] = None,
        user_agent: Optional[str] = None,
        timeout: float = 20,
        pool_size: int = 10,
    ) -> None:
        self.origin = origin
        self.selectors = selectors or ListingSelectors()
        self.fetcher = fetcher or HttpFetcher(user_agent=user_agent, timeout=timeout, pool_size=pool_size)

    def parse_page(self, page_url: str) -> List[ListingItem]:
        html = self.fetcher.fetch_text(page_url)
        items = parse_listing(html, self.origin, self.selectors)
        logger.debug("Parsed %d items from %s", len(items), page_url)
        return items

    def close(self) -> None:
        self.fetcher.close()
