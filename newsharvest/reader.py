"""
Single-article reader; independent of the harvest pipeline.
"""
from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urlsplit

from crawler.extractors.article import parse_article
from crawler.infra.http import HttpFetcher
from crawler.schemas.models import ArticleDetail

logger = logging.getLogger(__name__)


class ArticleReader:
    def __init__(
        self,
        fetcher: Optional[HttpFetcher] = None,
        user_agent: Optional[str] = None,
        timeout: float = 20,
    ) -> None:
        self.fetcher = fetcher or HttpFetcher(user_agent=user_agent, timeout=timeout, pool_size=1)

    def read(self, url: str) -> ArticleDetail:
        if urlsplit(url or "").scheme not in ("http", "https"):
            raise ValueError(f"not an http(s) URL: {url!r}")
        html = self.fetcher.fetch_text(url)
        detail = parse_article(html)
        logger.debug("Read article %s (%d chars of content)", url, len(detail.content))
        return detail

    def close(self) -> None:
        self.fetcher.close()
