"""
Reusable HTTP fetching utilities shared by the listing and article scrapers.
"""
from __future__ import annotations

import logging
from typing import Optional

import requests
from requests.adapters import HTTPAdapter

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "NewsHarvest/1.0 (+https://example.com/compliance)"


class HttpFetcher:
    """
    Thin wrapper over requests.Session with a bounded connection pool and a per-request timeout.

    The session is safe to share between the page threads of one harvest. Requests are
    attempted once; HTTP errors surface as ``requests.HTTPError``.
    """

    def __init__(
        self,
        user_agent: Optional[str] = None,
        timeout: float = 20,
        pool_size: int = 10,
    ) -> None:
        self.timeout = timeout
        self.session = requests.Session()
        adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size, max_retries=0)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)
        self.session.headers.update(
            {
                "User-Agent": user_agent or DEFAULT_USER_AGENT,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                "Accept-Language": "id-ID,id;q=0.9,en-US;q=0.8",
            }
        )

    def fetch(self, url: str) -> requests.Response:
        response = self.session.get(url, timeout=self.timeout)
        if response.status_code >= 400:
            logger.debug("HTTP %s for %s", response.status_code, url)
            raise requests.HTTPError(f"HTTP {response.status_code} for {url}", response=response)
        return response

    def fetch_text(self, url: str) -> str:
        return self.fetch(url).text

    def close(self) -> None:
        self.session.close()
