"""
PageParser protocol for pluggable listing extractors.
"""
from __future__ import annotations

from typing import List, Protocol

from crawler.schemas.models import ListingItem


class PageParser(Protocol):
    def parse_page(self, page_url: str) -> List[ListingItem]:
        """
        Return the records found on one listing page, in page order.

        An empty list means the page had no items. Failures are raised as exceptions; the
        harvester treats both outcomes as "contributes nothing".
        """
        ...
