"""
High-level orchestration: validate parameters, harvest every page, finalize the result.
"""
from __future__ import annotations

import logging
import time
from typing import Optional

from newsharvest.aggregator import finalize
from newsharvest.harvester import BoundedHarvester
from newsharvest.models import HarvestParams, HarvestResult
from newsharvest.parsers.base import PageParser
from newsharvest.parsers.listing import ListingPageParser
from newsharvest.settings import HarvestSettings, load_settings

logger = logging.getLogger(__name__)


class HarvestPipeline:
    def __init__(
        self,
        settings: Optional[HarvestSettings] = None,
        parser: Optional[PageParser] = None,
        harvester: Optional[BoundedHarvester] = None,
    ) -> None:
        self.settings = settings or load_settings()
        self.parser = parser
        self.harvester = harvester or BoundedHarvester(self.settings.page_url_template)

    def params(
        self,
        base_url: Optional[str] = None,
        first_page: Optional[int] = None,
        last_page: Optional[int] = None,
        max_concurrent: Optional[int] = None,
    ) -> HarvestParams:
        """Build parameters from explicit overrides, falling back to settings."""
        return HarvestParams(
            base_url=base_url if base_url is not None else self.settings.base_url,
            first_page=first_page if first_page is not None else self.settings.first_page,
            last_page=last_page if last_page is not None else self.settings.last_page,
            max_concurrent=max_concurrent if max_concurrent is not None else self.settings.max_concurrent,
        ).validate()

    def _build_parser(self, params: HarvestParams) -> ListingPageParser:
        return ListingPageParser(
            origin=self.settings.site_origin,
            selectors=self.settings.selectors,
            user_agent=self.settings.user_agent,
            timeout=self.settings.fetch_timeout,
            pool_size=params.max_concurrent,
        )

    def run(self, params: Optional[HarvestParams] = None) -> HarvestResult:
        params = (params or self.params()).validate()
        owned: Optional[ListingPageParser] = None
        parser: PageParser
        if self.parser is None:
            parser = owned = self._build_parser(params)
        else:
            parser = self.parser

        start = time.perf_counter()
        try:
            records = self.harvester.harvest(
                params.base_url,
                params.first_page,
                params.last_page,
                params.max_concurrent,
                parser,
            )
        finally:
            if owned is not None:
                owned.close()
        result = finalize(records)
        result.elapsed_ms = (time.perf_counter() - start) * 1000
        result.pages_attempted = params.page_count
        logger.info(
            "Harvest finished: %s, %d records from %d pages in %.0f ms",
            result.status.value,
            len(result.records),
            result.pages_attempted,
            result.elapsed_ms,
        )
        return result
