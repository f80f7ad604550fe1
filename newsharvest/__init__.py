"""
Public API for the paginated listing harvester.
"""
from __future__ import annotations

from typing import Optional

from crawler.schemas.models import ArticleDetail, ListingItem
from newsharvest.aggregator import finalize
from newsharvest.dates import DateNormalizer, normalize_date
from newsharvest.harvester import BoundedHarvester, PermitPool, harvest
from newsharvest.models import HarvestConfigError, HarvestParams, HarvestResult, HarvestStatus
from newsharvest.pipeline import HarvestPipeline
from newsharvest.reader import ArticleReader
from newsharvest.settings import HarvestSettings, load_settings


def harvest_listing(
    base_url: Optional[str] = None,
    first_page: Optional[int] = None,
    last_page: Optional[int] = None,
    max_concurrent: Optional[int] = None,
) -> HarvestResult:
    """
    Harvest the listing with settings defaults for any parameter left as None.
    """
    pipeline = HarvestPipeline()
    return pipeline.run(pipeline.params(base_url, first_page, last_page, max_concurrent))


def read_article(url: str) -> ArticleDetail:
    settings = load_settings()
    reader = ArticleReader(user_agent=settings.user_agent, timeout=settings.fetch_timeout)
    try:
        return reader.read(url)
    finally:
        reader.close()


__all__ = [
    "ArticleDetail",
    "ArticleReader",
    "BoundedHarvester",
    "DateNormalizer",
    "HarvestConfigError",
    "HarvestParams",
    "HarvestPipeline",
    "HarvestResult",
    "HarvestSettings",
    "HarvestStatus",
    "ListingItem",
    "PermitPool",
    "finalize",
    "harvest",
    "harvest_listing",
    "load_settings",
    "normalize_date",
    "read_article",
]
