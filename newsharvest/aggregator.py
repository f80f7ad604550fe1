"""
Merge harvested records into the final, date-ordered result.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

from crawler.schemas.models import ListingItem

from newsharvest.dates import date_sort_key, normalize_date
from newsharvest.models import HarvestResult, HarvestStatus

logger = logging.getLogger(__name__)


def finalize(records: Sequence[ListingItem], *, now: Optional[datetime] = None) -> HarvestResult:
    """
    Sort records newest first; records whose date cannot be read go last in arrival order.

    An empty input is reported as ``HarvestStatus.NO_DATA`` rather than as an error.
    """
    generated_at = now or datetime.now(timezone.utc)
    if not records:
        return HarvestResult(status=HarvestStatus.NO_DATA, records=[], generated_at=generated_at)

    ordered = sorted(records, key=lambda record: date_sort_key(record.date))
    unparsed = sum(1 for record in ordered if normalize_date(record.date) is None)
    if unparsed:
        logger.warning("%d of %d records have an unreadable date; sorted last", unparsed, len(ordered))
    return HarvestResult(
        status=HarvestStatus.SUCCESS,
        records=ordered,
        generated_at=generated_at,
        unparsed_dates=unparsed,
    )
