"""
Core data structures shared by the harvest pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, Optional

from crawler.schemas.models import ListingItem


class HarvestConfigError(ValueError):
    """Raised when harvest parameters are unusable; no page is fetched."""


class HarvestStatus(str, Enum):
    SUCCESS = "success"
    NO_DATA = "no-data"


@dataclass
class HarvestParams:
    base_url: str
    first_page: int = 1
    last_page: int = 50
    max_concurrent: int = 50

    @property
    def page_count(self) -> int:
        return self.last_page - self.first_page + 1

    def validate(self) -> "HarvestParams":
        if not isinstance(self.base_url, str) or not self.base_url.strip():
            raise HarvestConfigError("base_url must be a non-empty string")
        for name in ("first_page", "last_page", "max_concurrent"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise HarvestConfigError(f"{name} must be an integer, got {value!r}")
        if self.first_page < 1:
            raise HarvestConfigError(f"first_page must be >= 1, got {self.first_page}")
        if self.last_page < self.first_page:
            raise HarvestConfigError(
                f"last_page ({self.last_page}) must not be lower than first_page ({self.first_page})"
            )
        if self.max_concurrent < 1:
            raise HarvestConfigError(f"max_concurrent must be >= 1, got {self.max_concurrent}")
        return self


@dataclass
class HarvestResult:
    status: HarvestStatus
    records: List[ListingItem]
    generated_at: datetime
    elapsed_ms: Optional[float] = None
    pages_attempted: int = 0
    unparsed_dates: int = 0

    @property
    def found(self) -> bool:
        return self.status is HarvestStatus.SUCCESS
