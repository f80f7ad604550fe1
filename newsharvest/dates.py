"""
Locale-aware normalisation of listing dates such as ``"Senin, 5 Januari 2024 | 10:00"``.

Only used to order records; a date that cannot be read yields ``None`` instead of raising.
"""
from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Dict, Mapping, Optional, Tuple

# Indonesian month name -> English month name.
INDONESIAN_MONTHS: Dict[str, str] = {
    "Januari": "January",
    "Februari": "February",
    "Maret": "March",
    "April": "April",
    "Mei": "May",
    "Juni": "June",
    "Juli": "July",
    "Agustus": "August",
    "September": "September",
    "Oktober": "October",
    "November": "November",
    "Desember": "December",
}

ENGLISH_MONTHS: Tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

NOISE_TOKENS: Tuple[str, ...] = ("|", "&nbsp;")

DATE_PATTERN = re.compile(r"(\d{1,2}) ([A-Za-z]+) (\d{4})")


class DateNormalizer:
    def __init__(self, months: Optional[Mapping[str, str]] = None, noise: Tuple[str, ...] = NOISE_TOKENS) -> None:
        self.months = dict(INDONESIAN_MONTHS if months is None else months)
        self.noise = noise
        self._month_numbers = {name: index for index, name in enumerate(ENGLISH_MONTHS, start=1)}

    def normalize(self, text: Optional[str]) -> Optional[datetime]:
        """Return midnight UTC of the date embedded in ``text``, or None when unreadable."""
        if not isinstance(text, str):
            return None
        cleaned = text.strip().replace("\xa0", " ")
        if not cleaned:
            return None
        for local, canonical in self.months.items():
            cleaned = cleaned.replace(local, canonical)
        for token in self.noise:
            cleaned = cleaned.replace(token, "")

        matches = DATE_PATTERN.findall(cleaned)
        if len(matches) != 1:
            return None
        day, month_name, year = matches[0]
        month = self._month_numbers.get(month_name)
        if month is None:
            return None
        try:
            return datetime(int(year), month, int(day), tzinfo=timezone.utc)
        except ValueError:
            return None


_default = DateNormalizer()


def normalize_date(text: Optional[str]) -> Optional[datetime]:
    return _default.normalize(text)


def date_sort_key(text: Optional[str]) -> Tuple[int, float]:
    """Ascending key: readable dates newest first, unreadable dates after all of them."""
    parsed = normalize_date(text)
    if parsed is None:
        return (1, 0.0)
    return (0, -parsed.timestamp())
