from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import List, Optional

from .config import Settings

RELEASE_TZ = timezone(timedelta(hours=-5), "EST")
FIRST_YEAR = 2015
LAST_DAY = 25


def today() -> date:
    return datetime.now(RELEASE_TZ).date()


def available_years(current: Optional[date] = None) -> List[int]:
    current = current or today()
    if current < date(current.year, 12, 1):
        return list(range(FIRST_YEAR, current.year))
    return list(range(FIRST_YEAR, current.year + 1))


def available_days(current: Optional[date] = None) -> List[int]:
    current = current or today()
    if current.month != 12:
        return list(range(1, LAST_DAY + 1))
    return list(range(1, min(current.day, LAST_DAY) + 1))


def date_for(day: int, year: Optional[int] = None, current: Optional[date] = None) -> date:
    if year is None:
        year = max(available_years(current))
    return date(year, 12, day)


def resolve_year(
    year: Optional[int], settings: Optional[Settings] = None, current: Optional[date] = None
) -> int:
    if year is not None:
        return year
    if settings is not None and settings.default_year is not None:
        return settings.default_year
    return max(available_years(current))
