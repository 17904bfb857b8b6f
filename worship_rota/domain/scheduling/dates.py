"""Calendar-date helpers shared by the occurrence expander and schedule resolver.

All values are timezone-naive wall-clock dates in the venue's local calendar.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Union

logger = logging.getLogger(__name__)

WEEK = timedelta(days=7)

DateLike = Union[date, datetime, str, None]


def parse_date(value: DateLike) -> Optional[date]:
    """Coerce a date, datetime or ISO ``YYYY-MM-DD`` string to a ``date``.

    Returns None for missing or unparseable input instead of raising.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            logger.debug(f"Unparseable date value: {value!r}")
            return None
    logger.debug(f"Unsupported date type: {type(value).__name__}")
    return None


def format_date(value: date) -> str:
    return value.isoformat()


def date_in_range(value: date, start: date, end: date) -> bool:
    return start <= value <= end


def first_weekly_on_or_after(anchor: date, start: date) -> date:
    """Smallest date on ``anchor``'s weekly cadence that is >= both anchor and start"""
    if start <= anchor:
        return anchor
    weeks = -(-(start - anchor).days // 7)
    return anchor + weeks * WEEK


def weekly_dates(
    anchor: date, start: date, end: date, until: Optional[date] = None
) -> Iterator[date]:
    current = first_weekly_on_or_after(anchor, start)
    while current <= end:
        if until is not None and current > until:
            break
        yield current
        current += WEEK
