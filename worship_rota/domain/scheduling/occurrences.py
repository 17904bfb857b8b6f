"""
Custom service occurrence expansion.

Recurring services are stored once (anchor date + weekly flag + optional end
date) and expanded on read over the window the caller is looking at, so an
open-ended weekly service never has to be materialized.
"""

import logging
from datetime import date, time
from typing import Iterable, Optional

from .dates import DateLike, date_in_range, format_date, parse_date, weekly_dates
from .schemas import ServiceDefinition, ServiceOccurrence

logger = logging.getLogger(__name__)


def occurrence_key(definition_id: str, on_date: date) -> str:
    """Stable identifier for one dated instance of a definition"""
    return f"{definition_id}:{format_date(on_date)}"


def _make_occurrence(definition: ServiceDefinition, on_date: date) -> ServiceOccurrence:
    return ServiceOccurrence(
        **definition.model_dump(),
        occurrence_key=occurrence_key(definition.id, on_date),
        occurrence_date=on_date,
    )


def _sort_key(occurrence: ServiceOccurrence) -> tuple[date, bool, time, str]:
    # Missing start times sort ahead of any real time on the same day
    start = occurrence.start_time
    return (
        occurrence.occurrence_date,
        start is not None,
        start or time.min,
        occurrence.occurrence_key,
    )


def expand_definition(
    definition: ServiceDefinition, range_start: date, range_end: date
) -> list[ServiceOccurrence]:
    """Occurrences of a single definition inside the closed range"""
    if not definition.is_active:
        return []

    if not definition.repeats_weekly:
        if date_in_range(definition.anchor_date, range_start, range_end):
            return [_make_occurrence(definition, definition.anchor_date)]
        return []

    return [
        _make_occurrence(definition, on_date)
        for on_date in weekly_dates(
            definition.anchor_date, range_start, range_end, definition.repeat_until
        )
    ]


def expand_occurrences(
    definitions: Iterable[ServiceDefinition],
    range_start: DateLike,
    range_end: DateLike,
) -> list[ServiceOccurrence]:
    """
    Expand service definitions into the dated occurrences falling in
    ``[range_start, range_end]`` (inclusive), ordered by date then start time.

    Degenerate ranges (unparseable or inverted bounds) yield an empty list.
    """
    start: Optional[date] = parse_date(range_start)
    end: Optional[date] = parse_date(range_end)
    if start is None or end is None:
        logger.debug(f"Skipping expansion for unparseable range {range_start!r}..{range_end!r}")
        return []
    if start > end:
        logger.debug(f"Skipping expansion for inverted range {start}..{end}")
        return []

    occurrences: list[ServiceOccurrence] = []
    for definition in definitions:
        occurrences.extend(expand_definition(definition, start, end))

    return sorted(occurrences, key=_sort_key)
