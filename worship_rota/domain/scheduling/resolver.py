"""
Campus-aware team schedule resolution.

Campuses share one rotation but may override individual dates locally. For a
given (date, category) key a campus-specific entry always beats the shared
(campus_id is None) entry, whatever order the datastore returned rows in.
"""

import logging
from datetime import date, timezone
from typing import Iterable, Optional

from .dates import DateLike, date_in_range, parse_date
from .schemas import RotationPeriod, ScheduleEntry, ScheduleKey

logger = logging.getLogger(__name__)


def schedule_key(entry: ScheduleEntry) -> ScheduleKey:
    return ScheduleKey(entry.schedule_date, entry.category)


def _is_specific(entry: ScheduleEntry) -> bool:
    return entry.campus_id is not None


def _in_scope(entry: ScheduleEntry, campus_id: Optional[str]) -> bool:
    return entry.campus_id is None or entry.campus_id == campus_id


def _creation_key(entry: ScheduleEntry) -> tuple[bool, float]:
    """Missing timestamps sort first; naive timestamps are read as UTC"""
    created = entry.created_at
    if created is None:
        return (False, 0.0)
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    return (True, created.timestamp())


def _by_creation(entries: Iterable[ScheduleEntry]) -> list[ScheduleEntry]:
    """Oldest first; stable, so input order breaks ties between equal timestamps"""
    return sorted(entries, key=_creation_key)


def _prefer(existing: Optional[ScheduleEntry], candidate: ScheduleEntry) -> ScheduleEntry:
    """Pick between two entries for the same key; candidate is the later-created one"""
    if existing is None:
        return candidate
    if _is_specific(existing) and not _is_specific(candidate):
        return existing
    if existing.campus_id == candidate.campus_id:
        logger.warning(
            f"⚠️ Duplicate schedule entries for {existing.schedule_date} "
            f"(category={existing.category}, campus={existing.campus_id}): "
            f"keeping {candidate.id} over {existing.id}"
        )
    return candidate


def pick_schedule_winners(
    entries: Iterable[ScheduleEntry], campus_id: Optional[str]
) -> dict[ScheduleKey, ScheduleEntry]:
    """One applicable entry per (date, category) for the given campus"""
    winners: dict[ScheduleKey, ScheduleEntry] = {}
    for entry in _by_creation(e for e in entries if _in_scope(e, campus_id)):
        key = schedule_key(entry)
        winners[key] = _prefer(winners.get(key), entry)
    return winners


def resolve_team_schedule(
    entries: Iterable[ScheduleEntry], campus_id: Optional[str] = None
) -> list[ScheduleEntry]:
    """
    Without a campus every entry is returned untouched (global/admin view).
    With a campus, entries collapse to one winner per (date, category).
    """
    if campus_id is None:
        return list(entries)

    winners = pick_schedule_winners(entries, campus_id)
    return sorted(
        winners.values(), key=lambda e: (e.schedule_date, e.category or "")
    )


def resolve_for_date(
    entries: Iterable[ScheduleEntry],
    on_date: DateLike,
    campus_id: Optional[str] = None,
    category: Optional[str] = None,
) -> Optional[ScheduleEntry]:
    """The single entry serving ``on_date``, or None when nothing is scheduled"""
    target = parse_date(on_date)
    if target is None:
        return None

    candidates = [
        e
        for e in entries
        if e.schedule_date == target
        and (category is None or e.category == category)
        and (campus_id is None or _in_scope(e, campus_id))
    ]

    winner: Optional[ScheduleEntry] = None
    for entry in _by_creation(candidates):
        winner = _prefer(winner, entry)
    return winner


def rotation_period_for_date(
    periods: Iterable[RotationPeriod], campus_id: Optional[str], on_date: DateLike
) -> Optional[RotationPeriod]:
    """The campus's rotation period covering ``on_date`` (inclusive bounds)"""
    target: Optional[date] = parse_date(on_date)
    if not campus_id or target is None:
        return None

    covering = [
        p
        for p in periods
        if p.campus_id == campus_id and date_in_range(target, p.start_date, p.end_date)
    ]
    if not covering:
        return None
    return min(covering, key=lambda p: p.start_date)
