"""
Scheduling Domain

Expands recurring custom services into dated occurrences and resolves which
worship team serves on a date for a campus.

Structure:
- dates.py        # Calendar-date helpers
- occurrences.py  # Occurrence expansion (pure)
- resolver.py     # Campus-aware schedule resolution (pure)
- schemas.py      # Domain records and API payloads
- repository.py   # Database queries and row mapping
- service.py      # Business logic, memoization
- router.py       # FastAPI endpoints
"""

from .occurrences import expand_occurrences, occurrence_key
from .resolver import (
    pick_schedule_winners,
    resolve_for_date,
    resolve_team_schedule,
    rotation_period_for_date,
)

__all__ = [
    "expand_occurrences",
    "occurrence_key",
    "pick_schedule_winners",
    "resolve_team_schedule",
    "resolve_for_date",
    "rotation_period_for_date",
]
