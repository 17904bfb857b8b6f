"""Scheduling service - Business logic for service occurrences and team schedules"""

import logging
from typing import Optional

from fastapi import HTTPException
from pydantic import ValidationError
from sqlalchemy.orm import Session

from ...cache import Cache, build_occurrences_key, cache, definitions_fingerprint
from ...config import OCCURRENCE_CACHE_TTL
from ...models import CustomService, CustomServiceAssignment, TeamMember
from .dates import DateLike, parse_date
from .occurrences import expand_occurrences
from .repository import SchedulingRepository
from .resolver import resolve_for_date, resolve_team_schedule, rotation_period_for_date
from .schemas import (
    AssignmentCreate,
    CustomServiceCreate,
    ScheduledTeam,
    ScheduleEntry,
    ServiceDefinition,
    ServiceOccurrence,
    Team,
)

logger = logging.getLogger(__name__)


class SchedulingService:
    """Service layer for scheduling business logic"""

    def __init__(self, db: Session, occurrence_cache: Optional[Cache] = None):
        self.db = db
        self.repo = SchedulingRepository()
        self.cache = occurrence_cache if occurrence_cache is not None else cache

    # Custom service occurrences
    def get_service_occurrences(
        self,
        range_start: DateLike,
        range_end: DateLike,
        campus_id: Optional[str] = None,
        category: Optional[str] = None,
    ) -> list[ServiceOccurrence]:
        """Expand active custom services over the window, memoized per definitions snapshot"""
        start = parse_date(range_start)
        end = parse_date(range_end)
        if start is None or end is None or start > end:
            logger.debug(f"Degenerate occurrence window {range_start!r}..{range_end!r}")
            return []

        definitions = self.repo.get_service_definitions_until(self.db, end, campus_id, category)
        cache_key = build_occurrences_key(
            definitions_fingerprint(definitions), start, end, campus_id, category
        )

        cached_value = self.cache.get(cache_key)
        if cached_value is not None:
            try:
                return [ServiceOccurrence.model_validate(o) for o in cached_value]
            except (TypeError, ValidationError) as e:
                logger.warning(f"⚠️ Discarding unreadable cached occurrences {cache_key}: {e}")
                self.cache.delete(cache_key)

        occurrences = expand_occurrences(definitions, start, end)
        self.cache.set(
            cache_key, [o.model_dump(mode="json") for o in occurrences], OCCURRENCE_CACHE_TTL
        )
        logger.info(
            f"📅 Expanded {len(definitions)} service definitions into "
            f"{len(occurrences)} occurrences for {start}..{end}"
        )
        return occurrences

    def get_service_definitions(self, campus_id: Optional[str] = None) -> list[ServiceDefinition]:
        return self.repo.get_service_definitions(self.db, campus_id)

    def get_custom_service(self, service_id: str) -> CustomService:
        service = self.repo.get_custom_service(self.db, service_id)
        if not service:
            raise HTTPException(status_code=404, detail="Custom service not found")
        return service

    def create_custom_service(self, data: CustomServiceCreate) -> ServiceDefinition:
        """Create a custom service with validation"""
        if data.repeatUntil is not None and data.repeatUntil < data.serviceDate:
            raise HTTPException(
                status_code=400, detail="repeatUntil must not be before serviceDate"
            )

        service_data = {
            "campus_id": data.campusId,
            "ministry_type": data.ministryType,
            "service_name": data.serviceName,
            "service_date": data.serviceDate,
            "start_time": data.startTime,
            "end_time": data.endTime,
            "repeats_weekly": data.repeatsWeekly,
            "repeat_until": data.repeatUntil,
            "created_by": data.createdBy,
        }

        row = self.repo.create_custom_service(self.db, **service_data)
        self.cache.delete_pattern("occurrences:*")
        logger.info(f"✅ Custom service created: {row.id} ({row.service_name})")
        return self.repo.to_service_definition(row)

    def delete_custom_service(self, service_id: str) -> dict:
        service = self.get_custom_service(service_id)
        self.repo.delete_custom_service(self.db, service)
        self.cache.delete_pattern("occurrences:*")
        logger.info(f"🗑️ Custom service deleted: {service_id}")
        return {"message": "Custom service deleted"}

    # Custom service assignments
    def get_assignments(self, service_id: str, assignment_date: DateLike) -> list[CustomServiceAssignment]:
        on_date = parse_date(assignment_date)
        if on_date is None:
            raise HTTPException(status_code=400, detail="Invalid assignment date")
        return self.repo.get_assignments(self.db, service_id, on_date)

    def add_assignment(self, service_id: str, data: AssignmentCreate) -> CustomServiceAssignment:
        self.get_custom_service(service_id)
        return self.repo.upsert_assignment(
            self.db,
            custom_service_id=service_id,
            assignment_date=data.assignmentDate,
            user_id=data.userId,
            role=data.role,
            assigned_by=data.assignedBy,
        )

    def remove_assignment(self, assignment_id: str) -> dict:
        assignment = self.repo.get_assignment(self.db, assignment_id)
        if not assignment:
            raise HTTPException(status_code=404, detail="Assignment not found")
        self.repo.delete_assignment(self.db, assignment)
        return {"message": "Assignment removed"}

    # Team schedule
    def get_team_schedule(
        self, rotation_period: Optional[str] = None, campus_id: Optional[str] = None
    ) -> list[ScheduleEntry]:
        entries = self.repo.get_schedule_entries(self.db, rotation_period, campus_id)
        return resolve_team_schedule(entries, campus_id)

    def get_scheduled_team_for_date(
        self, on_date: DateLike, campus_id: Optional[str] = None
    ) -> Optional[ScheduledTeam]:
        """The team serving on a date, or None when nobody is scheduled"""
        target = parse_date(on_date)
        if target is None:
            return None

        entries = self.repo.get_schedule_entries_for_date(self.db, target, campus_id)
        entry = resolve_for_date(entries, target, campus_id)
        if entry is None or entry.team is None:
            return None

        return ScheduledTeam(
            id=entry.id,
            team_id=entry.team.id,
            team_name=entry.team.name,
            team_color=entry.team.color,
            team_icon=entry.team.icon,
            schedule_date=entry.schedule_date,
            campus_id=entry.campus_id,
        )

    def get_rotation_period_for_date(
        self, campus_id: Optional[str], on_date: DateLike
    ) -> Optional[str]:
        if not campus_id:
            return None
        periods = self.repo.get_rotation_periods(self.db, campus_id)
        period = rotation_period_for_date(periods, campus_id, on_date)
        return period.name if period else None

    # Teams
    def get_teams(self) -> list[Team]:
        return self.repo.get_teams(self.db)

    def get_team_members(self, team_id: Optional[str] = None) -> list[TeamMember]:
        return self.repo.get_team_members(self.db, team_id)
