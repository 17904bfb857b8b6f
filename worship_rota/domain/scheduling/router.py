"""Scheduling router - FastAPI endpoints for service occurrences and team schedules"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import (
    AssignmentCreate,
    AssignmentResponse,
    CustomServiceCreate,
    OccurrenceResponse,
    RotationPeriodResponse,
    ScheduledTeamResponse,
    ScheduleEntry,
    ScheduleEntryResponse,
    ServiceDefinition,
    ServiceDefinitionResponse,
    ServiceOccurrence,
    TeamMemberResponse,
    TeamResponse,
)
from .service import SchedulingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/scheduling", tags=["Scheduling"])


def get_scheduling_service(db: Session = Depends(get_db)) -> SchedulingService:
    """Dependency injection for SchedulingService"""
    return SchedulingService(db)


def _definition_fields(d: ServiceDefinition) -> dict:
    return {
        "id": d.id,
        "campusId": d.campus_id,
        "ministryType": d.category,
        "serviceName": d.name,
        "serviceDate": d.anchor_date,
        "startTime": d.start_time,
        "endTime": d.end_time,
        "repeatsWeekly": d.repeats_weekly,
        "repeatUntil": d.repeat_until,
        "isActive": d.is_active,
    }


def _occurrence_response(o: ServiceOccurrence) -> OccurrenceResponse:
    return OccurrenceResponse(
        **_definition_fields(o),
        occurrenceKey=o.occurrence_key,
        occurrenceDate=o.occurrence_date,
    )


def _schedule_entry_response(e: ScheduleEntry) -> ScheduleEntryResponse:
    return ScheduleEntryResponse(
        id=e.id,
        teamId=e.team_id,
        scheduleDate=e.schedule_date,
        rotationPeriod=e.rotation_period,
        ministryType=e.category,
        campusId=e.campus_id,
        notes=e.notes,
        team=TeamResponse(**e.team.model_dump()) if e.team else None,
    )


def _assignment_response(a) -> AssignmentResponse:
    return AssignmentResponse(
        id=a.id,
        customServiceId=a.custom_service_id,
        assignmentDate=a.assignment_date,
        userId=a.user_id,
        role=a.role,
        assignedBy=a.assigned_by,
        created_at=a.created_at,
    )


# ============================================================================
# CUSTOM SERVICES
# ============================================================================


@router.get("/occurrences", response_model=list[OccurrenceResponse])
async def get_service_occurrences(
    start_date: str = Query(..., alias="startDate"),
    end_date: str = Query(..., alias="endDate"),
    campus_id: Optional[str] = Query(None, alias="campusId"),
    category: Optional[str] = Query(None),
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Concrete dated occurrences of custom services inside [startDate, endDate]"""
    occurrences = service.get_service_occurrences(start_date, end_date, campus_id, category)
    return [_occurrence_response(o) for o in occurrences]


@router.get("/services", response_model=list[ServiceDefinitionResponse])
async def get_service_definitions(
    campus_id: Optional[str] = Query(None, alias="campusId"),
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Active custom service definitions"""
    definitions = service.get_service_definitions(campus_id)
    return [ServiceDefinitionResponse(**_definition_fields(d)) for d in definitions]


@router.post("/services", response_model=ServiceDefinitionResponse)
async def create_custom_service(
    data: CustomServiceCreate,
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Create a one-off or weekly custom service"""
    definition = service.create_custom_service(data)
    return ServiceDefinitionResponse(**_definition_fields(definition))


@router.delete("/services/{service_id}")
async def delete_custom_service(
    service_id: str,
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Delete a custom service"""
    return service.delete_custom_service(service_id)


@router.get("/services/{service_id}/assignments", response_model=list[AssignmentResponse])
async def get_assignments(
    service_id: str,
    assignment_date: str = Query(..., alias="date"),
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Members assigned to one occurrence of a custom service"""
    assignments = service.get_assignments(service_id, assignment_date)
    return [_assignment_response(a) for a in assignments]


@router.post("/services/{service_id}/assignments", response_model=AssignmentResponse)
async def add_assignment(
    service_id: str,
    data: AssignmentCreate,
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Assign a member to one occurrence of a custom service"""
    return _assignment_response(service.add_assignment(service_id, data))


@router.delete("/assignments/{assignment_id}")
async def remove_assignment(
    assignment_id: str,
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Remove an assignment"""
    return service.remove_assignment(assignment_id)


# ============================================================================
# TEAM SCHEDULE
# ============================================================================


@router.get("/team-schedule", response_model=list[ScheduleEntryResponse])
async def get_team_schedule(
    rotation_period: Optional[str] = Query(None, alias="rotationPeriod"),
    campus_id: Optional[str] = Query(None, alias="campusId"),
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Team schedule; with campusId, campus-specific entries override shared ones"""
    entries = service.get_team_schedule(rotation_period, campus_id)
    return [_schedule_entry_response(e) for e in entries]


@router.get("/scheduled-team", response_model=Optional[ScheduledTeamResponse])
async def get_scheduled_team_for_date(
    on_date: date = Query(..., alias="date"),
    campus_id: Optional[str] = Query(None, alias="campusId"),
    service: SchedulingService = Depends(get_scheduling_service),
):
    """The team scheduled on a date, or null when nobody is scheduled"""
    scheduled = service.get_scheduled_team_for_date(on_date, campus_id)
    if scheduled is None:
        return None
    return ScheduledTeamResponse(
        id=scheduled.id,
        teamId=scheduled.team_id,
        teamName=scheduled.team_name,
        teamColor=scheduled.team_color,
        teamIcon=scheduled.team_icon,
        scheduleDate=scheduled.schedule_date,
        campusId=scheduled.campus_id,
    )


@router.get("/rotation-period", response_model=RotationPeriodResponse)
async def get_rotation_period_for_date(
    campus_id: str = Query(..., alias="campusId"),
    on_date: date = Query(..., alias="date"),
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Name of the campus rotation period covering a date"""
    return RotationPeriodResponse(
        rotationPeriod=service.get_rotation_period_for_date(campus_id, on_date)
    )


@router.get("/teams", response_model=list[TeamResponse])
async def get_teams(service: SchedulingService = Depends(get_scheduling_service)):
    """All worship teams"""
    return [TeamResponse(**t.model_dump()) for t in service.get_teams()]


@router.get("/team-members", response_model=list[TeamMemberResponse])
async def get_team_members(
    team_id: Optional[str] = Query(None, alias="teamId"),
    service: SchedulingService = Depends(get_scheduling_service),
):
    members = service.get_team_members(team_id)
    return [
        TeamMemberResponse(
            id=m.id,
            teamId=m.team_id,
            memberName=m.member_name,
            position=m.position,
            displayOrder=m.display_order,
        )
        for m in members
    ]


__all__ = [
    "router",
    "get_scheduling_service",
]
