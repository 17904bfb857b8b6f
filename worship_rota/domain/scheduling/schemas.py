"""Scheduling domain schemas - typed records for the scheduling core and API payloads"""

from datetime import date, datetime, time
from typing import NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, field_validator

# ============================================================================
# DOMAIN RECORDS
# ============================================================================


class Team(BaseModel):
    """Display attributes of a worship team"""

    id: str
    name: str
    color: str
    icon: str

    model_config = ConfigDict(frozen=True)


class ServiceDefinition(BaseModel):
    """A one-off or weekly-repeating custom service"""

    id: str
    campus_id: Optional[str] = None
    category: str
    name: str
    anchor_date: date
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    repeats_weekly: bool = False
    repeat_until: Optional[date] = None
    is_active: bool = True

    model_config = ConfigDict(frozen=True)


class ServiceOccurrence(ServiceDefinition):
    """One concrete dated instance of a ServiceDefinition"""

    occurrence_key: str
    occurrence_date: date


class ScheduleEntry(BaseModel):
    """A team assigned to a calendar date; campus_id None means shared by all campuses"""

    id: str
    team_id: str
    schedule_date: date
    rotation_period: str
    category: Optional[str] = None
    campus_id: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    team: Optional[Team] = None

    model_config = ConfigDict(frozen=True)


class ScheduleKey(NamedTuple):
    schedule_date: date
    category: Optional[str]


class RotationPeriod(BaseModel):
    id: str
    campus_id: str
    name: str
    start_date: date
    end_date: date

    model_config = ConfigDict(frozen=True)


class ScheduledTeam(BaseModel):
    """The team serving on a single date"""

    id: str
    team_id: str
    team_name: str
    team_color: str
    team_icon: str
    schedule_date: date
    campus_id: Optional[str] = None


# ============================================================================
# API PAYLOADS
# ============================================================================


class CustomServiceCreate(BaseModel):
    """Schema for creating a custom service"""

    campusId: str
    ministryType: str
    serviceName: str
    serviceDate: date
    startTime: Optional[time] = None
    endTime: Optional[time] = None
    repeatsWeekly: bool = False
    repeatUntil: Optional[date] = None
    createdBy: Optional[str] = None

    @field_validator("serviceName", "ministryType")
    @classmethod
    def validate_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError("Value must not be blank")
        return v.strip()


class ServiceDefinitionResponse(BaseModel):
    id: str
    campusId: Optional[str]
    ministryType: str
    serviceName: str
    serviceDate: date
    startTime: Optional[time]
    endTime: Optional[time]
    repeatsWeekly: bool
    repeatUntil: Optional[date]
    isActive: bool


class OccurrenceResponse(ServiceDefinitionResponse):
    occurrenceKey: str
    occurrenceDate: date


class TeamResponse(BaseModel):
    id: str
    name: str
    color: str
    icon: str


class TeamMemberResponse(BaseModel):
    id: str
    teamId: str
    memberName: str
    position: str
    displayOrder: int


class ScheduleEntryResponse(BaseModel):
    id: str
    teamId: str
    scheduleDate: date
    rotationPeriod: str
    ministryType: Optional[str]
    campusId: Optional[str]
    notes: Optional[str] = None
    team: Optional[TeamResponse] = None


class ScheduledTeamResponse(BaseModel):
    id: str
    teamId: str
    teamName: str
    teamColor: str
    teamIcon: str
    scheduleDate: date
    campusId: Optional[str]


class RotationPeriodResponse(BaseModel):
    rotationPeriod: Optional[str]


class AssignmentCreate(BaseModel):
    """Schema for assigning a member to one occurrence of a custom service"""

    assignmentDate: date
    userId: str
    role: str
    assignedBy: Optional[str] = None


class AssignmentResponse(BaseModel):
    id: str
    customServiceId: str
    assignmentDate: date
    userId: str
    role: str
    assignedBy: Optional[str]
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
