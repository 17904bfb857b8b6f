"""Scheduling repository - Database operations and row-to-record mapping"""

from datetime import date
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from ...models import (
    CustomService,
    CustomServiceAssignment,
    RotationPeriod as RotationPeriodRow,
    TeamMember,
    TeamSchedule,
    WorshipTeam,
)
from .schemas import RotationPeriod, ScheduleEntry, ServiceDefinition, Team


class SchedulingRepository:
    """Repository for scheduling database operations"""

    # Mapping helpers
    @staticmethod
    def to_team(row: WorshipTeam) -> Team:
        return Team(id=row.id, name=row.name, color=row.color, icon=row.icon)

    @staticmethod
    def to_service_definition(row: CustomService) -> ServiceDefinition:
        return ServiceDefinition(
            id=row.id,
            campus_id=row.campus_id,
            category=row.ministry_type,
            name=row.service_name,
            anchor_date=row.service_date,
            start_time=row.start_time,
            end_time=row.end_time,
            repeats_weekly=bool(row.repeats_weekly),
            repeat_until=row.repeat_until,
            is_active=bool(row.is_active),
        )

    @staticmethod
    def to_schedule_entry(row: TeamSchedule) -> ScheduleEntry:
        return ScheduleEntry(
            id=row.id,
            team_id=row.team_id,
            schedule_date=row.schedule_date,
            rotation_period=row.rotation_period,
            category=row.ministry_type,
            campus_id=row.campus_id,
            notes=row.notes,
            created_at=row.created_at,
            team=SchedulingRepository.to_team(row.team) if row.team else None,
        )

    @staticmethod
    def to_rotation_period(row: RotationPeriodRow) -> RotationPeriod:
        return RotationPeriod(
            id=row.id,
            campus_id=row.campus_id,
            name=row.name,
            start_date=row.start_date,
            end_date=row.end_date,
        )

    # Custom service definitions
    @staticmethod
    def get_service_definitions(
        db: Session, campus_id: Optional[str] = None
    ) -> list[ServiceDefinition]:
        """Get active custom service definitions, optionally for one campus"""
        query = db.query(CustomService).filter(CustomService.is_active.is_(True))

        if campus_id:
            query = query.filter(CustomService.campus_id == campus_id)

        rows = query.order_by(CustomService.service_date.asc()).all()
        return [SchedulingRepository.to_service_definition(r) for r in rows]

    @staticmethod
    def get_service_definitions_until(
        db: Session,
        range_end: date,
        campus_id: Optional[str] = None,
        category: Optional[str] = None,
    ) -> list[ServiceDefinition]:
        """Active definitions that may produce occurrences on or before range_end"""
        query = db.query(CustomService).filter(
            CustomService.is_active.is_(True),
            CustomService.service_date <= range_end,
        )

        if campus_id:
            query = query.filter(CustomService.campus_id == campus_id)
        if category:
            query = query.filter(CustomService.ministry_type == category)

        rows = query.order_by(CustomService.service_date.asc()).all()
        return [SchedulingRepository.to_service_definition(r) for r in rows]

    @staticmethod
    def get_custom_service(db: Session, service_id: str) -> Optional[CustomService]:
        return db.query(CustomService).filter(CustomService.id == service_id).first()

    @staticmethod
    def create_custom_service(db: Session, **service_data) -> CustomService:
        """Create a new custom service"""
        service = CustomService(**service_data)
        db.add(service)
        db.commit()
        db.refresh(service)
        return service

    @staticmethod
    def delete_custom_service(db: Session, service: CustomService) -> None:
        """Delete a custom service and its assignments"""
        db.delete(service)
        db.commit()

    # Team schedule
    @staticmethod
    def get_schedule_entries(
        db: Session,
        rotation_period: Optional[str] = None,
        campus_id: Optional[str] = None,
    ) -> list[ScheduleEntry]:
        """Schedule rows for a rotation; with a campus, that campus's rows plus shared rows"""
        query = db.query(TeamSchedule).options(joinedload(TeamSchedule.team))

        if rotation_period:
            query = query.filter(TeamSchedule.rotation_period == rotation_period)

        if campus_id:
            query = query.filter(
                or_(TeamSchedule.campus_id == campus_id, TeamSchedule.campus_id.is_(None))
            )

        rows = query.order_by(TeamSchedule.schedule_date.asc()).all()
        return [SchedulingRepository.to_schedule_entry(r) for r in rows]

    @staticmethod
    def get_schedule_entries_for_date(
        db: Session, on_date: date, campus_id: Optional[str] = None
    ) -> list[ScheduleEntry]:
        query = (
            db.query(TeamSchedule)
            .options(joinedload(TeamSchedule.team))
            .filter(TeamSchedule.schedule_date == on_date)
        )

        if campus_id:
            query = query.filter(
                or_(TeamSchedule.campus_id == campus_id, TeamSchedule.campus_id.is_(None))
            )

        return [SchedulingRepository.to_schedule_entry(r) for r in query.all()]

    @staticmethod
    def get_rotation_periods(db: Session, campus_id: str) -> list[RotationPeriod]:
        rows = (
            db.query(RotationPeriodRow)
            .filter(RotationPeriodRow.campus_id == campus_id)
            .order_by(RotationPeriodRow.start_date.asc())
            .all()
        )
        return [SchedulingRepository.to_rotation_period(r) for r in rows]

    # Teams
    @staticmethod
    def get_teams(db: Session) -> list[Team]:
        rows = db.query(WorshipTeam).order_by(WorshipTeam.name.asc()).all()
        return [SchedulingRepository.to_team(r) for r in rows]

    @staticmethod
    def get_team_members(db: Session, team_id: Optional[str] = None) -> list[TeamMember]:
        query = db.query(TeamMember)

        if team_id:
            query = query.filter(TeamMember.team_id == team_id)

        return query.order_by(TeamMember.display_order.asc()).all()

    # Custom service assignments
    @staticmethod
    def get_assignments(
        db: Session, custom_service_id: str, assignment_date: date
    ) -> list[CustomServiceAssignment]:
        return (
            db.query(CustomServiceAssignment)
            .filter(
                CustomServiceAssignment.custom_service_id == custom_service_id,
                CustomServiceAssignment.assignment_date == assignment_date,
            )
            .order_by(CustomServiceAssignment.created_at.asc())
            .all()
        )

    @staticmethod
    def get_assignment(db: Session, assignment_id: str) -> Optional[CustomServiceAssignment]:
        return (
            db.query(CustomServiceAssignment)
            .filter(CustomServiceAssignment.id == assignment_id)
            .first()
        )

    @staticmethod
    def upsert_assignment(
        db: Session,
        custom_service_id: str,
        assignment_date: date,
        user_id: str,
        role: str,
        assigned_by: Optional[str] = None,
    ) -> CustomServiceAssignment:
        """Insert an assignment, or refresh assigned_by when the same slot already exists"""
        assignment = (
            db.query(CustomServiceAssignment)
            .filter(
                CustomServiceAssignment.custom_service_id == custom_service_id,
                CustomServiceAssignment.assignment_date == assignment_date,
                CustomServiceAssignment.user_id == user_id,
                CustomServiceAssignment.role == role,
            )
            .first()
        )

        if assignment:
            assignment.assigned_by = assigned_by
        else:
            assignment = CustomServiceAssignment(
                custom_service_id=custom_service_id,
                assignment_date=assignment_date,
                user_id=user_id,
                role=role,
                assigned_by=assigned_by,
            )
            db.add(assignment)

        db.commit()
        db.refresh(assignment)
        return assignment

    @staticmethod
    def delete_assignment(db: Session, assignment: CustomServiceAssignment) -> None:
        db.delete(assignment)
        db.commit()
