import uuid

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    Time,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


def generate_id():
    """Generate a UUID primary key, matching the hosted datastore's uuid columns"""
    return str(uuid.uuid4())


class Campus(Base):
    __tablename__ = "campuses"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime, server_default=func.now())


class WorshipTeam(Base):
    __tablename__ = "worship_teams"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    color = Column(String(32), nullable=False, default="#6366f1")
    icon = Column(String(64), nullable=False, default="music")
    created_at = Column(DateTime, server_default=func.now())

    members = relationship("TeamMember", back_populates="team", cascade="all, delete-orphan")


class TeamMember(Base):
    __tablename__ = "team_members"

    id = Column(String(36), primary_key=True, default=generate_id)
    team_id = Column(String(36), ForeignKey("worship_teams.id"), nullable=False, index=True)
    member_name = Column(String(255), nullable=False)
    position = Column(String(64), nullable=False)
    display_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now())

    team = relationship("WorshipTeam", back_populates="members")


class TeamSchedule(Base):
    __tablename__ = "team_schedule"

    id = Column(String(36), primary_key=True, default=generate_id)
    team_id = Column(String(36), ForeignKey("worship_teams.id"), nullable=False, index=True)
    schedule_date = Column(Date, nullable=False, index=True)
    rotation_period = Column(String(100), nullable=False, index=True)
    ministry_type = Column(String(64), nullable=True)  # null = uncategorized
    campus_id = Column(String(36), ForeignKey("campuses.id"), nullable=True)  # null = all campuses
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    team = relationship("WorshipTeam")


class RotationPeriod(Base):
    __tablename__ = "rotation_periods"

    id = Column(String(36), primary_key=True, default=generate_id)
    campus_id = Column(String(36), ForeignKey("campuses.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    created_at = Column(DateTime, server_default=func.now())


class CustomService(Base):
    __tablename__ = "custom_services"

    id = Column(String(36), primary_key=True, default=generate_id)
    campus_id = Column(String(36), ForeignKey("campuses.id"), nullable=False, index=True)
    ministry_type = Column(String(64), nullable=False)
    service_name = Column(String(255), nullable=False)
    service_date = Column(Date, nullable=False)  # first occurrence
    start_time = Column(Time, nullable=True)
    end_time = Column(Time, nullable=True)
    repeats_weekly = Column(Boolean, default=False, nullable=False)
    repeat_until = Column(Date, nullable=True)  # inclusive
    is_active = Column(Boolean, default=True, nullable=False)
    created_by = Column(String(36), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    assignments = relationship(
        "CustomServiceAssignment", back_populates="custom_service", cascade="all, delete-orphan"
    )


class CustomServiceAssignment(Base):
    __tablename__ = "custom_service_assignments"
    __table_args__ = (
        UniqueConstraint(
            "custom_service_id",
            "assignment_date",
            "user_id",
            "role",
            name="uq_custom_service_assignment",
        ),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    custom_service_id = Column(
        String(36), ForeignKey("custom_services.id"), nullable=False, index=True
    )
    assignment_date = Column(Date, nullable=False)
    user_id = Column(String(36), nullable=False)
    role = Column(String(64), nullable=False)
    assigned_by = Column(String(36), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    custom_service = relationship("CustomService", back_populates="assignments")
