import fnmatch
import os
from datetime import date, time

# Configure before the package reads its settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CACHE_ENABLED", "false")
os.environ.setdefault("DB_LOG_SLOW_QUERIES", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from worship_rota import models
from worship_rota.cache import Cache
from worship_rota.database import Base, get_db
from worship_rota.domain.scheduling.router import get_scheduling_service
from worship_rota.domain.scheduling.service import SchedulingService
from worship_rota.main import app


class FakeRedis:
    """In-memory stand-in for the handful of Redis commands the cache uses"""

    def __init__(self):
        self.store = {}
        self.ttls = {}

    def ping(self):
        return True

    def get(self, key):
        return self.store.get(key)

    def setex(self, key, ttl, value):
        self.store[key] = value
        self.ttls[key] = ttl

    def keys(self, pattern):
        return [k for k in self.store if fnmatch.fnmatch(k, pattern)]

    def delete(self, *keys):
        removed = 0
        for key in keys:
            if self.store.pop(key, None) is not None:
                removed += 1
        return removed


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def occurrence_cache(fake_redis):
    return Cache(client=fake_redis, enabled=True)


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def service(db, occurrence_cache):
    return SchedulingService(db, occurrence_cache=occurrence_cache)


@pytest.fixture
def client(db, occurrence_cache):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_scheduling_service] = lambda: SchedulingService(
        db, occurrence_cache=occurrence_cache
    )
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def seeded(db):
    """Two teams, a shared rotation, one campus override and a rotation period"""
    blue = models.WorshipTeam(id="team-blue", name="Blue Team", color="#2563eb", icon="waves")
    gold = models.WorshipTeam(id="team-gold", name="Gold Team", color="#ca8a04", icon="sun")
    db.add_all([blue, gold])
    db.add_all(
        [
            models.TeamMember(
                team_id="team-blue", member_name="Sam", position="vocalist", display_order=2
            ),
            models.TeamMember(
                team_id="team-blue", member_name="Alex", position="drums", display_order=1
            ),
            models.TeamMember(
                team_id="team-gold", member_name="Jo", position="keys", display_order=1
            ),
        ]
    )
    db.add_all(
        [
            models.TeamSchedule(
                id="shared-feb-1",
                team_id="team-blue",
                schedule_date=date(2026, 2, 1),
                rotation_period="Winter 2026",
                ministry_type="worship",
                campus_id=None,
            ),
            models.TeamSchedule(
                id="campus-a-feb-1",
                team_id="team-gold",
                schedule_date=date(2026, 2, 1),
                rotation_period="Winter 2026",
                ministry_type="worship",
                campus_id="campus-a",
            ),
            models.TeamSchedule(
                id="shared-feb-8",
                team_id="team-gold",
                schedule_date=date(2026, 2, 8),
                rotation_period="Winter 2026",
                ministry_type="worship",
                campus_id=None,
            ),
            models.TeamSchedule(
                id="shared-spring",
                team_id="team-blue",
                schedule_date=date(2026, 4, 5),
                rotation_period="Spring 2026",
                ministry_type="worship",
                campus_id=None,
            ),
        ]
    )
    db.add(
        models.RotationPeriod(
            id="period-winter",
            campus_id="campus-a",
            name="Winter 2026",
            start_date=date(2026, 1, 1),
            end_date=date(2026, 3, 31),
        )
    )
    db.add_all(
        [
            models.CustomService(
                id="youth-night",
                campus_id="campus-a",
                ministry_type="youth",
                service_name="Youth Night",
                service_date=date(2026, 1, 5),
                start_time=time(18, 30),
                repeats_weekly=True,
                repeat_until=date(2026, 1, 26),
            ),
            models.CustomService(
                id="easter",
                campus_id="campus-a",
                ministry_type="worship",
                service_name="Easter Sunrise",
                service_date=date(2026, 4, 5),
                start_time=time(6, 30),
            ),
            models.CustomService(
                id="retired",
                campus_id="campus-a",
                ministry_type="worship",
                service_name="Old Vigil",
                service_date=date(2026, 1, 6),
                repeats_weekly=True,
                is_active=False,
            ),
            models.CustomService(
                id="campus-b-prayer",
                campus_id="campus-b",
                ministry_type="worship",
                service_name="Prayer Night",
                service_date=date(2026, 1, 7),
                repeats_weekly=True,
            ),
        ]
    )
    db.commit()
    return db
