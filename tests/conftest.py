"""
Pytest configuration and shared fixtures.

Provides test settings, clocks, incident factories and store/service
instances for unit and integration tests.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.config import Settings, Severity, Category, IncidentStatus
from src.incidents.application import IncidentService
from src.incidents.domain import Incident
from src.incidents.infrastructure import (
    InMemoryIncidentRepository,
    SQLAlchemyIncidentRepository
)
from src.infrastructure.database import create_engine_for_url, create_tables


BASE_TIME = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


class StepClock:
    """Clock that moves forward by a fixed step on every reading."""

    def __init__(self, start: datetime = BASE_TIME, step: timedelta = timedelta(seconds=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value


@pytest.fixture
def test_settings() -> Settings:
    """
    Settings for tests: no sample data, quiet logging, in-memory store.

    Explicit values so tests do not depend on a developer's .env file.
    """
    return Settings(
        environment="test",
        log_level="WARNING",
        storage_backend="memory",
        seed_sample_data=False,
        default_page_size=10,
        max_page_size=100,
    )


@pytest.fixture
def base_time() -> datetime:
    """First reading of the test clock."""
    return BASE_TIME


@pytest.fixture
def clock(base_time) -> StepClock:
    return StepClock(start=base_time)


@pytest.fixture
def memory_repository(clock) -> InMemoryIncidentRepository:
    return InMemoryIncidentRepository(clock=clock)


@pytest.fixture
def incident_service(memory_repository) -> IncidentService:
    return IncidentService(memory_repository)


@pytest.fixture
async def sqlite_repository(clock):
    """SQLAlchemy store backed by a private in-memory SQLite database."""
    engine = create_engine_for_url("sqlite+aiosqlite://")
    await create_tables(engine)
    session_maker = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    yield SQLAlchemyIncidentRepository(session_maker, clock=clock)
    await engine.dispose()


@pytest.fixture
def make_incident() -> Callable[..., Incident]:
    """Factory for stored incidents with sensible defaults."""

    def _make(
        incident_id: int,
        severity: Severity = Severity.LOW,
        category: Category = Category.SOFTWARE,
        status: IncidentStatus = IncidentStatus.OPEN,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
        confidence: float = 0.5,
        title: Optional[str] = None,
    ) -> Incident:
        created = created_at or BASE_TIME + timedelta(minutes=incident_id)
        return Incident(
            id=incident_id,
            title=title or f"Incident {incident_id}",
            description="Generated for tests",
            affected_service="test-service",
            status=status,
            ai_severity=severity,
            ai_category=category,
            ai_suggested_action="Do something",
            confidence_score=confidence,
            created_at=created,
            updated_at=updated_at or created,
        )

    return _make


def pytest_configure(config):
    """
    Pytest hook for custom configuration.

    Registers custom markers used throughout tests.
    """
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
