"""
Incident Infrastructure Repositories
====================================

Implementations of the incident store.

- InMemoryIncidentRepository: transient in-process storage
- SQLAlchemyIncidentRepository: persistent storage over SQLAlchemy
"""

import itertools
import threading
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.config import IncidentStatus, Severity, Category
from src.core import RepositoryException
from src.incidents.application import IIncidentRepository
from src.incidents.domain import Incident, NewIncident
from src.incidents.infrastructure.models import IncidentModel

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class IdAllocator:
    """Thread-safe allocator of strictly increasing integer ids."""

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            return next(self._counter)


class InMemoryIncidentRepository(IIncidentRepository):
    """
    In-process incident store.

    Records are immutable values held in a dict behind a lock. Updates
    swap in a new record, so snapshots handed to readers never change
    underneath them and never contain a half-written record.
    """

    def __init__(self, clock: Clock = utc_now, id_allocator: Optional[IdAllocator] = None):
        self._clock = clock
        self._ids = id_allocator or IdAllocator()
        self._records: Dict[int, Incident] = {}
        self._lock = threading.Lock()

    async def create(self, draft: NewIncident) -> Incident:
        """Store a triaged incident under the next id."""
        now = self._clock()
        created_at = draft.created_at or now
        incident = Incident.from_draft(
            self._ids.next_id(),
            draft,
            created_at=created_at,
            updated_at=draft.updated_at or created_at
        )
        with self._lock:
            self._records[incident.id] = incident
        return incident

    async def get_by_id(self, incident_id: int) -> Optional[Incident]:
        """Get incident by id."""
        with self._lock:
            return self._records.get(incident_id)

    async def list_all(self) -> List[Incident]:
        """Snapshot of every stored incident in id order."""
        with self._lock:
            snapshot = list(self._records.values())
        return sorted(snapshot, key=lambda incident: incident.id)

    async def update_status(self, incident_id: int, status: IncidentStatus) -> Optional[Incident]:
        """Change status and stamp updated_at; None if the id is unknown."""
        with self._lock:
            current = self._records.get(incident_id)
            if current is None:
                return None
            updated = current.transition_to(status, self._clock())
            self._records[incident_id] = updated
        return updated

    async def count(self) -> int:
        with self._lock:
            return len(self._records)

    async def close(self) -> None:
        with self._lock:
            self._records.clear()


class SQLAlchemyIncidentRepository(IIncidentRepository):
    """
    SQLAlchemy implementation of the incident store.

    Every operation runs in its own session and transaction.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession], clock: Clock = utc_now):
        self._session_maker = session_maker
        self._clock = clock

    async def create(self, draft: NewIncident) -> Incident:
        """Insert a triaged incident; the database assigns the id."""
        now = self._clock()
        created_at = draft.created_at or now

        model = IncidentModel(
            title=draft.title,
            description=draft.description,
            affected_service=draft.affected_service,
            status=draft.status.value,
            ai_severity=draft.triage.severity.value,
            ai_category=draft.triage.category.value,
            ai_suggested_action=draft.triage.suggested_action,
            confidence_score=draft.triage.confidence,
            created_at=created_at,
            updated_at=draft.updated_at or created_at
        )

        try:
            async with self._session_maker() as session:
                async with session.begin():
                    session.add(model)
                    await session.flush()
                    return self._to_domain(model)
        except SQLAlchemyError as e:
            raise RepositoryException(f"Failed to store incident: {e}")

    async def get_by_id(self, incident_id: int) -> Optional[Incident]:
        """Get incident by id."""
        async with self._session_maker() as session:
            model = await session.get(IncidentModel, incident_id)
            return self._to_domain(model) if model else None

    async def list_all(self) -> List[Incident]:
        """Snapshot of every stored incident in id order."""
        async with self._session_maker() as session:
            stmt = select(IncidentModel).order_by(IncidentModel.id)
            result = await session.execute(stmt)
            return [self._to_domain(m) for m in result.scalars().all()]

    async def update_status(self, incident_id: int, status: IncidentStatus) -> Optional[Incident]:
        """Change status and stamp updated_at under a row lock."""
        try:
            async with self._session_maker() as session:
                async with session.begin():
                    stmt = (
                        select(IncidentModel)
                        .where(IncidentModel.id == incident_id)
                        .with_for_update()
                    )
                    result = await session.execute(stmt)
                    model = result.scalar_one_or_none()
                    if model is None:
                        return None

                    updated = self._to_domain(model).transition_to(status, self._clock())
                    model.status = updated.status.value
                    model.updated_at = updated.updated_at
                    return updated
        except SQLAlchemyError as e:
            raise RepositoryException(f"Failed to update incident {incident_id}: {e}")

    async def count(self) -> int:
        async with self._session_maker() as session:
            result = await session.execute(select(func.count(IncidentModel.id)))
            return result.scalar_one()

    @staticmethod
    def _as_utc(value: datetime) -> datetime:
        # SQLite hands back naive datetimes
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)

    def _to_domain(self, model: IncidentModel) -> Incident:
        return Incident(
            id=model.id,
            title=model.title,
            description=model.description,
            affected_service=model.affected_service,
            status=IncidentStatus(model.status),
            ai_severity=Severity(model.ai_severity),
            ai_category=Category(model.ai_category),
            ai_suggested_action=model.ai_suggested_action,
            confidence_score=model.confidence_score,
            created_at=self._as_utc(model.created_at),
            updated_at=self._as_utc(model.updated_at)
        )
