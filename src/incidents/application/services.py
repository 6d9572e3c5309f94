"""
Incident Application Services
=============================

Application services for incident triage, lookup and reporting.

Orchestrates business logic between domain functions and the incident store.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from src.config import IncidentStatus, VALID_STATUSES
from src.core import (
    ValidationException, ResourceNotFoundException, InvalidStatusException
)
from src.incidents.domain import (
    Incident, NewIncident, TriageAnalysis,
    classify_severity, classify_category, recommend_action, score_confidence
)
from src.incidents.application.query import IncidentQuery, IncidentPage, QueryEngine
from src.incidents.application.stats import IncidentStats, StatsAggregator
from src.shared.infrastructure.logging import get_logger, log_latency

logger = get_logger(__name__)


# ========== Repository Interfaces ==========

class IIncidentRepository(ABC):
    """
    Interface for incident storage.

    Implementations allocate ids atomically and hand out whole records:
    a reader sees either the old or the new version of a record.
    """

    @abstractmethod
    async def create(self, draft: NewIncident) -> Incident:
        """Store a triaged incident under the next id."""

    @abstractmethod
    async def get_by_id(self, incident_id: int) -> Optional[Incident]:
        """Get incident by id."""

    @abstractmethod
    async def list_all(self) -> List[Incident]:
        """Snapshot of every stored incident in id order."""

    @abstractmethod
    async def update_status(self, incident_id: int, status: IncidentStatus) -> Optional[Incident]:
        """Change status and stamp updated_at; None if the id is unknown."""

    @abstractmethod
    async def count(self) -> int:
        """Number of stored incidents."""

    async def close(self) -> None:
        """Release resources held by the store."""


def parse_status(value: Any) -> IncidentStatus:
    """
    Convert a raw status value into an IncidentStatus.

    Raises:
        InvalidStatusException: If the value is not a lifecycle status
    """
    try:
        return IncidentStatus(value)
    except ValueError:
        raise InvalidStatusException(value, [s.value for s in VALID_STATUSES])


# ========== Application Services ==========

class TriagePipeline:
    """
    Rule-based triage of a new incident.

    Runs once per incident at creation: classification, recommended
    action and confidence are never recomputed afterwards.
    """

    REQUIRED_FIELDS_MESSAGE = "Title, description, and affected service are required"

    def validate(self, title: Any, description: Any, affected_service: Any) -> None:
        """Reject missing, non-text or blank creation fields."""
        fields = {
            "title": title,
            "description": description,
            "affectedService": affected_service,
        }
        missing = [
            name for name, value in fields.items()
            if not isinstance(value, str) or not value.strip()
        ]
        if missing:
            raise ValidationException(self.REQUIRED_FIELDS_MESSAGE, {"missing": missing})

    def analyze(self, title: str, description: str, affected_service: str) -> TriageAnalysis:
        """
        Classify, recommend and score an incident.

        Args:
            title: Incident title
            description: Incident description
            affected_service: Name of the affected service

        Returns:
            TriageAnalysis with severity, category, action and confidence

        Raises:
            ValidationException: If any field is missing or empty
        """
        self.validate(title, description, affected_service)

        severity = classify_severity(title, description)
        category = classify_category(title, description, affected_service)

        return TriageAnalysis(
            severity=severity,
            category=category,
            suggested_action=recommend_action(severity, category),
            confidence=score_confidence(title, description)
        )

    def triage(self, title: str, description: str, affected_service: str) -> NewIncident:
        """Build a storable draft carrying the triage analysis."""
        return NewIncident(
            title=title,
            description=description,
            affected_service=affected_service,
            triage=self.analyze(title, description, affected_service)
        )


class IncidentService:
    """
    Service for incident lifecycle and reporting.

    Coordinates between the triage pipeline, the incident store and the
    read-side query engine and stats aggregator.
    """

    def __init__(
        self,
        repository: IIncidentRepository,
        pipeline: Optional[TriagePipeline] = None,
        query_engine: Optional[QueryEngine] = None,
        stats_aggregator: Optional[StatsAggregator] = None
    ):
        self._repository = repository
        self._pipeline = pipeline or TriagePipeline()
        self._query_engine = query_engine or QueryEngine()
        self._stats = stats_aggregator or StatsAggregator()

    @property
    def repository(self) -> IIncidentRepository:
        return self._repository

    async def create_incident(
        self,
        title: Any,
        description: Any,
        affected_service: Any
    ) -> Incident:
        """
        Triage and store a new incident.

        Raises:
            ValidationException: If a required field is missing or empty;
                nothing is stored in that case
        """
        draft = self._pipeline.triage(title, description, affected_service)
        incident = await self._repository.create(draft)

        logger.info(
            "Incident created",
            extra={
                "incident_id": incident.id,
                "severity": incident.ai_severity.value,
                "category": incident.ai_category.value,
                "confidence": incident.confidence_score
            }
        )
        return incident

    async def get_incident(self, incident_id: int) -> Incident:
        """
        Get incident by id.

        Raises:
            ResourceNotFoundException: If no incident has this id
        """
        incident = await self._repository.get_by_id(incident_id)
        if incident is None:
            logger.info("Incident not found", extra={"incident_id": incident_id})
            raise ResourceNotFoundException("Incident", incident_id)
        return incident

    async def list_incidents(self, query: IncidentQuery) -> IncidentPage:
        """Filter, sort and paginate a snapshot of the store."""
        records = await self._repository.list_all()
        with log_latency(logger, "list_incidents", page=query.page, size=query.size):
            return self._query_engine.execute(records, query)

    async def update_status(self, incident_id: int, status: Any) -> Incident:
        """
        Move an incident to a new lifecycle status.

        The id is checked before the status value; on either error the
        store is left unchanged.

        Raises:
            ResourceNotFoundException: If no incident has this id
            InvalidStatusException: If status is not a lifecycle status
        """
        current = await self.get_incident(incident_id)
        new_status = parse_status(status)

        updated = await self._repository.update_status(incident_id, new_status)
        if updated is None:
            raise ResourceNotFoundException("Incident", incident_id)

        logger.info(
            "Incident status updated",
            extra={
                "incident_id": incident_id,
                "from_status": current.status.value,
                "to_status": updated.status.value
            }
        )
        return updated

    async def get_stats(self) -> IncidentStats:
        """Aggregate counts over every stored incident."""
        records = await self._repository.list_all()
        return self._stats.aggregate(records)
