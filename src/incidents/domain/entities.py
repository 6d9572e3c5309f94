"""
Incident Domain Entities
========================

Pure Python business objects for incident triage.

Following Domain-Driven Design principles, these entities contain
business rules and are free of infrastructure concerns.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from src.config import Severity, Category, IncidentStatus


@dataclass(frozen=True)
class TriageAnalysis:
    """
    Triage metadata attached to an incident at creation time.

    Produced once by the triage pipeline and never recomputed.
    """
    severity: Severity
    category: Category
    suggested_action: str
    confidence: float  # 0.0 to 1.0

    def __post_init__(self):
        """Validate triage analysis."""
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError("Confidence must be between 0 and 1")


@dataclass(frozen=True)
class NewIncident:
    """
    An incident that has been triaged but not yet stored.

    Timestamps are normally left empty so the store stamps them;
    sample data supplies back-dated ones.
    """
    title: str
    description: str
    affected_service: str
    triage: TriageAnalysis
    status: IncidentStatus = IncidentStatus.OPEN
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class Incident:
    """
    Stored incident record.

    Only status and updated_at ever change, and they change by producing
    a new value (see transition_to) so a reader holding a record never
    sees it half-updated.
    """
    id: int
    title: str
    description: str
    affected_service: str
    status: IncidentStatus
    ai_severity: Severity
    ai_category: Category
    ai_suggested_action: str
    confidence_score: float
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate incident on initialization."""
        if self.updated_at < self.created_at:
            raise ValueError("updated_at cannot be before created_at")
        if not 0.0 <= self.confidence_score <= 1.0:
            raise ValueError("confidence_score must be between 0 and 1")

    @classmethod
    def from_draft(
        cls,
        incident_id: int,
        draft: NewIncident,
        created_at: datetime,
        updated_at: datetime
    ) -> "Incident":
        """Build a stored record from a triaged draft."""
        return cls(
            id=incident_id,
            title=draft.title,
            description=draft.description,
            affected_service=draft.affected_service,
            status=draft.status,
            ai_severity=draft.triage.severity,
            ai_category=draft.triage.category,
            ai_suggested_action=draft.triage.suggested_action,
            confidence_score=draft.triage.confidence,
            created_at=created_at,
            updated_at=updated_at,
        )

    def transition_to(self, status: IncidentStatus, timestamp: datetime) -> "Incident":
        """Return a copy with the new status, updated_at never before created_at."""
        return replace(self, status=status, updated_at=max(timestamp, self.created_at))
