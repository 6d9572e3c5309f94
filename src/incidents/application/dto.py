"""
Incident Application DTOs
=========================

Data Transfer Objects for the incidents API layer.

Pydantic models for request/response serialization. Wire names are
camelCase; Python attribute names stay snake_case.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.incidents.application.query import IncidentPage
from src.incidents.application.stats import IncidentStats
from src.incidents.domain import Incident


# ========== Type Aliases for Literals ==========
SeverityStr = Literal["CRITICAL", "HIGH", "MEDIUM", "LOW"]
CategoryStr = Literal["SECURITY", "NETWORK", "DATABASE", "FRONTEND", "HARDWARE", "SOFTWARE"]
IncidentStatusStr = Literal["OPEN", "IN_PROGRESS", "RESOLVED", "CLOSED"]


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ========== Request DTOs ==========

class CreateIncidentRequest(CamelModel):
    """
    Request model for incident creation.

    Fields are optional and untyped here so that missing, empty or non-text
    values reach the triage pipeline, which owns the required-field rule.
    """
    title: Optional[Any] = Field(None, description="Short incident title")
    description: Optional[Any] = Field(None, description="Free-text incident description")
    affected_service: Optional[Any] = Field(None, description="Name of the affected service")


# ========== Response DTOs ==========

class IncidentDTO(CamelModel):
    """Incident record as returned by the API."""
    id: int
    title: str
    description: str
    affected_service: str
    status: IncidentStatusStr
    ai_severity: SeverityStr
    ai_category: CategoryStr
    ai_suggested_action: str
    confidence_score: float = Field(..., ge=0.0, le=1.0)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, incident: Incident) -> "IncidentDTO":
        """Create from domain entity."""
        return cls(
            id=incident.id,
            title=incident.title,
            description=incident.description,
            affected_service=incident.affected_service,
            status=incident.status.value,
            ai_severity=incident.ai_severity.value,
            ai_category=incident.ai_category.value,
            ai_suggested_action=incident.ai_suggested_action,
            confidence_score=incident.confidence_score,
            created_at=incident.created_at,
            updated_at=incident.updated_at
        )


class IncidentPageResponse(CamelModel):
    """One page of incidents with pagination metadata."""
    content: List[IncidentDTO]
    number: int
    size: int
    total_elements: int
    total_pages: int

    @classmethod
    def from_page(cls, page: IncidentPage) -> "IncidentPageResponse":
        return cls(
            content=[IncidentDTO.from_domain(i) for i in page.content],
            number=page.number,
            size=page.size,
            total_elements=page.total_elements,
            total_pages=page.total_pages
        )


class StatsResponse(BaseModel):
    """Response model for incident statistics."""
    total: int
    severity: Dict[str, int]
    category: Dict[str, int]
    status: Dict[str, int]

    @classmethod
    def from_stats(cls, stats: IncidentStats) -> "StatsResponse":
        return cls(
            total=stats.total,
            severity=stats.severity,
            category=stats.category,
            status=stats.status
        )


class ErrorResponse(BaseModel):
    """Error body returned for handled application errors."""
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)
    correlation_id: Optional[str] = None
