"""
Incident Application Layer
==========================

Application layer for incident triage.

Contains:
- Services: Triage pipeline and incident lifecycle orchestration
- Query: Filtering, sorting and pagination over record snapshots
- Stats: Aggregate counts by severity, category and status
- DTOs: Data transfer objects for API serialization
"""

from src.incidents.application.query import IncidentQuery, IncidentPage, QueryEngine
from src.incidents.application.stats import IncidentStats, StatsAggregator
from src.incidents.application.services import (
    IIncidentRepository,
    TriagePipeline,
    IncidentService,
    parse_status
)
from src.incidents.application.dto import (
    CreateIncidentRequest,
    IncidentDTO,
    IncidentPageResponse,
    StatsResponse,
    ErrorResponse
)

__all__ = [
    # Query & stats
    "IncidentQuery",
    "IncidentPage",
    "QueryEngine",
    "IncidentStats",
    "StatsAggregator",
    # Services
    "TriagePipeline",
    "IncidentService",
    "parse_status",
    # Repository Interfaces
    "IIncidentRepository",
    # DTOs
    "CreateIncidentRequest",
    "IncidentDTO",
    "IncidentPageResponse",
    "StatsResponse",
    "ErrorResponse",
]
