"""
Incident Controllers (API Routes)
=================================

FastAPI routes for incident intake, lookup, listing and statistics.

Controllers delegate to the IncidentService; application exceptions are
turned into HTTP responses by the handlers registered in main.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, status

from src.config import Settings, settings as default_settings, SortField, SortDirection
from src.core import ValidationException
from src.incidents.application import (
    IncidentService, IncidentQuery,
    CreateIncidentRequest, IncidentDTO, IncidentPageResponse,
    StatsResponse, ErrorResponse
)
from src.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/api/incidents", tags=["Incidents"])


# ========== Example payloads for Swagger ==========

INCIDENT_EXAMPLE = {
    "id": 4,
    "title": "Server is down, critical outage",
    "description": "All API nodes stopped responding after the 02:00 deploy.",
    "affectedService": "api-gateway",
    "status": "OPEN",
    "aiSeverity": "CRITICAL",
    "aiCategory": "HARDWARE",
    "aiSuggestedAction": "Replace failed hardware components immediately and check for data corruption.",
    "confidenceScore": 0.5,
    "createdAt": "2026-01-15T02:14:07.311000Z",
    "updatedAt": "2026-01-15T02:14:07.311000Z"
}

STATS_RESPONSE_EXAMPLE = {
    "total": 3,
    "severity": {"HIGH": 1, "CRITICAL": 1, "MEDIUM": 1},
    "category": {"DATABASE": 1, "SECURITY": 1, "FRONTEND": 1},
    "status": {"OPEN": 1, "IN_PROGRESS": 1, "RESOLVED": 1}
}


# ========== Dependencies ==========

def get_incident_service(request: Request) -> IncidentService:
    """Get the incident service created during application startup."""
    service = getattr(request.app.state, "incident_service", None)
    if service is None:
        raise HTTPException(
            status_code=503,
            detail="Incident store not initialized"
        )
    return service


def get_app_settings(request: Request) -> Settings:
    """Get the settings the running application was built with."""
    return getattr(request.app.state, "settings", default_settings)


# ========== Route Handlers ==========

@router.get(
    "",
    response_model=IncidentPageResponse,
    summary="List incidents",
    description="""
    List incidents with optional filtering, sorting and pagination.

    - **severity** / **category**: exact-match filters on the triage fields
    - **sortBy**: one of `createdAt`, `updatedAt`, `id`, `title`, `aiSeverity`,
      `aiCategory`, `status`, `confidenceScore`
    - **sortDir**: `asc` or `desc`
    - **page** is zero-based; a page past the end is returned empty
    """,
    responses={400: {"model": ErrorResponse, "description": "Unsupported sort or page size"}}
)
async def list_incidents(
    page: int = Query(0, ge=0, description="Zero-based page number"),
    size: Optional[int] = Query(None, ge=1, description="Page size"),
    severity: Optional[str] = Query(None, description="Filter by severity (CRITICAL, HIGH, MEDIUM, LOW)"),
    category: Optional[str] = Query(None, description="Filter by category"),
    sort_by: str = Query(SortField.CREATED_AT.value, alias="sortBy", description="Field to sort by"),
    sort_dir: str = Query(SortDirection.DESC.value, alias="sortDir", description="asc or desc"),
    app_settings: Settings = Depends(get_app_settings),
    service: IncidentService = Depends(get_incident_service)
):
    page_size = size if size is not None else app_settings.default_page_size
    if page_size > app_settings.max_page_size:
        raise ValidationException(
            f"size must not exceed {app_settings.max_page_size}",
            {"size": page_size}
        )

    result = await service.list_incidents(IncidentQuery(
        page=page,
        size=page_size,
        severity=severity,
        category=category,
        sort_by=sort_by,
        sort_dir=sort_dir
    ))
    return IncidentPageResponse.from_page(result)


@router.post(
    "",
    response_model=IncidentDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create and triage an incident",
    description="""
    Create an incident. The service assigns severity, category, a suggested
    action and a confidence score from the text, once, at creation.

    **Example Request**:
    ```json
    {
        "title": "Server is down, critical outage",
        "description": "All API nodes stopped responding after the 02:00 deploy.",
        "affectedService": "api-gateway"
    }
    ```
    """,
    responses={
        201: {
            "description": "Incident created",
            "content": {"application/json": {"example": INCIDENT_EXAMPLE}}
        },
        400: {"model": ErrorResponse, "description": "Missing or empty fields"}
    }
)
async def create_incident(
    request: Request,
    payload: Optional[CreateIncidentRequest] = Body(None),
    service: IncidentService = Depends(get_incident_service)
):
    correlation_id = getattr(request.state, "correlation_id", "unknown")

    # No body at all is treated like an empty one
    payload = payload or CreateIncidentRequest()
    incident = await service.create_incident(
        title=payload.title,
        description=payload.description,
        affected_service=payload.affected_service
    )

    logger.info(
        "Incident triaged",
        extra={
            "correlation_id": correlation_id,
            "incident_id": incident.id,
            "severity": incident.ai_severity.value
        }
    )
    return IncidentDTO.from_domain(incident)


@router.get(
    "/stats",
    response_model=StatsResponse,
    summary="Get incident statistics",
    description="Counts of all incidents by severity, category and status.",
    responses={
        200: {
            "description": "Statistics",
            "content": {"application/json": {"example": STATS_RESPONSE_EXAMPLE}}
        }
    }
)
async def get_stats(service: IncidentService = Depends(get_incident_service)):
    stats = await service.get_stats()
    return StatsResponse.from_stats(stats)


@router.get(
    "/{incident_id}",
    response_model=IncidentDTO,
    summary="Get an incident",
    responses={404: {"model": ErrorResponse, "description": "Incident not found"}}
)
async def get_incident(
    incident_id: int,
    service: IncidentService = Depends(get_incident_service)
):
    incident = await service.get_incident(incident_id)
    return IncidentDTO.from_domain(incident)


@router.put(
    "/{incident_id}/status",
    response_model=IncidentDTO,
    summary="Update incident status",
    description="Move an incident to OPEN, IN_PROGRESS, RESOLVED or CLOSED.",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid status"},
        404: {"model": ErrorResponse, "description": "Incident not found"}
    }
)
async def update_incident_status(
    request: Request,
    incident_id: int,
    new_status: Optional[str] = Query(None, alias="status", description="Target status"),
    service: IncidentService = Depends(get_incident_service)
):
    correlation_id = getattr(request.state, "correlation_id", "unknown")

    incident = await service.update_status(incident_id, new_status)

    logger.info(
        "Incident status changed",
        extra={
            "correlation_id": correlation_id,
            "incident_id": incident.id,
            "status": incident.status.value
        }
    )
    return IncidentDTO.from_domain(incident)


# Export router for inclusion in main app
incidents_router = router
