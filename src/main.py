"""
Incident Triage Service - Main Application
==========================================

Rule-based incident triage with a queryable incident list.

Clean Architecture Layers:
- Interfaces: FastAPI controllers
- Application: Triage pipeline, incident service, query engine, stats
- Domain: Entities, classifier, action table, confidence scoring
- Infrastructure: In-memory and SQLAlchemy incident stores
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

# Configuration and Core
from src.config import Settings, settings
from src.core import ApplicationException

# Infrastructure
from src.infrastructure.database import (
    init_database, close_database, create_tables, get_session_maker
)

# Incidents module
from src.incidents.application import IIncidentRepository, IncidentService
from src.incidents.infrastructure import (
    InMemoryIncidentRepository,
    SQLAlchemyIncidentRepository,
    seed_sample_incidents
)
from src.incidents.interfaces import incidents_router

# Logging & middleware
from src.shared.infrastructure.logging import setup_logging, get_logger
from src.shared.api.middleware import (
    CorrelationIDMiddleware,
    MetricsMiddleware,
    LoggingMiddleware,
    application_exception_handler,
    global_exception_handler
)

logger = get_logger(__name__)


async def build_repository(app_settings: Settings) -> IIncidentRepository:
    """Create the incident store selected by settings.storage_backend."""
    if app_settings.storage_backend == "database":
        logger.info("Initializing database store")
        init_database(app_settings.database_url)
        await create_tables()
        return SQLAlchemyIncidentRepository(get_session_maker())

    logger.info("Initializing in-memory store")
    return InMemoryIncidentRepository()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager.

    STARTUP:
    1. Setup structured logging
    2. Create the incident store
    3. Load sample incidents (optional)
    4. Wire the incident service

    SHUTDOWN:
    1. Close the incident store
    2. Close database connections
    """
    app_settings: Settings = app.state.settings

    # === STARTUP ===
    setup_logging(level=app_settings.log_level, environment=app_settings.environment)
    logger.info("Starting Incident Triage Service", extra={
        "version": app_settings.app_version,
        "environment": app_settings.environment,
        "storage_backend": app_settings.storage_backend
    })

    repository = await build_repository(app_settings)

    if app_settings.seed_sample_data:
        await seed_sample_incidents(repository)

    app.state.incident_service = IncidentService(repository)

    logger.info("Incident Triage Service started", extra={
        "incidents_loaded": await repository.count()
    })

    yield  # Application runs here

    # === SHUTDOWN ===
    logger.info("Shutting down Incident Triage Service")

    app.state.incident_service = None
    await repository.close()

    if app_settings.storage_backend == "database":
        await close_database()

    logger.info("Incident Triage Service shutdown complete")


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application around the given settings."""
    app_settings = app_settings or settings

    app = FastAPI(
        title="Incident Triage API",
        description="""
    ## Automated Incident Triage

    Submit free-text incident reports and get deterministic, rule-based
    triage: a severity tier, a functional category, a recommended action and
    a confidence score.

    **Endpoints:**
    - `POST /api/incidents` - Create and triage an incident
    - `GET /api/incidents` - List incidents (filter, sort, paginate)
    - `GET /api/incidents/{id}` - Get one incident
    - `PUT /api/incidents/{id}/status` - Update incident status
    - `GET /api/incidents/stats` - Counts by severity, category and status
    """,
        version=app_settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )
    app.state.settings = app_settings
    app.state.incident_service = None

    # === CORS Middleware ===
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials="*" not in app_settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Last added runs first: correlation ID must be set before logging
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(CorrelationIDMiddleware)
    app.add_exception_handler(ApplicationException, application_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    # === Include Module Routers ===
    app.include_router(incidents_router)

    @app.get("/health", tags=["Health"])
    async def health_check(request: Request):
        """Health check endpoint for load balancers and orchestrators."""
        service = request.app.state.incident_service
        checks = {"incident_store": "not_initialized"}

        if service is not None:
            try:
                count = await service.repository.count()
                checks["incident_store"] = f"available ({count} incidents)"
            except Exception as e:
                checks["incident_store"] = f"error: {str(e)}"

        return {
            "status": "healthy" if service is not None else "starting",
            "version": app_settings.app_version,
            "environment": app_settings.environment,
            "checks": checks
        }

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "service": "Incident Triage Service",
            "version": app_settings.app_version,
            "docs": "/docs",
            "health": "/health",
            "endpoints": [
                "POST /api/incidents - Create and triage incident",
                "GET /api/incidents - List incidents",
                "GET /api/incidents/{id} - Get incident",
                "PUT /api/incidents/{id}/status - Update status",
                "GET /api/incidents/stats - Get statistics"
            ]
        }

    return app


app = create_app()


# === Development Entry Point ===

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        log_level="info"
    )
