"""
Sample Incident Data
====================

Demo incidents loaded into an empty store at startup when
settings.seed_sample_data is enabled. Their triage fields are fixed
historical values, not recomputed.
"""

from datetime import datetime, timedelta, timezone
from typing import List, Optional

from src.config import Severity, Category, IncidentStatus
from src.incidents.application import IIncidentRepository
from src.incidents.domain import NewIncident, TriageAnalysis, ACTION_TABLE
from src.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


def sample_incidents(now: Optional[datetime] = None) -> List[NewIncident]:
    """Build the sample incidents with timestamps relative to now."""
    now = now or datetime.now(timezone.utc)

    return [
        NewIncident(
            title="Database connection timeout",
            description=(
                "Users are experiencing slow response times when accessing the user dashboard. "
                "Database queries are timing out after 30 seconds."
            ),
            affected_service="user-dashboard",
            status=IncidentStatus.OPEN,
            triage=TriageAnalysis(
                severity=Severity.HIGH,
                category=Category.DATABASE,
                suggested_action=ACTION_TABLE[Severity.HIGH][Category.DATABASE],
                confidence=0.85
            ),
            created_at=now - timedelta(hours=2),
            updated_at=now - timedelta(hours=2)
        ),
        NewIncident(
            title="Security vulnerability in authentication service",
            description=(
                "Potential SQL injection vulnerability discovered in the login endpoint. "
                "This could allow unauthorized access to user accounts."
            ),
            affected_service="authentication-service",
            status=IncidentStatus.IN_PROGRESS,
            triage=TriageAnalysis(
                severity=Severity.CRITICAL,
                category=Category.SECURITY,
                suggested_action=ACTION_TABLE[Severity.CRITICAL][Category.SECURITY],
                confidence=0.95
            ),
            created_at=now - timedelta(hours=4),
            updated_at=now - timedelta(hours=1)
        ),
        NewIncident(
            title="Frontend CSS styling issue",
            description=(
                "The navigation menu is not displaying correctly on mobile devices. "
                "Users report that menu items are overlapping."
            ),
            affected_service="web-frontend",
            status=IncidentStatus.RESOLVED,
            triage=TriageAnalysis(
                severity=Severity.MEDIUM,
                category=Category.FRONTEND,
                suggested_action=ACTION_TABLE[Severity.MEDIUM][Category.FRONTEND],
                confidence=0.75
            ),
            created_at=now - timedelta(hours=6),
            updated_at=now - timedelta(minutes=30)
        ),
    ]


async def seed_sample_incidents(
    repository: IIncidentRepository,
    now: Optional[datetime] = None
) -> int:
    """
    Load the sample incidents into an empty store.

    Returns:
        Number of incidents inserted (0 when the store already has data)
    """
    if await repository.count() > 0:
        logger.info("Store already populated, skipping sample data")
        return 0

    inserted = 0
    for draft in sample_incidents(now):
        await repository.create(draft)
        inserted += 1

    logger.info("Sample incidents loaded", extra={"count": inserted})
    return inserted
