"""
Unit tests for the incident service.
"""

import pytest

from src.config import Severity, Category, IncidentStatus
from src.core import ValidationException, ResourceNotFoundException, InvalidStatusException
from src.incidents.application import IncidentQuery, parse_status


async def test_create_returns_triaged_record(incident_service):
    incident = await incident_service.create_incident(
        "Server is down, critical outage", "Nothing responds", "api-gateway"
    )

    assert incident.id == 1
    assert incident.ai_severity == Severity.CRITICAL
    assert incident.status == IncidentStatus.OPEN
    assert 0.5 <= incident.confidence_score <= 1.0


async def test_security_example(incident_service):
    incident = await incident_service.create_incident(
        "Potential SQL injection in login",
        "Logs show unauthorized access to admin accounts",
        "auth-service",
    )
    assert incident.ai_category == Category.SECURITY


async def test_invalid_create_stores_nothing(incident_service, memory_repository):
    with pytest.raises(ValidationException):
        await incident_service.create_incident("Title", "", "svc")
    assert await memory_repository.count() == 0


async def test_get_unknown_raises_not_found(incident_service):
    with pytest.raises(ResourceNotFoundException) as exc_info:
        await incident_service.get_incident(7)
    assert exc_info.value.resource_id == 7


async def test_get_twice_is_identical(incident_service):
    created = await incident_service.create_incident("Disk full", "Node 3 out of space", "storage")
    assert await incident_service.get_incident(created.id) == await incident_service.get_incident(created.id)


async def test_update_status(incident_service):
    created = await incident_service.create_incident("Disk full", "Node 3 out of space", "storage")

    updated = await incident_service.update_status(created.id, "IN_PROGRESS")

    assert updated.status == IncidentStatus.IN_PROGRESS
    assert updated.updated_at >= updated.created_at


async def test_bogus_status_leaves_record_unchanged(incident_service):
    created = await incident_service.create_incident("Disk full", "Node 3 out of space", "storage")

    with pytest.raises(InvalidStatusException):
        await incident_service.update_status(created.id, "BOGUS")

    current = await incident_service.get_incident(created.id)
    assert current.status == created.status
    assert current.updated_at == created.updated_at


async def test_unknown_id_reported_before_bad_status(incident_service):
    with pytest.raises(ResourceNotFoundException):
        await incident_service.update_status(99, "BOGUS")


async def test_list_and_stats_see_same_records(incident_service):
    await incident_service.create_incident("Server is down", "Total outage", "api")
    await incident_service.create_incident("Typo", "Minor problem in footer text", "web")
    await incident_service.create_incident("Feature request", "Add dark mode", "web")

    page = await incident_service.list_incidents(IncidentQuery(severity="CRITICAL"))
    stats = await incident_service.get_stats()

    assert page.total_elements == 1
    assert stats.total == 3
    assert stats.severity == {"CRITICAL": 1, "MEDIUM": 1, "LOW": 1}


@pytest.mark.parametrize("value", ["OPEN", "IN_PROGRESS", "RESOLVED", "CLOSED"])
def test_parse_status_accepts_lifecycle_values(value):
    assert parse_status(value) == IncidentStatus(value)


@pytest.mark.parametrize("value", ["BOGUS", "open", "", None])
def test_parse_status_rejects_others(value):
    with pytest.raises(InvalidStatusException):
        parse_status(value)
