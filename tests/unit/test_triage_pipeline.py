"""
Unit tests for the triage pipeline.
"""

import pytest

from src.config import Severity, Category
from src.core import ValidationException
from src.incidents.application import TriagePipeline
from src.incidents.domain import recommend_action, score_confidence


@pytest.fixture
def pipeline() -> TriagePipeline:
    return TriagePipeline()


def test_analyze_composes_all_steps(pipeline):
    analysis = pipeline.analyze(
        "Server is down, critical outage",
        "All API nodes stopped responding",
        "api-gateway",
    )

    assert analysis.severity == Severity.CRITICAL
    assert analysis.category == Category.HARDWARE
    assert analysis.suggested_action == recommend_action(Severity.CRITICAL, Category.HARDWARE)
    assert analysis.confidence == score_confidence(
        "Server is down, critical outage", "All API nodes stopped responding"
    )


def test_analyze_is_deterministic(pipeline):
    args = ("Database connection timeout", "Queries time out after 30 seconds", "user-dashboard")
    assert pipeline.analyze(*args) == pipeline.analyze(*args)


@pytest.mark.parametrize(
    "title, description, service, missing",
    [
        (None, "desc", "svc", ["title"]),
        ("title", "", "svc", ["description"]),
        ("title", "desc", "   ", ["affectedService"]),
        ("", None, None, ["title", "description", "affectedService"]),
        (42, "desc", "svc", ["title"]),
    ],
)
def test_missing_fields_rejected(pipeline, title, description, service, missing):
    with pytest.raises(ValidationException) as exc_info:
        pipeline.analyze(title, description, service)

    assert exc_info.value.message == TriagePipeline.REQUIRED_FIELDS_MESSAGE
    assert exc_info.value.details["missing"] == missing


def test_triage_builds_open_draft(pipeline):
    draft = pipeline.triage("Login slow", "Pages take 8 seconds", "web-frontend")

    assert draft.title == "Login slow"
    assert draft.affected_service == "web-frontend"
    assert draft.triage.severity == Severity.HIGH
    assert draft.created_at is None
