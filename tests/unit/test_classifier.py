"""
Unit tests for severity and category classification.
"""

import pytest

from src.config import Severity, Category
from src.incidents.domain import classify_severity, classify_category


@pytest.mark.parametrize(
    "title, description, expected",
    [
        ("Server is down, critical outage", "anything", Severity.CRITICAL),
        ("App crashed on startup", "Seen on two hosts", Severity.CRITICAL),
        ("OUTAGE in EU region", "Customers affected", Severity.CRITICAL),
        ("Login page slow", "Takes 10 seconds to render", Severity.HIGH),
        ("Payments API unavailable", "Returns 503", Severity.HIGH),
        ("Typo in footer", "Minor problem with wording", Severity.MEDIUM),
        ("Feature request", "Please add dark mode", Severity.LOW),
    ],
)
def test_severity_tiers(title, description, expected):
    assert classify_severity(title, description) == expected


def test_severity_first_match_wins():
    # timeout is HIGH, outage is CRITICAL
    assert classify_severity("Timeout causing outage", "") == Severity.CRITICAL
    # error is HIGH, bug is MEDIUM
    assert classify_severity("Bug produces error", "") == Severity.HIGH


def test_severity_keyword_can_sit_in_description():
    assert classify_severity("Checkout", "We saw data loss overnight") == Severity.CRITICAL


def test_category_security_outranks_database():
    category = classify_category(
        "Potential SQL injection in login",
        "An attacker gained unauthorized access to accounts",
        "auth-service",
    )
    assert category == Category.SECURITY


def test_outage_severity_is_independent_of_category():
    title = "Potential SQL injection in login"
    description = "An attacker gained unauthorized access to accounts"
    assert classify_severity(title, description) == Severity.LOW


@pytest.mark.parametrize(
    "title, description, service, expected",
    [
        ("DNS resolution failing", "Lookups fail intermittently", "edge", Category.NETWORK),
        ("Replication lag on primary", "Storage volume nearly full", "postgres", Category.DATABASE),
        ("Button misaligned", "CSS grid broken in Safari", "web", Category.FRONTEND),
        ("Disk failure on node 7", "SMART errors reported", "rack-12", Category.HARDWARE),
        ("Cron job skipped", "Nightly report job did not run", "scheduler", Category.SOFTWARE),
    ],
)
def test_category_cascade(title, description, service, expected):
    assert classify_category(title, description, service) == expected


def test_category_uses_affected_service():
    assert classify_category("Latency spike", "p99 went up", "firewall-gw") == Category.NETWORK


def test_category_matches_substrings_without_word_boundaries():
    # "build" contains "ui"
    assert classify_category("Nightly build broken", "Compiler stopped", "ci") == Category.FRONTEND


def test_classification_is_deterministic():
    args = ("Database connection timeout", "Queries time out after 30s", "user-dashboard")
    assert classify_category(*args) == classify_category(*args)
    assert classify_severity(*args[:2]) == classify_severity(*args[:2])
