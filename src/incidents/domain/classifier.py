"""
Incident Classifier
===================

Keyword cascades mapping incident text to a severity tier and a category.

Each cascade is checked in order and the first tier/category whose keyword
set matches wins. Matching is case-insensitive substring containment, so
"crash" also matches "crashed".
"""

from typing import Iterable, Sequence, Tuple

from src.config import Severity, Category


SEVERITY_RULES: Sequence[Tuple[Severity, Tuple[str, ...]]] = (
    (Severity.CRITICAL, ("down", "outage", "critical", "security breach", "data loss", "crash")),
    (Severity.HIGH, ("error", "failure", "slow", "timeout", "unavailable")),
    (Severity.MEDIUM, ("issue", "problem", "bug", "warning")),
)
DEFAULT_SEVERITY = Severity.LOW

CATEGORY_RULES: Sequence[Tuple[Category, Tuple[str, ...]]] = (
    (Category.SECURITY, ("security", "breach", "hack", "unauthorized", "vulnerability")),
    (Category.NETWORK, ("network", "connection", "dns", "firewall", "bandwidth")),
    (Category.DATABASE, ("database", "sql", "query", "data", "storage")),
    (Category.FRONTEND, ("frontend", "ui", "interface", "browser", "css", "javascript")),
    (Category.HARDWARE, ("hardware", "server", "disk", "memory", "cpu")),
)
DEFAULT_CATEGORY = Category.SOFTWARE


def combine_text(*parts: str) -> str:
    """Join text fields with spaces and lower-case the result."""
    return " ".join(parts).lower()


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    """Check whether any keyword occurs in the text."""
    return any(keyword in text for keyword in keywords)


def classify_severity(title: str, description: str) -> Severity:
    """
    Assign a severity tier from the title and description.

    Args:
        title: Incident title
        description: Incident description

    Returns:
        The first tier whose keywords occur in the text, else LOW
    """
    text = combine_text(title, description)
    for severity, keywords in SEVERITY_RULES:
        if contains_any(text, keywords):
            return severity
    return DEFAULT_SEVERITY


def classify_category(title: str, description: str, affected_service: str) -> Category:
    """
    Assign a functional category from the title, description and service name.

    SECURITY outranks NETWORK, which outranks DATABASE, and so on; text with
    no matching keyword is SOFTWARE.
    """
    text = combine_text(title, description, affected_service)
    for category, keywords in CATEGORY_RULES:
        if contains_any(text, keywords):
            return category
    return DEFAULT_CATEGORY
