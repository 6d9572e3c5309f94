"""
Incident Statistics
===================

Frequency tables over the full incident collection.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable

from src.incidents.domain import Incident


@dataclass(frozen=True)
class IncidentStats:
    """
    Count breakdowns by severity, category and status.

    Values that never occur are absent from the mappings.
    """
    total: int
    severity: Dict[str, int] = field(default_factory=dict)
    category: Dict[str, int] = field(default_factory=dict)
    status: Dict[str, int] = field(default_factory=dict)


class StatsAggregator:
    """Read-only aggregation over incident snapshots."""

    def aggregate(self, records: Iterable[Incident]) -> IncidentStats:
        """Count incidents per severity, category and status in a single pass."""
        total = 0
        severity: Counter = Counter()
        category: Counter = Counter()
        status: Counter = Counter()

        for incident in records:
            total += 1
            severity[incident.ai_severity.value] += 1
            category[incident.ai_category.value] += 1
            status[incident.status.value] += 1

        return IncidentStats(
            total=total,
            severity=dict(severity),
            category=dict(category),
            status=dict(status)
        )
