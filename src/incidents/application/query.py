"""
Incident Query Engine
=====================

Filtering, ordering and pagination over a snapshot of incident records.

The engine never mutates the records it is given; it works on its own
list copy of the snapshot.
"""

import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from src.config import (
    SortField, SortDirection,
    SEVERITIES, CATEGORIES, VALID_STATUSES, SORT_FIELDS
)
from src.core import ValidationException
from src.incidents.domain import Incident


# Higher rank sorts later in ascending order, so desc puts CRITICAL first
SEVERITY_RANK = {severity: rank for rank, severity in enumerate(reversed(SEVERITIES))}
CATEGORY_ORDER = {category: position for position, category in enumerate(CATEGORIES)}
STATUS_ORDER = {status: position for position, status in enumerate(VALID_STATUSES)}

SORT_KEYS: Dict[SortField, Callable[[Incident], Any]] = {
    SortField.CREATED_AT: lambda incident: incident.created_at,
    SortField.UPDATED_AT: lambda incident: incident.updated_at,
    SortField.ID: lambda incident: incident.id,
    SortField.TITLE: lambda incident: incident.title.casefold(),
    SortField.SEVERITY: lambda incident: SEVERITY_RANK[incident.ai_severity],
    SortField.CATEGORY: lambda incident: CATEGORY_ORDER[incident.ai_category],
    SortField.STATUS: lambda incident: STATUS_ORDER[incident.status],
    SortField.CONFIDENCE: lambda incident: incident.confidence_score,
}


@dataclass(frozen=True)
class IncidentQuery:
    """Parameters of one incident listing request."""
    page: int = 0
    size: int = 10
    severity: Optional[str] = None
    category: Optional[str] = None
    sort_by: str = SortField.CREATED_AT.value
    sort_dir: str = SortDirection.DESC.value


@dataclass(frozen=True)
class IncidentPage:
    """One page of listing results plus pagination metadata."""
    content: List[Incident]
    number: int
    size: int
    total_elements: int
    total_pages: int


class QueryEngine:
    """
    Produces pages of incidents from a record snapshot.

    Steps: severity filter, category filter, sort, slice.
    """

    def execute(self, records: Iterable[Incident], query: IncidentQuery) -> IncidentPage:
        """
        Run a listing query.

        Args:
            records: Snapshot of all stored incidents
            query: Filter, sort and pagination parameters

        Returns:
            IncidentPage with the requested slice; a page past the end is empty

        Raises:
            ValidationException: For a negative page, non-positive size or
                an unsupported sort field/direction
        """
        sort_key, descending = self._resolve_ordering(query)

        results = list(records)

        if query.severity:
            results = [i for i in results if i.ai_severity == query.severity]

        if query.category:
            results = [i for i in results if i.ai_category == query.category]

        results.sort(key=sort_key, reverse=descending)

        total_elements = len(results)
        start = query.page * query.size
        content = results[start:start + query.size]

        return IncidentPage(
            content=content,
            number=query.page,
            size=query.size,
            total_elements=total_elements,
            total_pages=math.ceil(total_elements / query.size)
        )

    def _resolve_ordering(self, query: IncidentQuery) -> Tuple[Callable[[Incident], Any], bool]:
        """Validate pagination and ordering parameters."""
        if query.page < 0:
            raise ValidationException("page must be zero or greater", {"page": query.page})
        if query.size < 1:
            raise ValidationException("size must be at least 1", {"size": query.size})

        try:
            sort_field = SortField(query.sort_by)
        except ValueError:
            raise ValidationException(
                f"Unsupported sort field '{query.sort_by}'",
                {"sortBy": query.sort_by, "allowed": SORT_FIELDS}
            )

        try:
            direction = SortDirection(str(query.sort_dir).lower())
        except ValueError:
            raise ValidationException(
                f"Unsupported sort direction '{query.sort_dir}'",
                {"sortDir": query.sort_dir, "allowed": [d.value for d in SortDirection]}
            )

        return SORT_KEYS[sort_field], direction is SortDirection.DESC
