"""
Incident Infrastructure Layer
=============================

Infrastructure implementations for the incidents module.

Contains:
- Models: SQLAlchemy ORM models
- Repositories: In-memory and SQLAlchemy incident stores
- Seed: Sample incident data
"""

from src.incidents.infrastructure.models import IncidentModel
from src.incidents.infrastructure.repositories import (
    IdAllocator,
    InMemoryIncidentRepository,
    SQLAlchemyIncidentRepository
)
from src.incidents.infrastructure.seed import sample_incidents, seed_sample_incidents

__all__ = [
    "IncidentModel",
    "IdAllocator",
    "InMemoryIncidentRepository",
    "SQLAlchemyIncidentRepository",
    "sample_incidents",
    "seed_sample_incidents",
]
