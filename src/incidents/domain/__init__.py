"""
Incident Domain Layer
=====================

Domain layer for incident triage.

Contains:
- Entities: Core business objects (Incident, NewIncident, TriageAnalysis)
- Classifier: Severity and category keyword cascades
- Recommender: Severity x category remediation table
- Scoring: Confidence heuristic

This layer is framework-agnostic and contains pure business logic.
"""

from src.incidents.domain.entities import Incident, NewIncident, TriageAnalysis
from src.incidents.domain.classifier import classify_severity, classify_category
from src.incidents.domain.recommender import recommend_action, ACTION_TABLE, FALLBACK_ACTION
from src.incidents.domain.scoring import score_confidence

__all__ = [
    "Incident",
    "NewIncident",
    "TriageAnalysis",
    "classify_severity",
    "classify_category",
    "recommend_action",
    "ACTION_TABLE",
    "FALLBACK_ACTION",
    "score_confidence",
]
