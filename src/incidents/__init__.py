"""
Incidents Module
================

Bounded Context for incident intake, rule-based triage and reporting.

Responsibilities:
- Classify incidents by severity and functional category
- Recommend a remediation action and score triage confidence
- Store incidents and track their lifecycle status
- Serve filtered, sorted, paginated listings and aggregate statistics
"""

__version__ = "1.0.0"
