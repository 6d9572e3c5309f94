"""
Action Recommender
==================

Canned remediation advice indexed by (severity, category).
"""

from typing import Dict, Mapping

from src.config import Severity, Category


FALLBACK_ACTION = "Review incident details and assign to appropriate team for investigation."

ACTION_TABLE: Dict[Severity, Dict[Category, str]] = {
    Severity.CRITICAL: {
        Category.SECURITY: "Immediately isolate affected systems, notify security team, and begin incident response protocol.",
        Category.NETWORK: "Check network infrastructure, contact ISP if needed, and implement backup connectivity.",
        Category.DATABASE: "Stop all write operations, check database integrity, and restore from latest backup if necessary.",
        Category.FRONTEND: "Deploy rollback immediately, notify users of service disruption, and investigate root cause.",
        Category.HARDWARE: "Replace failed hardware components immediately and check for data corruption.",
        Category.SOFTWARE: "Rollback to previous stable version and investigate critical bug in isolated environment.",
    },
    Severity.HIGH: {
        Category.SECURITY: "Review security logs, patch vulnerabilities, and monitor for suspicious activity.",
        Category.NETWORK: "Investigate network performance issues and optimize routing if needed.",
        Category.DATABASE: "Optimize slow queries, check database performance metrics, and consider scaling.",
        Category.FRONTEND: "Fix UI issues, test thoroughly, and deploy patch to production.",
        Category.HARDWARE: "Monitor hardware health, schedule maintenance, and prepare replacement if needed.",
        Category.SOFTWARE: "Debug the issue, implement fix, and test in staging environment before deployment.",
    },
    Severity.MEDIUM: {
        Category.SECURITY: "Schedule security audit and update security policies as needed.",
        Category.NETWORK: "Monitor network performance and plan infrastructure improvements.",
        Category.DATABASE: "Review database performance and plan optimization tasks.",
        Category.FRONTEND: "Add to development backlog and prioritize based on user impact.",
        Category.HARDWARE: "Schedule routine maintenance and monitor system health.",
        Category.SOFTWARE: "Create bug ticket and assign to development team for next sprint.",
    },
    Severity.LOW: {
        Category.SECURITY: "Document security concern and review during next security meeting.",
        Category.NETWORK: "Monitor and document for trend analysis.",
        Category.DATABASE: "Add to maintenance backlog for future optimization.",
        Category.FRONTEND: "Consider as enhancement for future releases.",
        Category.HARDWARE: "Note for next maintenance window.",
        Category.SOFTWARE: "Add to backlog as low-priority improvement.",
    },
}


def recommend_action(
    severity: Severity,
    category: Category,
    table: Mapping[Severity, Mapping[Category, str]] = ACTION_TABLE
) -> str:
    """Look up the remediation for a severity/category pair, falling back when absent."""
    return table.get(severity, {}).get(category, FALLBACK_ACTION)
