"""
Shared Kernel Module
====================

This module contains shared infrastructure used by the incident triage
bounded context: structured logging and HTTP middleware.

DO NOT add triage business logic to the shared kernel.
"""

__version__ = "1.0.0"
