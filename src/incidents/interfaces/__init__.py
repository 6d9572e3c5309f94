"""
Incident Interfaces Layer
=========================

Interface adapters (controllers) for the incidents module.

Contains:
- Controllers: FastAPI route handlers
"""

from src.incidents.interfaces.controllers import incidents_router

__all__ = ["incidents_router"]
