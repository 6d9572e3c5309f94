"""
Incident Infrastructure Models
==============================

SQLAlchemy ORM models for the incidents module.
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime, Integer, Float, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database import Base
from src.config import IncidentStatus


class IncidentModel(Base):
    """
    Database model for the Incident entity.

    The autoincrement primary key is the incident id, so the database
    allocates ids atomically.
    """
    __tablename__ = "incidents"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Reported content
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    affected_service: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    # Lifecycle
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=IncidentStatus.OPEN.value, index=True
    )

    # Triage results (written once)
    ai_severity: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    ai_category: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    ai_suggested_action: Mapped[str] = mapped_column(Text, nullable=False)
    confidence_score: Mapped[float] = mapped_column(Float, nullable=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc)
    )
