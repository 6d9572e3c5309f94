"""
Configuration Module
====================

Application settings and configuration management using Pydantic.
"""

from enum import Enum
from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety.
    """

    # ========== Application ==========
    app_name: str = Field(default="incident-triage", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Root logging level")

    # ========== Server ==========
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8080, description="Server port", ge=1, le=65535)

    # ========== Storage ==========
    storage_backend: str = Field(
        default="memory",
        description="Incident store backend: 'memory' (in-process) or 'database' (SQLAlchemy)"
    )
    database_url: str = Field(
        default="sqlite+aiosqlite:///./incidents.db",
        description="Database connection URL (async driver), used when storage_backend='database'"
    )
    db_pool_size: int = Field(default=5, description="Database connection pool size", ge=1)
    db_max_overflow: int = Field(default=10, description="Max overflow connections", ge=0)
    seed_sample_data: bool = Field(
        default=True,
        description="Load the sample incidents into an empty store at startup"
    )

    # ========== Listing ==========
    default_page_size: int = Field(default=10, description="Default page size for listings", ge=1)
    max_page_size: int = Field(default=100, description="Largest accepted page size", ge=1)

    # ========== CORS ==========
    cors_origins: List[str] = Field(
        default=["*"],
        description="Allowed CORS origins"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is one of allowed values."""
        allowed = {"development", "test", "staging", "production"}
        if v not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalise and check the logging level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v}")
        return level

    @field_validator("storage_backend")
    @classmethod
    def validate_storage_backend(cls, v: str) -> str:
        """Ensure the storage backend is supported."""
        allowed = {"memory", "database"}
        if v not in allowed:
            raise ValueError(f"storage_backend must be one of {allowed}")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Returns cached Settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


# ========== Constants ==========

class Severity(str, Enum):
    """Severity tiers assigned by triage, most urgent first."""
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class Category(str, Enum):
    """Functional area of an incident's root cause."""
    SECURITY = "SECURITY"
    NETWORK = "NETWORK"
    DATABASE = "DATABASE"
    FRONTEND = "FRONTEND"
    HARDWARE = "HARDWARE"
    SOFTWARE = "SOFTWARE"


class IncidentStatus(str, Enum):
    """Incident lifecycle statuses."""
    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    RESOLVED = "RESOLVED"
    CLOSED = "CLOSED"


class SortField(str, Enum):
    """Fields the incident listing can be ordered by (wire names)."""
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"
    ID = "id"
    TITLE = "title"
    SEVERITY = "aiSeverity"
    CATEGORY = "aiCategory"
    STATUS = "status"
    CONFIDENCE = "confidenceScore"


class SortDirection(str, Enum):
    """Sort directions for the incident listing."""
    ASC = "asc"
    DESC = "desc"


# ========== Lists for validation ==========

SEVERITIES = [Severity.CRITICAL, Severity.HIGH, Severity.MEDIUM, Severity.LOW]
CATEGORIES = [
    Category.SECURITY, Category.NETWORK, Category.DATABASE,
    Category.FRONTEND, Category.HARDWARE, Category.SOFTWARE
]
VALID_STATUSES = [
    IncidentStatus.OPEN, IncidentStatus.IN_PROGRESS,
    IncidentStatus.RESOLVED, IncidentStatus.CLOSED
]
SORT_FIELDS = [f.value for f in SortField]
