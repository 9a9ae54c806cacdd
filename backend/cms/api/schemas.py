"""Pydantic schemas for API requests and responses."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


# ============================================================
# Project Schemas
# ============================================================

class ProjectCreate(BaseModel):
    """Schema for creating a project from the dashboard."""

    title: str = Field(..., min_length=1, max_length=255)
    slug: str | None = Field(
        default=None,
        description="Hand-entered slug; generated from the title when omitted",
    )
    client_name: str | None = Field(default=None, max_length=255)
    description: str | None = None
    status: Literal["planning", "in_progress", "completed"] = "completed"
    is_featured: bool = False


class ProjectResponse(BaseModel):
    """Schema for a project in listings and create responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    slug: str
    client_name: str | None = None
    description: str | None = None
    status: str
    is_featured: bool
    is_active: bool
    view_count: int
    created_at: datetime


class ProjectListResponse(BaseModel):
    """Envelope for the public project listing."""

    success: bool = True
    data: list[ProjectResponse]


class ProjectCreatedResponse(BaseModel):
    """Envelope for a created project."""

    success: bool = True
    data: ProjectResponse


class ProjectViewsResponse(BaseModel):
    """Updated view counter."""

    id: str
    view_count: int


# ============================================================
# Dashboard Schemas
# ============================================================

class DashboardSummary(BaseModel):
    """Active content counts per type."""

    counts: dict[str, int]
    total: int


class DashboardResponse(BaseModel):
    """Envelope for the dashboard summary."""

    success: bool = True
    data: DashboardSummary


# ============================================================
# Slug Schemas
# ============================================================

class SlugCheckResponse(BaseModel):
    """Whether a slug is already taken in a content table."""

    exists: bool
    slug: str


class SlugValidationResponse(BaseModel):
    """Format rules a slug violates."""

    slug: str
    is_valid: bool
    errors: list[str] = Field(default_factory=list)


class SlugGenerateRequest(BaseModel):
    """Generate a slug from free text, optionally unique within a content type."""

    text: str = Field(..., max_length=500)
    entity: str | None = Field(
        default=None,
        description="Content type to resolve uniqueness against",
    )
    exclude_id: str | None = None
    separator: str = Field(
        default="-",
        min_length=1,
        max_length=3,
        pattern=r"^[^A-Za-z0-9\s]+$",
        description="Punctuation placed between words",
    )
    max_length: int = Field(default=60, ge=3, le=200)
    preserve_case: bool = False


class SlugGenerateResponse(BaseModel):
    """Generated slug."""

    slug: str
    unique: bool = Field(description="Whether uniqueness was resolved against an entity")


# ============================================================
# Health Schemas
# ============================================================

class ServiceHealth(BaseModel):
    """Schema for individual service health status."""

    status: str = Field(..., pattern=r"^(healthy|degraded|unhealthy)$")
    latency_ms: float | None = None
    details: dict[str, Any] | None = None


class HealthResponse(BaseModel):
    """Schema for health check response."""

    status: str = Field(..., pattern=r"^(healthy|degraded|unhealthy)$")
    timestamp: datetime
    version: str
    services: dict[str, ServiceHealth]
