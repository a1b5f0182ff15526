"""Pydantic schemas for the Web API.

Request bodies use the field names clients send. Response models
serialize with camelCase aliases (completedModules, videoUrl, ...) to keep
the JSON shape the frontend reads.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Response model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# AUTH SCHEMAS
# =============================================================================


class RegisterRequest(BaseModel):
    """Request body for creating an account."""

    email: str
    password: str
    name: str


class LoginRequest(BaseModel):
    """Request body for logging in."""

    email: str
    password: str


class UserSummary(BaseModel):
    """Public view of a user."""

    id: int
    email: str
    name: str


class AuthResponse(BaseModel):
    """Response for register and login."""

    message: str
    token: str
    user: UserSummary


# =============================================================================
# PROGRESS SCHEMAS
# =============================================================================


class StepProgressResponse(CamelModel):
    id: int
    title: str
    completed: bool


class CourseProgressResponse(CamelModel):
    title: str
    progress: int
    completed: bool
    steps: list[StepProgressResponse]


class ProgressResponse(CamelModel):
    """A user's full progress record."""

    completed_modules: list[str]
    current_module: str | None = None
    total_progress: int
    courses: dict[str, CourseProgressResponse]


class StepCompleteResponse(BaseModel):
    """Response after completing a step."""

    message: str
    progress: ProgressResponse


# =============================================================================
# MODULE SCHEMAS
# =============================================================================


class ArContentResponse(CamelModel):
    model: str
    instructions: str


class ModuleStepResponse(CamelModel):
    id: int
    title: str
    content: str
    video_timestamp: str
    ar_trigger: str


class ModuleResponse(CamelModel):
    """Catalog content for a training module."""

    id: str
    title: str
    description: str
    duration: str
    difficulty: str
    video_url: str
    ar_content: ArContentResponse
    steps: list[ModuleStepResponse]


class VideoResponse(BaseModel):
    """Descriptor returned by the simulated video endpoint."""

    message: str
    filename: str
    url: str


# =============================================================================
# MISC SCHEMAS
# =============================================================================


class FieldError(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Body of every error response."""

    message: str
    errors: list[FieldError] | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str
