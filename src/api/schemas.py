"""Pydantic request/response schemas for the narration API.

Defines the public contract for every REST endpoint: upload, file listing,
deletion, listen tracking, user settings, voices, and health.

Convention: request schemas end with "Request", response schemas end with
"Response".  Domain models from ``src.models`` are embedded directly where
the wire shape matches.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from src.models.files import FileListItem, UploadResult
from src.models.user import UserSettings, UserSettingsUpdate, Voice


class UploadResponse(UploadResult):
    """Result of ``POST /upload``: summary text, audio URL, duration, size."""


class FileListResponse(BaseModel):
    """The caller's files, newest first."""

    files: list[FileListItem] = Field(default_factory=list)


class MessageResponse(BaseModel):
    """Plain acknowledgement for mutations without a body of their own."""

    message: str


class SettingsResponse(UserSettings):
    """The caller's profile and narration preferences."""


class UpdateSettingsRequest(UserSettingsUpdate):
    """Partial settings update; omitted fields keep their stored value."""


class VoicesResponse(BaseModel):
    voices: list[Voice] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    providers: dict[str, Any]


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
    detail: str | None = None
