"""Narration API layer: routes, schemas, and middleware."""

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from src.api.routes import router
from src.api.schemas import (
    ErrorResponse,
    FileListResponse,
    HealthResponse,
    MessageResponse,
    SettingsResponse,
    UpdateSettingsRequest,
    UploadResponse,
    VoicesResponse,
)

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "configure_cors",
    "router",
    "ErrorResponse",
    "FileListResponse",
    "HealthResponse",
    "MessageResponse",
    "SettingsResponse",
    "UpdateSettingsRequest",
    "UploadResponse",
    "VoicesResponse",
]
