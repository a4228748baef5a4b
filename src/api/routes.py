"""FastAPI API routes for the narration service.

Provides REST endpoints for PDF upload, file listing and deletion, listen
tracking, user settings, voices, and health checks.  Service dependencies
are resolved from ``app.state`` via FastAPI's ``Depends`` using the
``Annotated`` pattern.

# ─── API ROUTE MAP ───────────────────────────────────────────────────
#
# Endpoint                          Method  Description
# ─────────────────────────────────────────────────────────────────────
# /api/v1/upload                    POST    PDF → summary → narrated audio
# /api/v1/files                     GET     Caller's files, newest first
# /api/v1/files/{file_id}           DELETE  Remove audio + record
# /api/v1/files/listen/{file_id}    POST    Count one playback
# /api/v1/settings                  GET     Profile + narration preferences
# /api/v1/settings                  PUT     Partial preference update
# /api/v1/settings/voices           GET     Available narration voices
# /api/v1/health                    GET     Health check + provider status
#
# Every route except /health requires ``Authorization: Bearer <token>``.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, File, Header, Request, UploadFile
from fastapi.responses import JSONResponse

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
from src.interfaces.identity_provider import IIdentityProvider
from src.models.files import ACCEPTED_MIME_TYPE, UploadMetadata
from src.models.user import AuthenticatedUser
from src.pipeline.orchestrator import IngestionPipeline
from src.services.file_service import FileService
from src.services.settings_service import SettingsService
from src.utils.errors import UnauthorizedError
from src.utils.logging import bind_request_context, get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter(prefix="/api/v1")

# Read uploads in 64 KB increments so an oversized file is rejected as soon
# as it crosses the limit instead of after it is fully buffered.
_UPLOAD_CHUNK_SIZE = 64 * 1024
_DEFAULT_MAX_FILE_SIZE = 50 * 1024 * 1024

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


# ---------------------------------------------------------------------------
# Dependency injection helpers: resolve singletons from app.state
# ---------------------------------------------------------------------------


def _get_pipeline(request: Request) -> IngestionPipeline:
    """Return the ingestion pipeline from application state."""
    return request.app.state.pipeline


def _get_file_service(request: Request) -> FileService:
    return request.app.state.file_service


def _get_settings_service(request: Request) -> SettingsService:
    return request.app.state.settings_service


def _get_identity_provider(request: Request) -> IIdentityProvider:
    return request.app.state.identity_provider


def _get_max_upload_bytes(request: Request) -> int:
    settings = getattr(request.app.state, "settings", None)
    return settings.max_upload_bytes if settings else _DEFAULT_MAX_FILE_SIZE


async def _get_current_user(
    identity: Annotated[IIdentityProvider, Depends(_get_identity_provider)],
    authorization: Annotated[str | None, Header()] = None,
) -> AuthenticatedUser:
    """Resolve the ``Authorization: Bearer`` header to a user, or raise 401."""
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthorizedError("No token provided")
    user = await identity.verify_token(token.strip())
    bind_request_context(user_id=user.id)
    return user


PipelineDep = Annotated[IngestionPipeline, Depends(_get_pipeline)]
FileServiceDep = Annotated[FileService, Depends(_get_file_service)]
SettingsServiceDep = Annotated[SettingsService, Depends(_get_settings_service)]
CurrentUserDep = Annotated[AuthenticatedUser, Depends(_get_current_user)]
MaxUploadDep = Annotated[int, Depends(_get_max_upload_bytes)]


# ---------------------------------------------------------------------------
# Upload
# ---------------------------------------------------------------------------


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={**_ERROR_RESPONSES, 413: {"model": ErrorResponse}},
    summary="Upload a PDF and receive a narrated summary",
)
async def upload_document(
    pipeline: PipelineDep,
    user: CurrentUserDep,
    max_upload_bytes: MaxUploadDep,
    file: Annotated[UploadFile | None, File()] = None,
) -> UploadResponse | JSONResponse:
    """Summarize an uploaded PDF and narrate the summary."""
    if file is None:
        result = await pipeline.process(
            None, UploadMetadata(original_name=""), user
        )
        return UploadResponse(**result.model_dump())

    # --- Stream upload in chunks, reject oversized files early ---
    chunks: list[bytes] = []
    total_size = 0
    while True:
        chunk = await file.read(_UPLOAD_CHUNK_SIZE)
        if not chunk:
            break
        total_size += len(chunk)
        if total_size > max_upload_bytes:
            body = ErrorResponse(
                error="PAYLOAD_TOO_LARGE",
                detail=(
                    f"File too large: >{max_upload_bytes // (1024 * 1024)} MB. "
                    f"Maximum: {max_upload_bytes} bytes."
                ),
            )
            return JSONResponse(status_code=413, content=body.model_dump())
        chunks.append(chunk)
    data = b"".join(chunks)
    del chunks

    metadata = UploadMetadata(
        original_name=file.filename or "document.pdf",
        declared_size=file.size or total_size,
        mime_type=file.content_type or "",
    )
    _logger.info(
        "upload_received",
        filename=metadata.original_name,
        size=total_size,
        content_type=metadata.mime_type,
        accepted=metadata.mime_type == ACCEPTED_MIME_TYPE,
    )
    result = await pipeline.process(data, metadata, user)
    return UploadResponse(**result.model_dump())


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


@router.get("/files", response_model=FileListResponse, responses=_ERROR_RESPONSES)
async def list_files(files: FileServiceDep, user: CurrentUserDep) -> FileListResponse:
    """Return the caller's narrated files, newest first."""
    return FileListResponse(files=await files.list_files(user.id))


@router.delete(
    "/files/{file_id}",
    response_model=MessageResponse,
    responses={**_ERROR_RESPONSES, 404: {"model": ErrorResponse}},
)
async def delete_file(
    file_id: str, files: FileServiceDep, user: CurrentUserDep
) -> MessageResponse:
    await files.delete_file(user.id, file_id)
    return MessageResponse(message="File deleted successfully")


@router.post(
    "/files/listen/{file_id}",
    response_model=MessageResponse,
    responses={**_ERROR_RESPONSES, 404: {"model": ErrorResponse}},
)
async def record_listen(
    file_id: str, files: FileServiceDep, user: CurrentUserDep
) -> MessageResponse:
    await files.record_listen(user.id, file_id)
    return MessageResponse(message="Listen recorded successfully")


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@router.get("/settings", response_model=SettingsResponse, responses=_ERROR_RESPONSES)
async def get_settings(
    settings: SettingsServiceDep, user: CurrentUserDep
) -> SettingsResponse:
    current = await settings.get_settings(user)
    return SettingsResponse(**current.model_dump())


@router.put("/settings", response_model=SettingsResponse, responses=_ERROR_RESPONSES)
async def update_settings(
    body: UpdateSettingsRequest,
    settings: SettingsServiceDep,
    user: CurrentUserDep,
) -> SettingsResponse:
    updated = await settings.update_settings(user, body)
    return SettingsResponse(**updated.model_dump())


@router.get("/settings/voices", response_model=VoicesResponse, responses=_ERROR_RESPONSES)
async def list_voices(settings: SettingsServiceDep, user: CurrentUserDep) -> VoicesResponse:
    return VoicesResponse(voices=await settings.list_voices())


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    """Report liveness and which concrete providers are wired in."""
    return HealthResponse(
        status="healthy",
        version=getattr(request.app, "version", "0.1.0"),
        providers=getattr(request.app.state, "provider_names", {}),
    )
