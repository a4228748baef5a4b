"""Ingestion pipeline: uploaded PDF → summary → narrated audio → file record.

Coordinates the text extractor, summarizer, speech provider, object store,
record store and list cache for one upload.  Each collaborator call runs
through :meth:`IngestionPipeline._run_stage`, which is the only place where
internal failures are translated to the caller-facing error taxonomy:

    ValidationError / UnauthorizedError   → re-raised as-is
    ParseError (document unreadable)      → ValidationError
    anything else, including timeouts    → DependencyError

Stage order (see :class:`IngestionStage`):

    VALIDATE → EXTRACT → SUMMARIZE → SETTINGS → SYNTHESIZE →
    STORE_AUDIO → WRITE_RECORD → INVALIDATE_CACHE

The user's voice preferences are fetched in a background task started
before EXTRACT, so the settings read overlaps with extraction and
summarization.  The task is awaited right before SYNTHESIZE and cancelled
if an earlier stage fails.

The record insert is the commit point.  The list cache is invalidated only
after it succeeds.  If the insert fails after the audio object was stored,
one best-effort delete of that object is attempted before the failure is
surfaced (``cleanup_orphaned_audio``).
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

import structlog

from src.interfaces.file_record_provider import IFileRecordProvider
from src.interfaces.object_store import IObjectStore
from src.interfaces.speech_provider import ISpeechProvider
from src.interfaces.text_extractor import ITextExtractor
from src.interfaces.user_settings_provider import IUserSettingsProvider
from src.models.files import (
    ACCEPTED_MIME_TYPE,
    NewFileRecord,
    UploadMetadata,
    UploadResult,
)
from src.models.pipeline import IngestionStage
from src.models.user import AudioQuality, AuthenticatedUser, UserSettings
from src.services.file_list_cache import FileListCache
from src.services.summarizer import SummarizerService
from src.utils.errors import (
    DependencyError,
    ErrorKind,
    NarratorError,
    ParseError,
    ValidationError,
)
from src.utils.filenames import audio_object_name
from src.utils.logging import get_logger
from src.utils.text_metrics import estimate_narration_seconds

T = TypeVar("T")

AUDIO_CONTENT_TYPE = "audio/mpeg"

# Kinds that carry a caller-fixable, caller-visible reason.  NOT_FOUND is
# absent: it only describes record lookups by id, never an upload stage.
_PASSTHROUGH_KINDS = frozenset({ErrorKind.VALIDATION, ErrorKind.UNAUTHORIZED})


class IngestionPipeline:
    """Turns one uploaded PDF into a stored narration and a file record.

    All collaborators are injected; the pipeline holds no per-request state,
    so one instance serves any number of concurrent uploads.

    Parameters
    ----------
    call_timeout:
        Upper bound in seconds on every individual collaborator call.
    cleanup_orphaned_audio:
        Delete the stored audio object when the record insert fails.
    """

    def __init__(
        self,
        text_extractor: ITextExtractor,
        summarizer: SummarizerService,
        speech_provider: ISpeechProvider,
        object_store: IObjectStore,
        record_store: IFileRecordProvider,
        settings_provider: IUserSettingsProvider,
        list_cache: FileListCache,
        call_timeout: float = 60.0,
        cleanup_orphaned_audio: bool = True,
    ) -> None:
        self._extractor = text_extractor
        self._summarizer = summarizer
        self._speech = speech_provider
        self._object_store = object_store
        self._records = record_store
        self._settings = settings_provider
        self._list_cache = list_cache
        self._call_timeout = call_timeout
        self._cleanup_orphaned_audio = cleanup_orphaned_audio
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def process(
        self,
        upload_bytes: bytes | None,
        metadata: UploadMetadata,
        user: AuthenticatedUser,
    ) -> UploadResult:
        """Run the full pipeline for one upload.

        Raises
        ------
        ValidationError
            Wrong content type, missing file, unreadable document, or a
            document without a text layer.
        DependencyError
            Any collaborator failed or timed out.
        """
        log = self._logger.bind(user_id=user.id, filename=metadata.original_name)

        # --- VALIDATE ---
        if metadata.mime_type != ACCEPTED_MIME_TYPE:
            raise ValidationError("Only PDF files are allowed")
        if upload_bytes is None:
            raise ValidationError("No file uploaded")
        log.info("ingestion_started", size=len(upload_bytes))

        settings_task = asyncio.create_task(
            self._run_stage(
                IngestionStage.SETTINGS,
                self._settings.get_settings(user.id),
                user_id=user.id,
            )
        )
        try:
            text = await self._extract(upload_bytes, user.id)
            summary = await self._summarize(text, user.id)
            preferences: UserSettings = await settings_task
        except BaseException:
            await _discard(settings_task)
            raise

        # --- SYNTHESIZE ---
        quality = AudioQuality.parse(preferences.audio_quality)
        audio = await self._run_stage(
            IngestionStage.SYNTHESIZE,
            self._speech.synthesize(summary, preferences.voice_id, quality),
            user_id=user.id,
        )

        # --- STORE_AUDIO ---
        object_name = audio_object_name(metadata.original_name)
        audio_url = await self._run_stage(
            IngestionStage.STORE_AUDIO,
            self._object_store.put(object_name, audio, AUDIO_CONTENT_TYPE),
            user_id=user.id,
        )

        duration = estimate_narration_seconds(summary)

        # --- WRITE_RECORD ---
        record = NewFileRecord(
            user_id=user.id,
            original_filename=metadata.original_name,
            file_size=len(upload_bytes),
            audio_url=audio_url,
            audio_duration=duration,
            summary=summary,
            listen_count=0,
        )
        try:
            stored = await self._run_stage(
                IngestionStage.WRITE_RECORD,
                self._records.insert(record),
                user_id=user.id,
            )
        except DependencyError:
            await self._remove_orphaned_audio(object_name, user.id)
            raise

        # --- INVALIDATE_CACHE ---
        await self._invalidate_list(user.id)

        log.info(
            "ingestion_complete",
            file_id=stored.id,
            duration=duration,
            voice_id=preferences.voice_id,
            quality=quality.value,
        )
        return UploadResult(
            summary=summary,
            audio_url=audio_url,
            duration=duration,
            file_size=len(upload_bytes),
        )

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    async def _extract(self, data: bytes, user_id: str) -> str:
        text = await self._run_stage(
            IngestionStage.EXTRACT,
            self._extractor.extract_text(data),
            user_id=user_id,
        )
        if not text or not text.strip():
            self._logger.info("ingestion_no_text", user_id=user_id, size=len(data))
            raise ValidationError("no extractable text")
        return text

    async def _summarize(self, text: str, user_id: str) -> str:
        summary = await self._run_stage(
            IngestionStage.SUMMARIZE,
            self._summarizer.summarize(text),
            user_id=user_id,
        )
        if not summary or not summary.strip():
            self._logger.error(
                "ingestion_stage_failed",
                stage=IngestionStage.SUMMARIZE.value,
                user_id=user_id,
                error="empty summary",
            )
            raise DependencyError()
        return summary

    async def _invalidate_list(self, user_id: str) -> None:
        # FileListCache swallows provider faults; only a hang needs handling here.
        try:
            await asyncio.wait_for(
                self._list_cache.invalidate(user_id), timeout=self._call_timeout
            )
        except asyncio.TimeoutError:
            self._logger.warning(
                "ingestion_cache_invalidate_timeout",
                stage=IngestionStage.INVALIDATE_CACHE.value,
                user_id=user_id,
            )

    async def _remove_orphaned_audio(self, object_name: str, user_id: str) -> None:
        if not self._cleanup_orphaned_audio:
            self._logger.warning(
                "ingestion_orphaned_audio", object_name=object_name, user_id=user_id
            )
            return
        try:
            await asyncio.wait_for(
                self._object_store.delete(object_name), timeout=self._call_timeout
            )
        except Exception as exc:
            self._logger.warning(
                "ingestion_orphan_cleanup_failed",
                object_name=object_name,
                user_id=user_id,
                error=str(exc),
            )
            return
        self._logger.info(
            "ingestion_orphan_removed", object_name=object_name, user_id=user_id
        )

    # ------------------------------------------------------------------
    # Translation boundary
    # ------------------------------------------------------------------

    async def _run_stage(
        self,
        stage: IngestionStage,
        call: Awaitable[T],
        *,
        user_id: str,
    ) -> T:
        """Await *call* under the per-call timeout and translate its failure."""
        self._logger.debug("ingestion_stage_start", stage=stage.value, user_id=user_id)
        try:
            return await asyncio.wait_for(call, timeout=self._call_timeout)
        except ParseError as exc:
            self._logger.info(
                "ingestion_unparseable_document",
                stage=stage.value,
                user_id=user_id,
                error=str(exc),
            )
            raise ValidationError("unparseable document") from exc
        except NarratorError as exc:
            if exc.kind in _PASSTHROUGH_KINDS:
                raise
            self._logger.error(
                "ingestion_stage_failed",
                stage=stage.value,
                user_id=user_id,
                error=str(exc),
                provider=exc.provider_name,
            )
            raise DependencyError(provider_name=exc.provider_name) from exc
        except asyncio.TimeoutError as exc:
            self._logger.error(
                "ingestion_stage_timeout",
                stage=stage.value,
                user_id=user_id,
                timeout=self._call_timeout,
            )
            raise DependencyError() from exc
        except Exception as exc:
            self._logger.exception(
                "ingestion_stage_failed",
                stage=stage.value,
                user_id=user_id,
                error=str(exc),
            )
            raise DependencyError() from exc


async def _discard(task: asyncio.Task) -> None:
    """Cancel *task* and wait for it so its outcome is never left unretrieved."""
    task.cancel()
    await asyncio.gather(task, return_exceptions=True)
