"""PDF narration service FastAPI application entry point.

Wires together all providers, services, and routes via dependency injection.
Loads configuration from ``.env`` and ``config/config.yaml`` and configures
structured logging.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from src.api.routes import router as api_router
from src.config.loader import load_config, quality_models
from src.config.settings import Settings
from src.interfaces.cache_provider import ICacheProvider
from src.pipeline.orchestrator import IngestionPipeline
from src.providers.cache.memory_cache import MemoryCacheProvider
from src.providers.cache.redis_cache import RedisCacheProvider
from src.providers.extraction.pymupdf_extractor import PyMuPDFTextExtractor
from src.providers.identity.supabase_identity_provider import SupabaseIdentityProvider
from src.providers.llm.openai_provider import OpenAILLMProvider
from src.providers.records.sqlite_file_record_provider import SQLiteFileRecordProvider
from src.providers.settings.sqlite_user_settings_provider import SQLiteUserSettingsProvider
from src.providers.speech.elevenlabs_provider import ElevenLabsSpeechProvider
from src.providers.storage.supabase_storage_provider import SupabaseStorageProvider
from src.services.file_list_cache import FileListCache
from src.services.file_service import FileService
from src.services.settings_service import SettingsService
from src.services.summarizer import SUMMARY_SYSTEM_PROMPT, SummarizerService
from src.utils.logging import configure_logging, get_logger

_VERSION = "0.1.0"

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Provider selection
# ---------------------------------------------------------------------------


def _build_cache_provider(app_settings: Settings) -> ICacheProvider:
    """Return the Redis cache when selected, else the in-process TTL cache."""
    if app_settings.cache_backend.lower() == "redis":
        return RedisCacheProvider.from_url(
            app_settings.redis_url, ttl=app_settings.cache_ttl_seconds
        )
    return MemoryCacheProvider(
        max_size=app_settings.cache_max_entries,
        ttl=app_settings.cache_ttl_seconds,
    )


# ---------------------------------------------------------------------------
# Full DI assembly for the FastAPI application
# ---------------------------------------------------------------------------


def _build_all(app_settings: Settings, config: dict[str, Any] | None = None) -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    config = config if config is not None else load_config()
    speech_config = config.get("speech", {})
    summarizer_config = config.get("summarizer", {})

    # -- Shared resources --
    http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(app_settings.external_call_timeout, connect=10.0)
    )

    # -- Providers --
    identity_provider = SupabaseIdentityProvider(
        supabase_url=app_settings.supabase_url,
        anon_key=app_settings.supabase_anon_key,
        http_client=http_client,
    )
    text_extractor = PyMuPDFTextExtractor()
    llm_provider = OpenAILLMProvider(settings=app_settings)
    speech_provider = ElevenLabsSpeechProvider(
        api_key=app_settings.elevenlabs_api_key,
        http_client=http_client,
        base_url=app_settings.elevenlabs_base_url,
        quality_models=quality_models(config),
        voice_settings=speech_config.get("voice_settings"),
    )
    object_store = SupabaseStorageProvider(
        supabase_url=app_settings.supabase_url,
        service_role_key=app_settings.supabase_service_role_key,
        bucket=app_settings.storage_bucket,
        http_client=http_client,
    )
    record_store = SQLiteFileRecordProvider(db_path=app_settings.records_db_path)
    settings_provider = SQLiteUserSettingsProvider(db_path=app_settings.settings_db_path)
    cache_provider = _build_cache_provider(app_settings)

    # -- Services --
    summarizer = SummarizerService(
        llm_provider=llm_provider,
        max_tokens=app_settings.summary_max_tokens,
        temperature=app_settings.summary_temperature,
        system_prompt=summarizer_config.get("system_prompt") or SUMMARY_SYSTEM_PROMPT,
    )
    list_cache = FileListCache(cache_provider, ttl=app_settings.cache_ttl_seconds)
    file_service = FileService(
        records=record_store,
        object_store=object_store,
        list_cache=list_cache,
    )
    settings_service = SettingsService(
        settings_provider=settings_provider,
        speech_provider=speech_provider,
    )

    # -- Pipeline --
    pipeline = IngestionPipeline(
        text_extractor=text_extractor,
        summarizer=summarizer,
        speech_provider=speech_provider,
        object_store=object_store,
        record_store=record_store,
        settings_provider=settings_provider,
        list_cache=list_cache,
        call_timeout=app_settings.external_call_timeout,
        cleanup_orphaned_audio=app_settings.cleanup_orphaned_audio,
    )

    provider_names = {
        "identity": identity_provider.get_provider_name(),
        "extractor": text_extractor.get_provider_name(),
        "llm": llm_provider.get_provider_name(),
        "speech": speech_provider.get_provider_name(),
        "storage": object_store.get_provider_name(),
        "records": record_store.get_provider_name(),
        "settings": settings_provider.get_provider_name(),
        "cache": cache_provider.get_provider_name(),
    }

    return {
        "settings": app_settings,
        "http_client": http_client,
        "identity_provider": identity_provider,
        "record_store": record_store,
        "settings_provider": settings_provider,
        "cache_provider": cache_provider,
        "file_service": file_service,
        "settings_service": settings_service,
        "pipeline": pipeline,
        "provider_names": provider_names,
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Initialise all providers and services on startup, clean up on shutdown."""
    missing = settings.missing_credentials()
    if missing:
        if settings.app_env == "production":
            settings.validate_required()
        _logger.warning("missing_credentials", missing=missing)

    components = _build_all(settings)

    for key, value in components.items():
        setattr(application.state, key, value)

    await components["record_store"].initialize()
    await components["settings_provider"].initialize()

    _logger.info(
        "app_startup",
        version=_VERSION,
        environment=settings.app_env,
        providers=components["provider_names"],
    )

    yield

    # -- Shutdown: close shared clients --
    http_client: httpx.AsyncClient = components["http_client"]
    await http_client.aclose()
    cache_provider = components["cache_provider"]
    if isinstance(cache_provider, RedisCacheProvider):
        await cache_provider.close()
    _logger.info("app_shutdown", message="HTTP client closed")


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    application = FastAPI(
        title="PDF Narrator API",
        version=_VERSION,
        description=(
            "Upload a PDF, get an AI-written summary of it, and listen to the "
            "summary as narrated audio."
        ),
        lifespan=_lifespan,
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application, allowed_origins=settings.get_cors_origins())

    # -- API routes --
    application.include_router(api_router)

    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "src.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
