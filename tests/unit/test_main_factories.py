"""Unit tests for factory functions in src/main.py.

Covers cache backend selection, the ``_build_all`` component assembly,
the ``create_app`` factory and the startup/shutdown lifespan, all without
network access or real credentials.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.config.settings import Settings
from src.pipeline.orchestrator import IngestionPipeline
from src.providers.cache.memory_cache import MemoryCacheProvider
from src.providers.cache.redis_cache import RedisCacheProvider
from src.utils.errors import ConfigurationError


# ======================================================================
# Shared helpers
# ======================================================================


def _settings(**overrides) -> Settings:
    """Build a Settings instance with safe defaults and optional overrides."""
    defaults = {
        "openai_api_key": "sk-test",
        "elevenlabs_api_key": "xi-test",
        "supabase_url": "https://proj.supabase.co",
        "supabase_anon_key": "anon",
        "supabase_service_role_key": "service",
        "app_env": "test",
    }
    defaults.update(overrides)
    return Settings(_env_file=None, **defaults)


_CONFIG = {
    "speech": {
        "voice_settings": {"stability": 0.7, "similarity_boost": 0.2},
        "quality_models": {"premium": "custom_model"},
    },
    "summarizer": {"system_prompt": "Summarize briefly."},
}


# ======================================================================
# _build_cache_provider
# ======================================================================


class TestBuildCacheProvider:
    def test_memory_default(self) -> None:
        from src.main import _build_cache_provider

        provider = _build_cache_provider(_settings())
        assert isinstance(provider, MemoryCacheProvider)

    def test_redis_selected(self) -> None:
        from src.main import _build_cache_provider

        provider = _build_cache_provider(_settings(cache_backend="Redis"))
        assert isinstance(provider, RedisCacheProvider)
        assert provider.get_provider_name() == "redis"


# ======================================================================
# _build_all
# ======================================================================


class TestBuildAll:
    def test_components_present(self, tmp_path) -> None:
        from src.main import _build_all

        components = _build_all(
            _settings(
                records_db_path=str(tmp_path / "files.db"),
                settings_db_path=str(tmp_path / "prefs.db"),
            ),
            config=_CONFIG,
        )

        assert isinstance(components["pipeline"], IngestionPipeline)
        assert components["provider_names"] == {
            "identity": "supabase-auth",
            "extractor": "pymupdf",
            "llm": "openai",
            "speech": "elevenlabs",
            "storage": "supabase-storage",
            "records": "sqlite-records",
            "settings": "sqlite-settings",
            "cache": "memory",
        }

    def test_custom_base_url_labels_llm(self) -> None:
        from src.main import _build_all

        components = _build_all(
            _settings(openai_base_url="http://localhost:8001/v1"), config=_CONFIG
        )
        assert components["provider_names"]["llm"] == "openai-compatible"


# ======================================================================
# create_app and lifespan
# ======================================================================


class TestCreateApp:
    def test_routes_registered(self) -> None:
        from src.main import create_app

        app = create_app()
        assert isinstance(app, FastAPI)
        paths = {route.path for route in app.routes}
        assert "/api/v1/upload" in paths
        assert "/api/v1/files/{file_id}" in paths
        assert "/api/v1/health" in paths

    def test_lifespan_initializes_stores(self, tmp_path) -> None:
        from src.main import create_app

        test_settings = _settings(
            records_db_path=str(tmp_path / "files.db"),
            settings_db_path=str(tmp_path / "prefs.db"),
        )
        with patch("src.main.settings", test_settings):
            with TestClient(create_app()) as client:
                response = client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["providers"]["records"] == "sqlite-records"
        assert (tmp_path / "files.db").exists()
        assert (tmp_path / "prefs.db").exists()

    @pytest.mark.asyncio
    async def test_production_without_credentials_fails(self) -> None:
        from src.main import _lifespan

        test_settings = _settings(app_env="production", openai_api_key="")
        with patch("src.main.settings", test_settings):
            with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
                async with _lifespan(FastAPI()):
                    pass
