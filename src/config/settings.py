"""Application settings loaded from environment variables via pydantic-settings.

Values are read from (highest priority first):

  1. **Environment variables** - e.g. ``OPENAI_API_KEY=sk-abc123``
  2. **.env file** - key=value lines in the project root (local development)
  3. The defaults declared below

Field ``openai_api_key`` maps to env var ``OPENAI_API_KEY`` and so on.
An empty string means "not configured"; :meth:`Settings.validate_required`
turns missing credentials into a :class:`ConfigurationError` at startup.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from src.utils.errors import ConfigurationError


class Settings(BaseSettings):
    """PDF narration service settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Summarization (OpenAI-compatible) ===
    openai_api_key: str = ""
    openai_base_url: str = ""  # Custom base URL for OpenAI-compatible APIs
    openai_text_model: str = "gpt-4"
    summary_max_tokens: int = 2000
    summary_temperature: float = 0.3

    # === Speech synthesis (ElevenLabs) ===
    elevenlabs_api_key: str = ""
    elevenlabs_base_url: str = "https://api.elevenlabs.io/v1"

    # === Supabase (identity + object storage) ===
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""
    storage_bucket: str = "audiobooks"

    # === Record + preference stores ===
    records_db_path: str = "data/files.db"
    settings_db_path: str = "data/user_settings.db"

    # === Cache ===
    cache_backend: str = "memory"  # "memory" | "redis"
    redis_url: str = "redis://localhost:6379/0"
    cache_ttl_seconds: int = 60 * 60 * 24
    cache_max_entries: int = 100

    # === Ingestion ===
    external_call_timeout: float = 60.0  # seconds, per collaborator call
    max_upload_bytes: int = 50 * 1024 * 1024
    cleanup_orphaned_audio: bool = True

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"
    cors_origins: str = "*"  # comma-separated

    def get_cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def missing_credentials(self) -> list[str]:
        """Return the env var names of required credentials that are empty."""
        required = {
            "OPENAI_API_KEY": self.openai_api_key,
            "ELEVENLABS_API_KEY": self.elevenlabs_api_key,
            "SUPABASE_URL": self.supabase_url,
            "SUPABASE_ANON_KEY": self.supabase_anon_key,
            "SUPABASE_SERVICE_ROLE_KEY": self.supabase_service_role_key,
        }
        return [name for name, value in required.items() if not value]

    def validate_required(self) -> None:
        """Raise :class:`ConfigurationError` if any required credential is missing."""
        missing = self.missing_credentials()
        if missing:
            raise ConfigurationError(
                message=f"Missing required configuration: {', '.join(missing)}"
            )
