"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Credentials are optional at load time so the trigger
service can start (and be tested) without a Firebase project; the
runtime logs and falls back when they are missing.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for the trigger handlers, loaded from environment and .env."""

    # App
    app_name: str = "collab-sync"
    app_version: str = "1.0.0"
    debug: bool = False
    # Deployment region the triggers are registered in (informational; logged at startup).
    function_region: str = "asia-south1"

    # Firebase / Firestore: use key (env) or path (file).
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None  # Path to JSON file

    # Blob storage: "firebase" (Cloud Storage JSON API) or "local" (filesystem, dev only)
    storage_backend: str = "firebase"
    # Defaults to "<project_id>.appspot.com" when unset
    storage_bucket: str | None = None
    storage_root: str = "/var/collab-sync/storage"

    # Outbound HTTP (Firestore + Storage REST)
    http_timeout_seconds: float = 30.0

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_storage(self) -> "Settings":
        """Validate storage backend selection."""
        backend = self.storage_backend.lower()
        if backend == "local":
            if not self.storage_root:
                raise ValueError("STORAGE_ROOT is required when storage_backend is 'local'.")
        elif backend != "firebase":
            raise ValueError(
                f"Invalid storage_backend '{self.storage_backend}'. "
                "Must be one of: 'firebase', 'local'"
            )
        if not 0.0 <= self.telemetry_sample_rate <= 1.0:
            raise ValueError("TELEMETRY_SAMPLE_RATE must be between 0.0 and 1.0")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    In tests, call get_settings.cache_clear() before overriding env vars so
    the next get_settings() uses the new values.
    """
    return Settings()
