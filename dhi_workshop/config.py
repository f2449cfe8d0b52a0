"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache): single instance per process
    - Every setting has a default: the demo image runs with no environment at all

Design Decisions:
    - icu_data_path accepts ICU_DATA_PATH or NODE_ICU_DATA so the same compose
      file drives the Node and Python images of the workshop
    - Scanner binaries are settings, not constants: lets the CLI point at a
      wrapper script or a containerised trivy
"""

from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def normalize_severity(value: str) -> str:
    """Trivy expects upper-case, comma-separated severities."""
    return ",".join(s.strip().upper() for s in value.split(",") if s.strip())


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = ["*"]
    static_dir: str = "public"

    # Locale demo
    icu_data_path: str | None = Field(
        None, validation_alias=AliasChoices("icu_data_path", "node_icu_data"),
    )
    default_locale: str = "en-US"
    default_timezone: str = "UTC"
    sample_amount: float = 12345.67

    # Image scanning
    trivy_bin: str = "trivy"
    docker_bin: str = "docker"
    scan_severity: str = "HIGH,CRITICAL"

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("scan_severity")
    @classmethod
    def normalize_scan_severity(cls, v: str) -> str:
        return normalize_severity(v)


@lru_cache
def get_settings() -> Settings:
    return Settings()
