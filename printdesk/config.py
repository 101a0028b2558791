"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Connection parameters come from environment variables (never hardcoded)
    - Missing connection parameters never raise here: is_configured reports them
      and the app degrades to a "not configured" dashboard
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Blank strings count as missing (an empty SUPABASE_URL= line in .env is not a config)
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from printdesk.core.domain_types import DEFAULT_LEAD_DAYS


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Order backend (PostgREST / Supabase table)
    supabase_url: str = ""
    supabase_key: str = ""
    orders_table: str = "orders"
    # None = no timeout; a hung request hangs the action
    request_timeout_seconds: float | None = None

    @field_validator("supabase_url", "supabase_key", mode="before")
    @classmethod
    def strip_blank(cls, v):
        if v is None:
            return ""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("supabase_url")
    @classmethod
    def drop_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # Order lifecycle
    default_lead_days: int = DEFAULT_LEAD_DAYS
    strict_status_transitions: bool = False

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def missing_connection_params(self) -> list[str]:
        missing = []
        if not self.supabase_url:
            missing.append("SUPABASE_URL")
        if not self.supabase_key:
            missing.append("SUPABASE_KEY")
        return missing

    @property
    def is_configured(self) -> bool:
        return not self.missing_connection_params


@lru_cache
def get_settings() -> Settings:
    return Settings()
