from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env from apps/api so it works regardless of CWD
_env_file = Path(__file__).resolve().parent.parent.parent / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=_env_file, extra="ignore")

    database_url: str = "postgresql://localhost/brandbook"
    sql_echo: bool = False
    # Poolers in front of Postgres (pgbouncer, managed hosts) want connections closed per session
    db_disable_pool: bool = False

    # Anthropic Messages API (preferred extraction backend)
    anthropic_api_key: str | None = None
    anthropic_base_url: str = "https://api.anthropic.com"
    anthropic_version: str = "2023-06-01"
    extraction_model: str = "claude-sonnet-4-20250514"
    extraction_max_tokens: int = 4096
    chat_timeout_seconds: float = 120.0

    # Chat (OpenAI-compatible); used only when no Anthropic key is set
    chat_api_base_url: str | None = None
    chat_api_key: str | None = None
    chat_model: str | None = None
    openai_api_key: str | None = None

    # URL imports
    fetch_user_agent: str = "Mozilla/5.0 (compatible; BrandGuidelinesBot/1.0)"
    fetch_timeout_seconds: float = 30.0

    # Upload handles (signed, write-once) and blob limits
    upload_token_secret: str = "change-me-in-production"
    upload_token_algorithm: str = "HS256"
    upload_url_expire_minutes: int = 15
    max_upload_bytes: int = 25 * 1024 * 1024  # 25MB

    # Rate limiting (per remote address)
    url_import_rate_limit: str = "20/minute"
    extraction_rate_limit: str = "10/minute"

    # CORS (comma-separated origins; * allows all)
    cors_origins: str = "*"

    # Public API URL for constructing upload URLs (when behind proxy). If unset, uses request.base_url.
    api_public_url: str | None = None

    @property
    def cors_origins_list(self) -> list[str]:
        """Parsed CORS origins for middleware."""
        raw = self.cors_origins.strip()
        return ["*"] if not raw else [o.strip() for o in raw.split(",") if o.strip()]

    @property
    def async_database_url(self) -> str:
        """database_url rewritten for the asyncpg driver (Render hands out postgres://)."""
        url = self.database_url
        if url.startswith("postgres://"):
            return url.replace("postgres://", "postgresql+asyncpg://", 1)
        if url.startswith("postgresql://") and "asyncpg" not in url:
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url


@lru_cache
def get_settings() -> Settings:
    return Settings()
