"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - Upload limits and AI endpoints share one source of truth with the routes

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box against a local AI stub
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

_DEFAULT_DISEASES_PATH = Path(__file__).parent / "data" / "diseases.json"


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Server
    port: int = 8000
    node_env: str = "development"

    # Database
    database_url: str = (
        "postgresql+asyncpg://skinsense:skinsense@db:5432/skinsense"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Auth
    jwt_secret: str = "change-me-in-production"
    jwt_expires_in: str = "7d"
    jwt_algorithm: str = "HS256"
    bcrypt_rounds: int = 10

    # AI service
    ai_predict_url: str = "http://localhost:5000/predict"
    ai_chat_url: str = "http://localhost:5000/chat"
    ai_api_key: str | None = None
    ai_timeout_seconds: float = 30.0
    ai_health_timeout_seconds: float = 5.0
    ai_max_retries: int = Field(default=0, ge=0)
    ai_base_delay_ms: int = 500
    ai_max_delay_ms: int = 8_000
    rag_enabled: bool = False

    # Uploads
    max_file_size: int = 10 * 1024 * 1024
    allowed_file_types: str = "image/jpeg,image/png,image/jpg"

    # Education content
    diseases_path: Path = _DEFAULT_DISEASES_PATH

    # API
    frontend_url: str = "http://localhost:5173"
    rate_limit_window_ms: int = 900_000
    rate_limit_max_requests: int = 10

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def allowed_mime_types(self) -> list[str]:
        return [
            t.strip() for t in self.allowed_file_types.split(",") if t.strip()
        ]


@lru_cache
def get_settings() -> Settings:
    return Settings()
