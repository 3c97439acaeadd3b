from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Make `backend/.env` visible to os.environ as well (Sentry reads its own env vars).
load_dotenv(dotenv_path=Path(__file__).resolve().parents[1] / ".env", override=False)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    database_url: str = Field(default="sqlite:///./skills.db", validation_alias="DATABASE_URL")
    allowed_origins: str = Field(default="http://localhost:3000", validation_alias="ALLOWED_ORIGINS")

    # Observability
    sentry_dsn: str | None = Field(default=None, validation_alias="SENTRY_DSN")

    # Catalog snapshot cache; 0 rebuilds and revalidates the catalog on every request.
    skills_catalog_cache_ttl_seconds: float = Field(default=0.0, validation_alias="SKILLS_CATALOG_CACHE_TTL_SECONDS")

    # Local dev: create the skill tables on startup if they are missing.
    skills_auto_create_schema: bool = Field(default=True, validation_alias="SKILLS_AUTO_CREATE_SCHEMA")


settings = Settings()
