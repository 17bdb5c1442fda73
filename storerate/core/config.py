"""
Centralised application settings loaded from environment / .env file.

Uses pydantic-settings so every value can be overridden via env vars
or the .env file at the project root.
"""

from __future__ import annotations

import logging

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings

_TEST_SECRET_KEY = "test-only-signing-secret-not-for-real-deployments"
_ENVIRONMENTS = {"production", "development", "test"}


class Settings(BaseSettings):
    # ── Project ──────────────────────────────────────────────────────
    PROJECT_NAME: str = "Store Rating Platform"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"
    ENVIRONMENT: str = "production"

    # ── Database (aiosqlite by default, asyncpg for PostgreSQL) ─────
    DATABASE_URL: str = "sqlite+aiosqlite:///./rating_system.db"

    # ── JWT ──────────────────────────────────────────────────────────
    SECRET_KEY: str = ""
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_HOURS: int = 24

    # ── Passwords ────────────────────────────────────────────────────
    BCRYPT_ROUNDS: int = 12

    # ── CORS ─────────────────────────────────────────────────────────
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _parse_cors(cls, v: object) -> list[str]:
        if isinstance(v, str) and not v.lstrip().startswith("["):
            return [o.strip() for o in v.split(",") if o.strip()]
        return v  # type: ignore[return-value]

    @field_validator("ENVIRONMENT")
    @classmethod
    def _validate_environment(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in _ENVIRONMENTS:
            raise ValueError(f"ENVIRONMENT must be one of: {sorted(_ENVIRONMENTS)}")
        return v

    @model_validator(mode="after")
    def _require_secret(self) -> "Settings":
        if not self.SECRET_KEY:
            if self.ENVIRONMENT != "test":
                raise ValueError(
                    "SECRET_KEY is not set. Provide it via the environment or .env "
                    "(only ENVIRONMENT=test may run without one)."
                )
            self.SECRET_KEY = _TEST_SECRET_KEY
        return self

    # ── Logging ──────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"

    # ── Default admin (seeded on first startup) ─────────────────────
    FIRST_ADMIN_NAME: str = "Platform System Administrator"
    FIRST_ADMIN_EMAIL: str = "admin@storerate.local"
    FIRST_ADMIN_PASSWORD: str = "Admin@1234"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }


settings = Settings()

if settings.ENVIRONMENT != "test" and len(settings.SECRET_KEY) < 32:
    logging.getLogger("storerate.core.config").warning(
        "SECRET_KEY is shorter than 32 characters; use a long random value in production."
    )
