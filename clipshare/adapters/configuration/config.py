# clipshare/adapters/configuration/config.py

from typing import Optional
from logging import getLevelName
from pydantic import Field, PostgresDsn, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"

    # Environment
    ENVIRONMENT: str = "development"  # "development", "production", "testing"
    DEBUG: bool = False

    # Database
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "clipshare"
    POSTGRES_HOST: Optional[str] = None
    POSTGRES_PORT: int = 5432
    SQLITE_PATH: str = "./data.db"
    DATABASE_URL: Optional[str] = Field(default=None, validate_default=True)

    # Connection pool (ignored for SQLite)
    DB_POOL_SIZE: int = 20
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 1800
    AUTO_CREATE_TABLES: bool = True

    # Clips
    SHORT_CODE_MAX_ATTEMPTS: int = 5
    MAINTENANCE_INTERVAL_SECONDS: float = 10.0

    @field_validator("DATABASE_URL", mode="before")
    def assemble_db_url(cls, value, info):
        if value:
            return str(value)

        data = info.data
        if data.get("POSTGRES_HOST"):
            return str(PostgresDsn.build(
                scheme="postgresql+asyncpg",
                username=data.get("POSTGRES_USER"),
                password=data.get("POSTGRES_PASSWORD") or None,
                host=data["POSTGRES_HOST"],
                port=data.get("POSTGRES_PORT"),
                path=data.get("POSTGRES_DB"),
            ))

        return f"sqlite+aiosqlite:///{data.get('SQLITE_PATH', './data.db')}"

    @field_validator("LOG_LEVEL", mode="before")
    def validate_log_level(cls, v: str) -> str:
        """Ensures the value is a level known to the logging module."""
        lvl = str(v).upper()
        if not isinstance(getLevelName(lvl), int):
            raise ValueError(f"Invalid LOG_LEVEL: {v!r}")
        return lvl

    @field_validator("SHORT_CODE_MAX_ATTEMPTS")
    def validate_max_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("SHORT_CODE_MAX_ATTEMPTS must be at least 1")
        return v

    @field_validator("MAINTENANCE_INTERVAL_SECONDS")
    def validate_interval(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("MAINTENANCE_INTERVAL_SECONDS must be positive")
        return v

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
