# app/config.py
from pydantic_settings import BaseSettings
from typing import List, Literal, Optional
from pydantic import Field

class Settings(BaseSettings):
    SECRET_KEY: str = Field("change-me-in-production")
    ALGORITHM: str = Field("HS256")

    # Demo session cookie
    SESSION_COOKIE_NAME: str = Field("session")
    SESSION_EXPIRE_DAYS: int = Field(7)
    SESSION_COOKIE_SECURE: bool = Field(False)
    DEMO_USER_ID: str = Field("demo-user")
    DEMO_USER_EMAIL: str = Field("demo@example.com")

    DATABASE_URL: str = Field("sqlite+aiosqlite:///./goaltrack.db")
    SQLALCHEMY_DATABASE_URL: Optional[str] = None
    SQL_ECHO: bool = Field(False)

    # "sql" for the relational store, "memory" for the dev/demo stand-in
    STORAGE_BACKEND: Literal["sql", "memory"] = Field("sql")

    # Calendar day boundaries for check-ins and fitness entries
    TIMEZONE: str = Field("UTC")

    UPLOAD_DIR: str = Field("./uploads")
    UPLOAD_URL_PREFIX: str = Field("/uploads")
    MAX_UPLOAD_BYTES: int = Field(5 * 1024 * 1024)

    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["http://localhost:5173"])
    LOG_LEVEL: str = Field("INFO")

    model_config = {
        "env_file": ".env",
        "extra": "allow",
    }

    @property
    def effective_database_url(self) -> str:
        url = self.SQLALCHEMY_DATABASE_URL or self.DATABASE_URL or "sqlite+aiosqlite:///./goaltrack.db"
        # Ensure asyncpg is used
        if url.startswith("postgresql://") and "+asyncpg" not in url:
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

settings = Settings()
