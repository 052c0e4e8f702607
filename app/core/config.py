# app/core/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal

class Settings(BaseSettings):
    # App
    ENV: str = "development"
    DEBUG: bool = False

    # Security
    SECRET_KEY: str
    ALGORITHM: Literal["HS256", "HS512"] = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 12

    # Database
    DATABASE_URL: str = "sqlite:///./salon.db"
    STORE_BACKEND: Literal["sql", "memory"] = "sql"

    # Accounts (an account is disabled unless both fields are set)
    ADMIN_EMAIL: str | None = None
    ADMIN_PASSWORD: str | None = None
    RECEPTION_EMAIL: str | None = None
    RECEPTION_PASSWORD: str | None = None

    # Reports
    REVENUE_ATTRIBUTION: Literal["full", "split"] = "full"

    # Uploads
    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True

    # Frontend
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]



    model_config = SettingsConfigDict(
        env_file=".env",
        extra="forbid",
    )


settings = Settings()
