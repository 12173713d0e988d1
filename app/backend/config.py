"""
Application configuration using Pydantic Settings.

Automatically loads environment variables from .env files.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

BACKEND_DIR = Path(__file__).parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # OpenAI
    openai_api_key: str | None = None
    llm_model: str = "gpt-4.1-mini"
    llm_temperature: float = 1.0
    llm_max_output_tokens: int = 2048

    # Storage
    upload_dir: Path = BACKEND_DIR / "uploads"
    dashboard_dir: Path = BACKEND_DIR.parent / "dashboards"
    max_upload_files: int = 10

    # Frontend origins allowed by CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",  # Vite development server
        "http://127.0.0.1:5173",
    ]

    # Debug flags
    debug: bool = False

    model_config = SettingsConfigDict(
        # Load from .env file in the backend directory
        env_file=BACKEND_DIR / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
        # Case insensitive environment variable names
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application configuration loaded from environment.
    """
    return Settings()
