from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DATA_DIR = Path(__file__).parent.parent / "data"


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    database_url: str = f"sqlite+aiosqlite:///{DATA_DIR}/longevity.db"
    log_level: str = "INFO"
    app_version: str = "0.1.0"

    model_config = SettingsConfigDict(
        env_prefix="LONGEVITY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
