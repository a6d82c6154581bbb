# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, Optional
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./inventory.db"

    # Local blob storage for product images
    UPLOAD_DIR: str = "static/uploads"
    UPLOAD_URL_PREFIX: str = "/uploads"

    # Extra CORS origin (deployed frontend)
    FRONTEND_URL: Optional[str] = None

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

settings = Settings()
