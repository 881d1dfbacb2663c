import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


@lru_cache
def get_env_filename():
    runtime_env = os.getenv("ENV")
    return f".env.{runtime_env}" if runtime_env else ".env"


class Settings(BaseSettings):
    ENVIRONMENT: str = "development"
    APP_NAME: str = "AI Photo Studio"
    APP_VERSION: str = "1.0.0"
    APP_PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # Presence is checked when a remote call is about to be made, not at startup
    GEMINI_API_KEY: Optional[str] = None

    STYLE_DESCRIPTION_MODEL: str = "gemini-2.5-flash"
    IMAGE_GENERATION_MODEL: str = "gemini-2.5-flash-image-preview"

    MAX_UPLOAD_BYTES: int = 20 * 1024 * 1024

    class Config:
        env_file = get_env_filename()
        extra = "ignore"


@lru_cache
def get_settings():
    return Settings()
