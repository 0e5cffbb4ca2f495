"""Application configuration."""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Posture Analyzer"
    debug: bool = False
    api_prefix: str = "/api"
    cors_origins: List[str] = ["http://localhost:8081", "http://127.0.0.1:8081"]

    # Capture defaults
    default_device_position: str = "back"  # "front" or "back" camera

    # Stream history
    history_max_entries: int = 100  # Keep the most recent entries per stream
    history_interval_seconds: float = 1.0  # ~1 Hz history logging

    # Side view
    turtle_neck_cva_degrees: float = 50.0  # CVA below this = forward head suspected

    class Config:
        env_file = ".env"
        env_prefix = "POSTURE_"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
