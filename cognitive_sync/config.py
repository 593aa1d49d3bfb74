"""Application-wide settings loaded from the environment."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


class AppConfig(BaseModel):
    """Runtime settings shared by the API and the UI.

    Attributes:
        environment: Deployment environment name (``production`` hides error details).
        api_base_url: Base URL the UI uses to reach the API.
        storage_secret: Secret for NiceGUI per-user storage.
    """

    environment: str = Field(
        default_factory=lambda: os.getenv("APP_ENV", "development").strip().lower(),
    )
    api_base_url: str = Field(
        default_factory=lambda: os.getenv("API_BASE_URL", "http://localhost:8000"),
    )
    storage_secret: str = Field(
        default_factory=lambda: os.getenv("NICEGUI_STORAGE_SECRET", "cognitive-sync-secret"),
    )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


def get_app_config() -> AppConfig:
    """Read the current application settings from the environment."""
    return AppConfig()
