"""
Core settings and environment variables for the Emergency Dispatch Hub.
Uses pydantic-settings for type-safe environment variable loading.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


def _split_csv(raw: str) -> List[str]:
    """Split a comma separated setting into normalized, de-duplicated values."""
    values: List[str] = []
    for part in raw.split(","):
        value = part.strip().lower()
        if value and value not in values:
            values.append(value)
    return values


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Create a .env file in the root directory to configure these.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Ramstropolis Emergency Dispatch"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "WARNING"  # INFO logs every queue mutation

    # Durable state snapshot (one file per process instance)
    STATE_FILE_PATH: str = "./dispatch_data.json"

    # Districts that exist (empty) from startup. Others are created on first use.
    DEFAULT_DISTRICTS: str = "central,south,east"

    # Comparison window for trend analysis, fixed for the life of the process
    YESTERDAY_CATEGORIES: str = "fire,medical,security"

    @property
    def default_districts(self) -> List[str]:
        return _split_csv(self.DEFAULT_DISTRICTS)

    @property
    def yesterday_categories(self) -> List[str]:
        return _split_csv(self.YESTERDAY_CATEGORIES)


# Global settings instance
settings = Settings()
