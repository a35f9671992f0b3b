# core/settings/base_settings.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class MarketHubBaseSettings(BaseSettings):
    """Base class for all settings sections: reads the environment and ``.env``."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )
