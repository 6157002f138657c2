"""Settings read from the environment (CARDSTACK_*) and an optional .env file."""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process settings, read once by the entry point."""

    model_config = SettingsConfigDict(env_prefix="CARDSTACK_", env_file=".env", extra="ignore")

    data_path: Path = Path("data")
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper()
