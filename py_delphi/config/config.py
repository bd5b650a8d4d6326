from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["json", "plain"] = Field(
        default="json", description="Logging format (plain or json)"
    )

    # Map Generation Configuration
    default_generator: Literal["baseline", "drunken_walk"] = Field(
        default="drunken_walk", description="Generator used when none is requested"
    )
    map_seed: Optional[str] = Field(
        default=None, description="Seed for reproducible boards (random when unset)"
    )
    map_radius: int = Field(default=6, ge=1, le=32, description="Board radius in hexes")


# Instantiate singleton settings object
settings = Settings()
