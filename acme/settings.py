# acme/settings.py
import os
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # === General ===
    app_env: str = "local"  # local | development | production

    # === Logging ===
    log_level: str = "INFO"
    log_json: bool = True

    # === Pricing ===
    pricing_config_path: Optional[str] = Field(
        None, description="YAML file with products, delivery tiers and offers"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Singleton Settings instance with simple environment overrides."""
    s = Settings()

    env = os.getenv("ENVIRONMENT", s.app_env).lower()
    if env == "production":
        s.log_level = "WARNING"
    elif env == "development":
        s.log_level = "DEBUG"

    return s
