from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # One Google key can cover Places API (New), Maps JavaScript API and
    # Geocoding API if all three are enabled for it.
    GOOGLE_PLACES_KEY: str = ""
    GOOGLE_MAPS_KEY: str = ""
    ANTHROPIC_KEY: str = ""

    # Anthropic Configuration
    ANTHROPIC_MODEL: str = "claude-sonnet-4-20250514"
    ANTHROPIC_MAX_TOKENS: int = 2000
    ANTHROPIC_VERSION: str = "2023-06-01"

    # Server
    PORT: int = 3000
    ENVIRONMENT: str = "development"

    LOGGER: int = 20
    LOG_DIRECTORY: str = ""

    # Local files
    DATA_DIR: Path = Path(".")
    CACHE_FILE: str = "cache.json"
    CURATED_FILE: str = "curated.json"
    STATIC_DIR: Path = Path("static")

    # Upstream calls
    HTTP_TIMEOUT: float = 30.0
    CACHE_BUILDER_TIMEOUT: float = 60.0
    CACHE_BUILDER_PAUSE: float = 1.5

    model_config = SettingsConfigDict(
        # Look for .env in the current folder OR the parent folder
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def maps_key(self) -> str:
        """Maps/Geocoding key, falling back to the Places key."""
        return self.GOOGLE_MAPS_KEY or self.GOOGLE_PLACES_KEY

    @property
    def cache_path(self) -> Path:
        return self.DATA_DIR / self.CACHE_FILE

    @property
    def curated_path(self) -> Path:
        return self.DATA_DIR / self.CURATED_FILE

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()
