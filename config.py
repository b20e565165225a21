"""Configuration management via pydantic-settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Primary source: remote listing feed
    listings_feed_url: str | None = None
    listings_feed_api_key: str | None = None
    feed_timeout_seconds: float = 30.0
    feed_limit: int = 1000

    # Secondary source: local listing cache
    database_path: Path = Field(default=Path("./data/listings.db"))

    # Query defaults
    default_page_size: int = 25
    max_page_size: int = 100

    # Scoring
    primary_models: list[str] = Field(default_factory=lambda: ["RAV4", "CR-V"])
    secondary_models: list[str] = Field(
        default_factory=lambda: [
            "C-HR",
            "HR-V",
            "Highlander",
            "4Runner",
            "Venza",
            "Pilot",
            "Camry",
            "Accord",
        ]
    )
    current_year: int | None = None

    # Logging
    log_level: str = "INFO"
    log_dir: Path = Field(default=Path("./logs"))

    @property
    def feed_headers(self) -> dict[str, str]:
        """Headers sent with every feed request."""
        headers = {"Accept": "application/json"}
        if self.listings_feed_api_key:
            headers["Authorization"] = f"Bearer {self.listings_feed_api_key}"
        return headers


settings = Settings()
