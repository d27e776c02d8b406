"""Configuration management for the watchpost service."""

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .types import Environment


class Settings(BaseModel):
    """Application settings."""

    # Environment
    version: str = Field(default="0.1.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development/production/testing)",
    )

    # API Settings
    api_title: str = Field(default="Watchpost API", description="API title")
    api_version: str = Field(default="1.0.0", description="API version")
    cors_allow_origins: list[str] = Field(
        default=["*"], description="Allowed CORS origins"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_to_file: bool = Field(
        default=False, description="Whether to also write logs/watchpost.log"
    )

    # Task configuration file
    config_path: Path = Field(
        default=Path("config.json"),
        description="JSON file holding notification settings and tasks",
    )

    # HTTP
    http_timeout_seconds: float = Field(
        default=30.0, description="Timeout applied to every outbound request"
    )
    user_agent: str = Field(
        default="watchpost/0.1 (+https://github.com/watchpost)",
        description="User-Agent header for monitor requests",
    )

    # Notifications
    server_chan_keys: list[str] = Field(
        default_factory=list,
        description="ServerChan keys used when the config file has none",
    )

    # Exchange account monitor
    exchange_info_url: str = Field(
        default="https://api.hyperliquid.xyz/info",
        description="Hyperliquid info endpoint",
    )

    # Event bus
    event_bus_max_size: int = Field(
        default=1000, ge=1, description="Maximum queued events before dropping"
    )
    event_history_size: int = Field(
        default=100, ge=1, description="Number of recent events kept for the API"
    )

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        if self.environment == Environment.PRODUCTION:
            self.log_to_file = True

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == Environment.TESTING


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def load_settings() -> Settings:
    """Load settings from environment variables."""

    # Load .env file if it exists
    load_dotenv()

    cors_origins_str = os.getenv("WATCHPOST_CORS_ORIGINS", "*")
    if cors_origins_str == "*":
        cors_origins = ["*"]
    else:
        cors_origins = _split_csv(cors_origins_str)

    log_to_file = os.getenv("WATCHPOST_LOG_TO_FILE", "false").lower() in [
        "true",
        "1",
        "yes",
        "on",
    ]

    return Settings(
        environment=Environment(os.getenv("WATCHPOST_ENV", "development")),
        api_title=os.getenv("WATCHPOST_API_TITLE", "Watchpost API"),
        api_version=os.getenv("WATCHPOST_API_VERSION", "1.0.0"),
        cors_allow_origins=cors_origins,
        log_level=os.getenv("WATCHPOST_LOG_LEVEL", "INFO").upper(),
        log_to_file=log_to_file,
        config_path=Path(os.getenv("WATCHPOST_CONFIG_PATH", "config.json")),
        http_timeout_seconds=float(os.getenv("WATCHPOST_HTTP_TIMEOUT", "30")),
        server_chan_keys=_split_csv(os.getenv("SERVER_CHAN_KEY", "")),
        exchange_info_url=os.getenv(
            "WATCHPOST_EXCHANGE_INFO_URL", "https://api.hyperliquid.xyz/info"
        ),
        event_bus_max_size=int(os.getenv("WATCHPOST_EVENT_BUS_SIZE", "1000")),
        event_history_size=int(os.getenv("WATCHPOST_EVENT_HISTORY", "100")),
    )


# Global settings instance
settings = load_settings()
