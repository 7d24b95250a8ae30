from enum import Enum

from pydantic_settings import BaseSettings


class Environment(str, Enum):
    PRODUCTION = "production"
    DEVELOPMENT = "development"
    TESTING = "testing"


class Settings(BaseSettings):
    """Configuration settings for the air quality monitor."""

    # Environment
    ENVIRONMENT: Environment = Environment.DEVELOPMENT

    # Device
    DEVICE_HOST: str = "sen55-airquality.local"
    DEVICE_SECURE: bool = False
    WS_PATH: str = "/ws"
    HTTP_TIMEOUT_SEC: float = 5.0

    # Connection
    RECONNECT_DELAY_SEC: float = 5.0
    STATUS_POLL_INTERVAL_SEC: float = 10.0

    # Rendering
    SPARKLINE_WIDTH: int = 120
    SPARKLINE_HEIGHT: int = 40

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"


def get_settings() -> Settings:
    """Get settings based on environment."""
    import os

    env = os.getenv("AQ_MONITOR_ENV", "development").lower()

    if env == "production":
        return Settings(ENVIRONMENT=Environment.PRODUCTION, LOG_LEVEL="WARNING")
    elif env == "testing":
        return Settings(
            ENVIRONMENT=Environment.TESTING,
            DEVICE_HOST="localhost:8765",
            RECONNECT_DELAY_SEC=0.1,
            STATUS_POLL_INTERVAL_SEC=0.1,
            HTTP_TIMEOUT_SEC=1.0,
            LOG_LEVEL="DEBUG",
        )
    else:
        return Settings(ENVIRONMENT=Environment.DEVELOPMENT, LOG_LEVEL="DEBUG")
