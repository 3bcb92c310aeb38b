"""Configuration module for plan service."""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(env_path)


class Config:
    """Application configuration."""

    # HTTP server
    SERVICE_HOST: str = os.getenv("SERVICE_HOST", "0.0.0.0")
    SERVICE_PORT: int = int(os.getenv("SERVICE_PORT", "8080"))

    # Locale used to render messages when the request does not send one
    DEFAULT_LOCALE: str = os.getenv("DEFAULT_LOCALE", "en")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


config = Config()


def validate_config():
    """Validate configuration values."""
    from apps.plan_service.services.messages import MESSAGES

    if not 0 < config.SERVICE_PORT < 65536:
        raise ValueError(f"SERVICE_PORT must be between 1 and 65535, got {config.SERVICE_PORT}")
    if config.DEFAULT_LOCALE not in MESSAGES:
        raise ValueError(
            f"DEFAULT_LOCALE '{config.DEFAULT_LOCALE}' has no message catalog. "
            f"Available: {', '.join(sorted(MESSAGES))}"
        )
