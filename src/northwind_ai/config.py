"""
Application Configuration

All settings come from environment variables (a local .env file is loaded
at startup). Values are read on every call so a running process picks up
changes without restarting.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional


DEFAULT_DB_PATH = os.path.join("data", "northwind.db")
DEFAULT_OPENROUTER_TIMEOUT = 100.0
DEFAULT_AUTH_SECRET = "northwind-ai-secret-key-change-in-production"
DEFAULT_TOKEN_EXPIRY_HOURS = 24

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@dataclass(frozen=True)
class OpenRouterSettings:
    """Snapshot of the OpenRouter configuration for a single request."""
    url: Optional[str]
    api_key: Optional[str]
    model: Optional[str]

    @property
    def is_complete(self) -> bool:
        return bool(self.url) and bool(self.api_key) and bool(self.model)


def get_openrouter_settings() -> OpenRouterSettings:
    """Read the OpenRouter endpoint, key and model from the environment."""
    return OpenRouterSettings(
        url=os.getenv("OPENROUTER_URL"),
        api_key=os.getenv("OPENROUTER_API_KEY"),
        model=os.getenv("OPENROUTER_MODEL"),
    )


def get_openrouter_timeout() -> float:
    value = os.getenv("OPENROUTER_TIMEOUT_SECONDS")
    if not value:
        return DEFAULT_OPENROUTER_TIMEOUT
    return float(value)


def get_db_path() -> str:
    return os.getenv("NORTHWIND_DB_PATH", DEFAULT_DB_PATH)


def get_auth_secret() -> str:
    return os.getenv("AUTH_SECRET", DEFAULT_AUTH_SECRET)


def get_token_expiry_hours() -> int:
    return int(os.getenv("AUTH_TOKEN_EXPIRY_HOURS", DEFAULT_TOKEN_EXPIRY_HOURS))


def configure_logging(level: Optional[str] = None):
    """Configure root logging once for the application."""
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
    )
