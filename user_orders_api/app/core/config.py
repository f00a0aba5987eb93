"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields.  In a
production deployment you should override these via environment
variables or a dedicated configuration service.
"""

import os
from dataclasses import dataclass
from typing import Optional

from fastapi import Request


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "User Orders API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _env_flag("DEBUG", "false")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # All routes are mounted below this prefix.  The default keeps the
    # paths used by existing clients (``/examples/users`` etc.).
    api_prefix: str = os.getenv("API_PREFIX", "/examples")

    # Page sizes outside ``[1, max_page_size]`` fall back to
    # ``default_page_size``.
    default_page_size: int = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
    max_page_size: int = int(os.getenv("MAX_PAGE_SIZE", "100"))

    # Number of entries returned by ``GET /users/top`` when the client
    # does not ask for a specific limit.
    top_users_limit: int = int(os.getenv("TOP_USERS_LIMIT", "5"))

    # Load the example dataset when the application is created.  Tests
    # that need an empty store switch this off.
    seed_on_startup: bool = _env_flag("SEED_ON_STARTUP", "true")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at import time, environment variables should be set
# before importing this module.
settings = Settings()


def get_settings(request: Request) -> Settings:
    """FastAPI dependency returning the settings the app was built with."""
    return request.app.state.settings
