"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API starts without any configuration; override them via the
environment (or a ``.env`` file loaded by your process manager).
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Movie Rental API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Routes are mounted under this prefix.  Empty by default so the
    # catalog is served at ``/movies`` and ``/users``; set for example
    # ``API_PREFIX=/api/v1`` when running behind a shared gateway.
    api_prefix: str = os.getenv("API_PREFIX", "")

    # Path of the SQLite file backing the document store.  A relative
    # path is resolved relative to the project root by ``core.db``.
    database_url: str = os.getenv("DATABASE_URL", "movie_rental.db")

    # Listing defaults used when ``page``/``perPage`` are missing or
    # not numeric.
    default_page: int = int(os.getenv("DEFAULT_PAGE", "1"))
    default_per_page: int = int(os.getenv("DEFAULT_PER_PAGE", "10"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# must be set before this module is imported.
settings = Settings()
