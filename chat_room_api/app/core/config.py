"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts with no configuration at all; override them via
environment variables in a real deployment.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Chat Room API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Optional path of a log file in addition to the console output.
    log_file: str = os.getenv("LOG_FILE", "")

    # Prefix under which the versioned router is mounted.  Clients of the
    # chat room expect the bare paths (``/participants``, ``/messages``,
    # ``/status``), so the default is empty.
    api_prefix: str = os.getenv("API_PREFIX", "")

    # Path to the SQLite database.  A relative path is resolved relative
    # to the project root by the ``db`` module; ``:memory:`` is accepted.
    database_url: str = os.getenv("DATABASE_URL", "chat_room.db")

    # Presence sweeper: how often it runs and how long a participant may
    # stay silent before being removed from the room.
    sweeper_enabled: bool = os.getenv("SWEEPER_ENABLED", "true").lower() in {"1", "true", "yes"}
    sweep_interval_seconds: float = float(os.getenv("SWEEP_INTERVAL_SECONDS", "15"))
    status_timeout_ms: int = int(os.getenv("STATUS_TIMEOUT_MS", "10000"))

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "5000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
