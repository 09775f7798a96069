"""
Runtime Configuration

Reads service settings from environment variables once at import time.

Variables:
- LIBRARY_DATA_DIR: directory for the default SQLite database and logs
- LIBRARY_DATABASE_URL: SQLAlchemy URL (overrides the default SQLite file)
- LIBRARY_LOG_LEVEL: root log level name
- LIBRARY_MAX_CONFLICT_RETRIES: optimistic-concurrency retries per use case
- LIBRARY_HOST / LIBRARY_PORT: bind address for the API server
"""
import os
import logging
from dataclasses import dataclass
from pathlib import Path

from exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def _read_int(name: str, default: int, minimum: int = 0) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}", missing_keys=[name])
    if value < minimum:
        raise ConfigurationError(f"{name} must be >= {minimum}, got {value}", missing_keys=[name])
    return value


@dataclass(frozen=True)
class Settings:
    """Resolved service settings."""

    data_dir: Path
    database_url: str
    log_dir: Path
    log_level: str
    max_conflict_retries: int
    host: str
    port: int


def load_settings() -> Settings:
    """
    Build Settings from the current environment.

    Returns:
        Settings instance

    Raises:
        ConfigurationError: If a numeric variable cannot be parsed
    """
    data_dir = Path(os.environ.get("LIBRARY_DATA_DIR", Path.home() / ".library-lending")).expanduser()
    database_url = os.environ.get("LIBRARY_DATABASE_URL") or f"sqlite:///{data_dir / 'library.db'}"

    log_level = os.environ.get("LIBRARY_LOG_LEVEL", "INFO").upper()
    if log_level not in logging.getLevelNamesMapping():
        logger.warning(f"Unknown LIBRARY_LOG_LEVEL {log_level!r}, falling back to INFO")
        log_level = "INFO"

    return Settings(
        data_dir=data_dir,
        database_url=database_url,
        log_dir=data_dir / "logs",
        log_level=log_level,
        max_conflict_retries=_read_int("LIBRARY_MAX_CONFLICT_RETRIES", 3),
        host=os.environ.get("LIBRARY_HOST", "0.0.0.0"),
        port=_read_int("LIBRARY_PORT", 8888, minimum=1),
    )


settings = load_settings()
