"""
Runtime Configuration for the Catalog Service

All settings are read from environment variables once, at import time.

Includes:
- Database location and SQL echo flag
- Log directory and level
- Bind host/port for the HTTP server
"""
import os
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DATA_DIR = Path.home() / ".local_library"


def _env_flag(name: str, default: str = "false") -> bool:
    """
    Read a boolean environment variable.

    Returns:
        True if the variable is set to 'true', '1' or 'yes' (case-insensitive)
    """
    return os.environ.get(name, default).lower() in ("true", "1", "yes")


class CatalogConfig:
    """Catalog settings resolved from the environment"""

    DATABASE_URL: str = os.environ.get(
        "CATALOG_DATABASE_URL",
        f"sqlite:///{DATA_DIR / 'catalog.db'}"
    )
    DATABASE_ECHO: bool = _env_flag("CATALOG_DATABASE_ECHO")

    LOG_DIR: Path = Path(os.environ.get("CATALOG_LOG_DIR", str(DATA_DIR / "logs")))
    LOG_LEVEL: str = os.environ.get("CATALOG_LOG_LEVEL", "INFO").upper()

    HOST: str = os.environ.get("CATALOG_HOST", "127.0.0.1")
    PORT: int = int(os.environ.get("CATALOG_PORT", "3000"))

    @classmethod
    def log_level(cls) -> int:
        """Resolve LOG_LEVEL to a logging constant, falling back to INFO."""
        level = logging.getLevelName(cls.LOG_LEVEL)
        if isinstance(level, int):
            return level
        logger.warning(f"Unknown CATALOG_LOG_LEVEL '{cls.LOG_LEVEL}', using INFO")
        return logging.INFO
