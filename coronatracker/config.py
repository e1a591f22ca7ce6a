"""
Configuration Management for CoronaTracker

Centralized configuration for storage location, logging paths, and settings.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Application configuration.

    Class attributes hold the environment-derived defaults. An instance can
    override the storage settings, which is how tests and embedding
    applications point the store at a different database.
    """

    # Project paths
    PROJECT_ROOT = Path(__file__).parent.parent
    DATA_DIR = Path(os.getenv("CORONATRACKER_DATA_DIR", str(PROJECT_ROOT / "data")))
    LOGS_DIR = PROJECT_ROOT / "logs"

    # Database
    DATABASE_URL = os.getenv(
        "CORONATRACKER_DATABASE_URL", f"sqlite+aiosqlite:///{DATA_DIR / 'countries.db'}"
    )
    DB_ECHO = _env_flag("CORONATRACKER_DB_ECHO", False)
    SEED_ON_CREATE = _env_flag("CORONATRACKER_SEED", True)

    # Seconds to wait on the background thread when opening and closing
    WRITE_TIMEOUT_SECONDS = float(os.getenv("CORONATRACKER_WRITE_TIMEOUT", "30"))

    # Logging
    LOG_TO_FILE = _env_flag("CORONATRACKER_LOG_FILE", False)

    def __init__(
        self,
        database_url: Optional[str] = None,
        seed_on_create: Optional[bool] = None,
        echo: Optional[bool] = None,
        write_timeout: Optional[float] = None,
    ):
        if database_url is not None:
            self.DATABASE_URL = database_url
        if seed_on_create is not None:
            self.SEED_ON_CREATE = seed_on_create
        if echo is not None:
            self.DB_ECHO = echo
        if write_timeout is not None:
            self.WRITE_TIMEOUT_SECONDS = write_timeout

    @classmethod
    def ensure_directories(cls):
        """Create necessary directories if they don't exist."""
        for directory in [cls.DATA_DIR, cls.LOGS_DIR]:
            directory.mkdir(parents=True, exist_ok=True)


if __name__ == "__main__":
    Config.ensure_directories()
    config = Config()
    print("Configuration Summary")
    print("=" * 60)
    print(f"Project Root: {config.PROJECT_ROOT}")
    print(f"Data Directory: {config.DATA_DIR}")
    print(f"Database URL: {config.DATABASE_URL}")
    print(f"Seed on create: {config.SEED_ON_CREATE}")
    print("\nDirectories created successfully!")
