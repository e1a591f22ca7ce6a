"""
CoronaTracker - local store for country-level pandemic statistics.

Observable reads and background writes over a SQLite table of countries.
"""

__version__ = "0.1.0"

from .config import Config
from .database import (
    CountryDatabase,
    LiveData,
    RecordNotFoundError,
    StoreClosedError,
    StoreError,
)
from .logger import get_logger
from .model import CountryRecord
from .store import CountryStore

# Public API
__all__ = [
    # Config
    "Config",
    # Model
    "CountryRecord",
    # Store
    "CountryStore",
    "CountryDatabase",
    "LiveData",
    # Errors
    "StoreError",
    "StoreClosedError",
    "RecordNotFoundError",
    # Utilities
    "get_logger",
]
