"""
Package database - SQLAlchemy storage for CoronaTracker.

Uso semplice:
    from coronatracker.database import CountryDatabase

    with CountryDatabase("sqlite+aiosqlite:///countries.db") as database:
        countries = database.live("all", lambda repo: repo.get_all())
        print(countries.wait(timeout=5))
"""

from .database import CountryDatabase
from .engine import create_engine, create_session_factory, init_db, session_scope
from .errors import RecordNotFoundError, StoreClosedError, StoreError
from .executor import BackgroundExecutor
from .live import LiveData
from .models import Base, Country
from .repositories import CountryRepository
from .seed import DEFAULT_COUNTRIES

__all__ = [
    # Models
    "Base",
    "Country",
    # Engine
    "create_engine",
    "create_session_factory",
    "session_scope",
    "init_db",
    # Storage
    "CountryDatabase",
    "CountryRepository",
    "BackgroundExecutor",
    "LiveData",
    "DEFAULT_COUNTRIES",
    # Errors
    "StoreError",
    "StoreClosedError",
    "RecordNotFoundError",
]
