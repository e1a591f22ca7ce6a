"""
Pytest configuration and fixtures for CoronaTracker tests.
"""

import logging
from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from coronatracker.config import Config
from coronatracker.database import CountryDatabase, create_engine
from coronatracker.database.models import Base
from coronatracker.logger import PACKAGE_LOGGER
from coronatracker.model import CountryRecord
from coronatracker.store import CountryStore


# Test database URL (use in-memory SQLite for fast repository tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Seconds to wait on background writes and live views
TIMEOUT = 10


@pytest.fixture(scope="function")
async def test_engine():
    """Create test database engine."""
    engine = create_engine(TEST_DATABASE_URL)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
def database_url(tmp_path):
    """File-backed SQLite URL, unique per test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'countries.db'}"


@pytest.fixture
def test_config(database_url):
    return Config(database_url=database_url, seed_on_create=False)


@pytest.fixture
def database(test_config):
    """Open CountryDatabase on a temporary file, closed after the test."""
    db = CountryDatabase.from_config(test_config).open(timeout=TIMEOUT)
    yield db
    db.close(timeout=TIMEOUT)


@pytest.fixture
def store(database):
    return CountryStore(database)


@pytest.fixture(autouse=True)
def reset_shared_store():
    """Never leak the process-wide store or database between tests."""
    yield
    CountryStore.reset_instance()


@pytest.fixture
def package_caplog(caplog):
    """caplog wired to the package logger, which does not propagate to root."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.addHandler(caplog.handler)
    yield caplog
    package_logger.removeHandler(caplog.handler)


@pytest.fixture
def canada():
    return CountryRecord(name="Canada", code="CA", confirmed=142866, deaths=9248)


@pytest.fixture
def denmark():
    return CountryRecord(name="Denmark", code="DK", confirmed=21836, deaths=635)
