"""
CountryDatabase - owner of the engine, the background executor and the
live queries built on top of the countries table.

All database work runs on the executor thread and is serialised by one
asyncio lock: writes commit, then every live query is re-run before the
write's future resolves.
"""

import asyncio
import threading
import weakref
from concurrent.futures import Future
from typing import Any, Awaitable, Callable, Coroutine, Dict, Hashable, Optional

from coronatracker.config import Config
from coronatracker.database.engine import (
    create_engine,
    create_session_factory,
    init_db,
    session_scope,
)
from coronatracker.database.errors import StoreClosedError, StoreError
from coronatracker.database.executor import BackgroundExecutor
from coronatracker.database.live import LiveData
from coronatracker.database.repositories import CountryRepository
from coronatracker.database.seed import DEFAULT_COUNTRIES
from coronatracker.logger import get_logger

logger = get_logger(__name__)

RepositoryCall = Callable[[CountryRepository], Awaitable[Any]]


class _LiveQuery(LiveData):
    """A live view plus the repository call that recomputes it.

    While observed, the owning database keeps a strong reference to it;
    otherwise it lives only as long as callers hold it.
    """

    def __init__(self, key: Hashable, query: RepositoryCall, database: "CountryDatabase"):
        super().__init__(name=str(key))
        self.key = key
        self.query = query
        self._database = weakref.ref(database)

    def _on_active(self) -> None:
        database = self._database()
        if database is not None:
            database._retain(self)

    def _on_inactive(self) -> None:
        database = self._database()
        if database is not None:
            database._release(self)


class CountryDatabase:
    """
    Storage layer for country statistics.

    Example:
        >>> database = CountryDatabase("sqlite+aiosqlite:///countries.db").open()
        >>> everything = database.live("all", lambda repo: repo.get_all())
        >>> database.run_write(lambda repo: repo.add(record)).result()
        >>> database.close()
    """

    _instance: Optional["CountryDatabase"] = None
    _instance_lock = threading.Lock()

    def __init__(
        self,
        database_url: Optional[str] = None,
        echo: bool = False,
        seed_on_create: bool = False,
        executor: Optional[BackgroundExecutor] = None,
        timeout: Optional[float] = Config.WRITE_TIMEOUT_SECONDS,
    ):
        self.database_url = database_url or Config().DATABASE_URL
        self.echo = echo
        self.seed_on_create = seed_on_create
        self.timeout = timeout

        self._executor = executor or BackgroundExecutor()
        self._engine = None
        self._session_factory = None
        self._db_lock: Optional[asyncio.Lock] = None

        # Unobserved views vanish once callers drop them
        self._live: "weakref.WeakValueDictionary[Hashable, _LiveQuery]" = (
            weakref.WeakValueDictionary()
        )
        self._observed: Dict[Hashable, _LiveQuery] = {}
        self._live_lock = threading.Lock()

        self._opened = False
        self._closed = False

    @classmethod
    def from_config(cls, config: Config) -> "CountryDatabase":
        return cls(
            database_url=config.DATABASE_URL,
            echo=getattr(config, "DB_ECHO", False),
            seed_on_create=getattr(config, "SEED_ON_CREATE", False),
            timeout=getattr(config, "WRITE_TIMEOUT_SECONDS", Config.WRITE_TIMEOUT_SECONDS),
        )

    @classmethod
    def get_database(cls, context: Config) -> "CountryDatabase":
        """
        Return the process-wide database, opening it on first call.

        Later calls ignore `context`.
        """
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls.from_config(context).open()
        return cls._instance

    @classmethod
    def reset_database(cls) -> None:
        """Close and forget the process-wide database."""
        with cls._instance_lock:
            database, cls._instance = cls._instance, None
        if database is not None:
            database.close()

    def __enter__(self) -> "CountryDatabase":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def is_open(self) -> bool:
        return self._opened and not self._closed

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self, timeout: Optional[float] = None) -> "CountryDatabase":
        """Start the executor, create the schema and seed it if new.

        `timeout` defaults to the database's `timeout` setting.
        """
        if timeout is None:
            timeout = self.timeout
        if self._closed:
            raise StoreClosedError("CountryDatabase has been closed")
        if self._opened:
            return self

        self._executor.start()
        try:
            self._executor.submit(self._open()).result(timeout)
        except Exception as e:
            logger.error(f"Failed to open country database {self.database_url}: {e}")
            self._executor.stop(timeout)
            self._closed = True
            raise

        self._opened = True
        return self

    async def _open(self) -> None:
        self._db_lock = asyncio.Lock()
        self._engine = create_engine(self.database_url, echo=self.echo)
        self._session_factory = create_session_factory(self._engine)

        created = await init_db(self._engine)
        if created and self.seed_on_create:
            async with session_scope(self._session_factory) as session:
                count = await CountryRepository(session).add_all(DEFAULT_COUNTRIES)
            logger.info(f"Seeded new database with {count} countries")

    def close(self, timeout: Optional[float] = None) -> None:
        """
        Finish queued work, dispose the engine and stop the executor.

        Safe to call more than once. `timeout` defaults to the database's
        `timeout` setting.
        """
        if self._closed:
            return
        if timeout is None:
            timeout = self.timeout
        if self._executor.in_background():
            raise StoreError("CountryDatabase.close() cannot run on its own background thread")

        self._closed = True
        if not self._opened:
            return

        try:
            self._executor.submit(self._dispose()).result(timeout)
        finally:
            self._executor.stop(timeout)
            logger.info(f"Closed country database {self.database_url}")

    async def _dispose(self) -> None:
        async with self._db_lock:
            await self._engine.dispose()

    # ------------------------------------------------------------------
    # Work submission
    # ------------------------------------------------------------------

    def _submit(self, coro: Coroutine) -> Future:
        if self._closed:
            coro.close()
            raise StoreClosedError("CountryDatabase has been closed")
        if not self._opened:
            coro.close()
            raise StoreError("CountryDatabase.open() has not been called")
        return self._executor.submit(coro)

    def run_read(self, call: RepositoryCall) -> Future:
        """Run `call(repository)` on the background thread and return its future."""
        return self._submit(self._read(call))

    async def _read(self, call: RepositoryCall) -> Any:
        async with self._db_lock:
            async with session_scope(self._session_factory) as session:
                return await call(CountryRepository(session))

    def run_write(self, call: RepositoryCall, description: str = "write") -> Future:
        """
        Run `call(repository)` in its own transaction on the background thread.

        Live queries are refreshed after the commit, before the returned
        future resolves. A failure is logged and set on the future.
        """
        return self._submit(self._write(call, description))

    async def _write(self, call: RepositoryCall, description: str) -> Any:
        async with self._db_lock:
            try:
                async with session_scope(self._session_factory) as session:
                    result = await call(CountryRepository(session))
            except Exception as e:
                logger.error(f"Background {description} failed: {e}")
                raise

            logger.debug(f"Committed {description}")
            await self._refresh_all()
        return result

    # ------------------------------------------------------------------
    # Live queries
    # ------------------------------------------------------------------

    def live(self, key: Hashable, query: RepositoryCall) -> LiveData:
        """
        Return the live view registered under `key`, creating it if needed.

        A new view is loaded asynchronously; every committed write re-runs it.
        Views are tracked while observed or while some caller still holds
        them, and forgotten after that.
        """
        with self._live_lock:
            live_query = self._live.get(key)
            if live_query is not None:
                return live_query

            live_query = _LiveQuery(key, query, self)
            self._submit(self._load(live_query))
            self._live[key] = live_query

        return live_query

    def _retain(self, live_query: _LiveQuery) -> None:
        with self._live_lock:
            self._observed[live_query.key] = live_query

    def _release(self, live_query: _LiveQuery) -> None:
        with self._live_lock:
            if self._observed.get(live_query.key) is live_query:
                del self._observed[live_query.key]

    async def _load(self, live_query: _LiveQuery) -> None:
        async with self._db_lock:
            try:
                await self._refresh(live_query)
            except Exception as e:
                logger.error(f"Initial load of {live_query.name} failed: {e}")

    async def _refresh(self, live_query: _LiveQuery) -> None:
        async with self._session_factory() as session:
            value = await live_query.query(CountryRepository(session))
        live_query.post_value(value)

    async def _refresh_all(self) -> None:
        with self._live_lock:
            queries = list(self._live.values())

        for live_query in queries:
            try:
                await self._refresh(live_query)
            except Exception as e:
                # The write is already committed; a stale view must not fail it
                logger.error(f"Refresh of {live_query.name} failed: {e}")
