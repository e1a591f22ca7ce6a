"""
CountryStore - the single access point the UI layer uses for country data.

Reads come back as LiveData views that the storage layer keeps current;
writes are queued on the database's background thread and return a future.

Usage:
    store = CountryStore.get_instance(Config())
    store.get_all().observe(render_list)
    store.add(CountryRecord(name="Canada", code="CA", confirmed=142866, deaths=9248))
"""

import threading
from concurrent.futures import Future
from typing import Iterable, List, Optional, Union

from coronatracker.config import Config
from coronatracker.database import CountryDatabase, LiveData
from coronatracker.logger import get_logger
from coronatracker.model.country import CountryRecord

logger = get_logger(__name__)

RecordLike = Union[CountryRecord, dict]


def _as_record(record: RecordLike) -> CountryRecord:
    if isinstance(record, CountryRecord):
        return record
    return CountryRecord.model_validate(record)


class CountryStore:
    """
    Repository façade over the countries table.

    Build one explicitly with `CountryStore(database)`, or share one per
    process through `get_instance()`.
    """

    _instance: Optional["CountryStore"] = None
    _instance_lock = threading.Lock()

    def __init__(self, database: CountryDatabase):
        self.database = database
        self._countries = database.live("all", lambda repo: repo.get_all())

    @classmethod
    def get_instance(cls, app_context: Config) -> "CountryStore":
        """
        Return the shared store, creating it on first call.

        `app_context` is only used by the first call.
        """
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls(CountryDatabase.get_database(app_context))
                logger.info(f"CountryStore ready on {cls._instance.database.database_url}")
            else:
                url = getattr(app_context, "DATABASE_URL", None)
                if url is not None and url != cls._instance.database.database_url:
                    logger.warning(
                        f"CountryStore already bound to {cls._instance.database.database_url}, "
                        f"ignoring context for {url}"
                    )
            return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Close and forget the shared store and its database."""
        with cls._instance_lock:
            store, cls._instance = cls._instance, None
        if store is not None:
            store.close()
        CountryDatabase.reset_database()

    def __enter__(self) -> "CountryStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self.database.close()

    # Reads

    def get_all(self) -> LiveData[List[CountryRecord]]:
        """Live list of every stored country, ordered by code."""
        return self._countries

    def get_by_code(self, code: str) -> LiveData[CountryRecord]:
        """Live view of one country; its value is None while the code is not stored."""
        code = code.strip().upper()
        return self.database.live(("code", code), lambda repo: repo.get_by_code(code))

    # Writes

    def add(self, record: RecordLike) -> Future:
        record = _as_record(record)
        return self.database.run_write(lambda repo: repo.add(record), f"add {record.code}")

    def add_all(self, records: Iterable[RecordLike]) -> Future:
        """Insert several countries in one transaction."""
        records = [_as_record(record) for record in records]
        return self.database.run_write(
            lambda repo: repo.add_all(records), f"add_all ({len(records)} countries)"
        )

    def update(self, record: RecordLike) -> Future:
        record = _as_record(record)
        return self.database.run_write(lambda repo: repo.update(record), f"update {record.code}")

    def delete(self, record: RecordLike) -> Future:
        record = _as_record(record)
        return self.database.run_write(lambda repo: repo.delete(record), f"delete {record.code}")
