"""
Repository per Country.
"""

from typing import Iterable, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from coronatracker.database.errors import RecordNotFoundError
from coronatracker.database.models import Country
from coronatracker.model.country import CountryRecord


class CountryRepository:
    """Repository per operazioni su Country.

    Reads return CountryRecord snapshots, never live ORM rows, so results can
    be handed to other threads safely. Writes only flush; the caller owns the
    transaction.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _get_row(self, code: str) -> Optional[Country]:
        result = await self.session.execute(select(Country).where(Country.code == code))
        return result.scalar_one_or_none()

    async def get_by_code(self, code: str) -> Optional[CountryRecord]:
        """Ottieni country per codice, None se assente."""
        row = await self._get_row(code.strip().upper())
        return row.to_record() if row is not None else None

    async def get_all(self) -> list[CountryRecord]:
        """Ottieni tutti i countries, ordinati per codice."""
        result = await self.session.execute(select(Country).order_by(Country.code))
        return [row.to_record() for row in result.scalars().all()]

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(Country))
        return result.scalar_one()

    async def add(self, record: CountryRecord) -> None:
        """Insert a new country. Raises IntegrityError on flush for a duplicate code."""
        self.session.add(Country.from_record(record))
        await self.session.flush()

    async def add_all(self, records: Iterable[CountryRecord]) -> int:
        rows = [Country.from_record(record) for record in records]
        self.session.add_all(rows)
        await self.session.flush()
        return len(rows)

    async def update(self, record: CountryRecord) -> None:
        row = await self._get_row(record.code)
        if row is None:
            raise RecordNotFoundError(record.code)
        row.apply(record)
        await self.session.flush()

    async def delete(self, record: CountryRecord) -> None:
        row = await self._get_row(record.code)
        if row is None:
            raise RecordNotFoundError(record.code)
        await self.session.delete(row)
        await self.session.flush()
