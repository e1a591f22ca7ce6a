"""
Modello Country - Tabella countries (statistiche per paese).
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from coronatracker.model.country import CountryRecord

from .base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Country(Base):
    """Tabella countries - one row per country code."""

    __tablename__ = "countries"

    code: Mapped[str] = mapped_column(String(8), primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    confirmed: Mapped[int] = mapped_column(Integer, default=0)
    deaths: Mapped[int] = mapped_column(Integer, default=0)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    @classmethod
    def from_record(cls, record: CountryRecord) -> "Country":
        return cls(
            code=record.code,
            name=record.name,
            confirmed=record.confirmed,
            deaths=record.deaths,
        )

    def apply(self, record: CountryRecord) -> None:
        """Copy the record's fields onto this row (code excluded)."""
        self.name = record.name
        self.confirmed = record.confirmed
        self.deaths = record.deaths

    def to_record(self) -> CountryRecord:
        return CountryRecord(
            name=self.name,
            code=self.code,
            confirmed=self.confirmed,
            deaths=self.deaths,
        )

    def __repr__(self) -> str:
        return f"<Country {self.code} confirmed={self.confirmed} deaths={self.deaths}>"
