"""
Base per modelli SQLAlchemy.
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Stable constraint names, SQLite otherwise leaves them anonymous
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Classe base per tutti i modelli CoronaTracker."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)
