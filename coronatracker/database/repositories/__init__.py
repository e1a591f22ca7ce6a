"""
Repositories per operazioni database.
"""

from .country_repo import CountryRepository

__all__ = [
    "CountryRepository",
]
