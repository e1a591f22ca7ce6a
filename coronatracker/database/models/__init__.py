"""
Modelli database CoronaTracker.
"""

from .base import Base
from .country import Country

__all__ = [
    "Base",
    "Country",
]
