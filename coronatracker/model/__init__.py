"""
Domain values shared by the storage layer and its callers.
"""

from .country import CountryRecord

__all__ = ["CountryRecord"]
