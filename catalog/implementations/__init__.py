"""
Implementations Package

Concrete catalog implementations.
"""

from catalog.implementations.mock_catalog import MockCatalog
from catalog.implementations.sqlite_catalog import SQLiteCatalog

__all__ = [
    "MockCatalog",
    "SQLiteCatalog",
]
