"""
Interfaces Package

Abstract interfaces for catalog implementations.
"""

from catalog.interfaces.catalog_interface import CatalogError, CatalogInterface

__all__ = [
    "CatalogError",
    "CatalogInterface",
]
