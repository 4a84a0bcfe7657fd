"""
Catalog Module

Video metadata store and catalog queries.

Architecture mirrors the upload module:
- interfaces/: Abstract base classes (contracts)
- implementations/: Concrete implementations (SQLite and mock)
- models/: Data structures

Public API:
    - VideoRecord: Persisted metadata document
    - VideoStatus: Record lifecycle states
    - CatalogInterface / CatalogError: Store contract
    - create_catalog: Factory function

Usage:
    from catalog import create_catalog

    catalog = create_catalog()
    feed = catalog.list_processed(limit=20)
"""

from catalog.config import CatalogConfig
from catalog.constants import CatalogMode, VideoStatus
from catalog.factory import CatalogFactory, create_catalog
from catalog.interfaces.catalog_interface import CatalogError, CatalogInterface
from catalog.models.video_record import VideoRecord

__all__ = [
    "CatalogConfig",
    "CatalogError",
    "CatalogFactory",
    "CatalogInterface",
    "CatalogMode",
    "VideoRecord",
    "VideoStatus",
    "create_catalog",
]
