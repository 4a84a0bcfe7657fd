"""
Catalog Factory

Factory pattern for creating catalog implementations.
Follows same pattern as upload/factory.py for consistency.
"""

import logging
from typing import Literal, Optional

from catalog.config import CatalogConfig
from catalog.implementations.mock_catalog import MockCatalog
from catalog.implementations.sqlite_catalog import SQLiteCatalog
from catalog.interfaces.catalog_interface import CatalogInterface

# Type alias
CatalogBackend = Literal["sqlite", "mock"]


class CatalogFactory:
    """
    Factory for creating catalog implementations.

    Usage:
        # SQLite catalog configured from config/catalog.yaml
        catalog = CatalogFactory.create_catalog()

        # In-memory catalog for testing
        catalog = CatalogFactory.create_catalog(mode="mock")
    """

    _logger = logging.getLogger(__name__)

    @classmethod
    def create_catalog(
        cls,
        mode: CatalogBackend = "sqlite",
        config: Optional[CatalogConfig] = None,
    ) -> CatalogInterface:
        """
        Create a catalog instance.

        Args:
            mode: "sqlite" (local database) or "mock" (in memory)
            config: Catalog configuration (None = load default YAML)

        Returns:
            CatalogInterface implementation
        """
        if mode == "mock":
            cls._logger.info("Creating Mock Catalog (forced)")
            return MockCatalog()

        config = config or CatalogConfig()
        cls._logger.info(f"Creating SQLite Catalog at {config.storage_base_path}")
        return SQLiteCatalog(
            storage_base=config.storage_base_path,
            db_name=config.metadata_db_name,
        )


def create_catalog(
    force_mock: bool = False,
    config: Optional[CatalogConfig] = None,
) -> CatalogInterface:
    """
    Quick catalog creation with simple mock override.

    Args:
        force_mock: If True, always use the in-memory catalog
        config: Catalog configuration (None = load default YAML)
    """
    mode = "mock" if force_mock else "sqlite"
    return CatalogFactory.create_catalog(mode=mode, config=config)
