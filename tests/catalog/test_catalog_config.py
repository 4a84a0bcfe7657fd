"""
Catalog Config Tests

To run these tests:
    pytest tests/catalog/test_catalog_config.py -v
"""

import pytest
import yaml

from catalog.config import CatalogConfig
from catalog.factory import CatalogFactory
from catalog.implementations.mock_catalog import MockCatalog
from catalog.implementations.sqlite_catalog import SQLiteCatalog


@pytest.mark.unit
def test_defaults_when_file_missing(tmp_path):
    config = CatalogConfig(tmp_path / "catalog.yaml")

    assert config.metadata_db_name == "video_catalog.db"
    assert config.feed_page_limit == 50
    assert not (tmp_path / "catalog.yaml").exists()


@pytest.mark.unit
def test_file_overrides_defaults(tmp_path):
    path = tmp_path / "catalog.yaml"
    path.write_text(
        yaml.dump({"storage_base_path": str(tmp_path / "data"), "feed_page_limit": 5}),
    )

    config = CatalogConfig(path)

    assert config.feed_page_limit == 5
    assert config.storage_base_path == (tmp_path / "data").resolve()
    assert config.metadata_db_name == "video_catalog.db"


@pytest.mark.unit
def test_invalid_limit_rejected(tmp_path):
    path = tmp_path / "catalog.yaml"
    path.write_text(yaml.dump({"feed_page_limit": 0}))

    with pytest.raises(ValueError):
        CatalogConfig(path)


@pytest.mark.unit
def test_set_and_save(tmp_path):
    path = tmp_path / "catalog.yaml"
    config = CatalogConfig(path)

    config.set("feed_page_limit", 12)

    assert CatalogConfig(path).feed_page_limit == 12
    with pytest.raises(ValueError):
        config.set("feed_page_limit", -1)
    assert config.feed_page_limit == 12


@pytest.mark.unit
def test_factory_builds_catalogs(tmp_path):
    config = CatalogConfig(tmp_path / "catalog.yaml")
    config.set("storage_base_path", str(tmp_path / "db"), save=False)

    sqlite = CatalogFactory.create_catalog(mode="sqlite", config=config)
    assert isinstance(sqlite, SQLiteCatalog)
    assert (tmp_path / "db" / "video_catalog.db").exists()
    sqlite.cleanup()

    assert isinstance(CatalogFactory.create_catalog(mode="mock"), MockCatalog)
