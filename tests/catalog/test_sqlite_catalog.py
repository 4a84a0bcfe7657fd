"""
SQLite Catalog Tests

Tests for the local metadata store showing:
- Record persistence and idempotent overwrite
- Processing pipeline updates
- Catalog queries (newest first, limits)

To run these tests:
    pytest tests/catalog/test_sqlite_catalog.py -v
"""

import pytest

from catalog.constants import VideoStatus
from catalog.implementations.sqlite_catalog import SQLiteCatalog
from core.errors import CatalogError

# =============================================================================
# INITIALIZATION TESTS
# =============================================================================


@pytest.mark.unit
def test_catalog_creates_database(tmp_path):
    catalog = SQLiteCatalog(tmp_path / "nested")

    assert (tmp_path / "nested" / "video_catalog.db").exists()

    catalog.cleanup()


# =============================================================================
# WRITE TESTS
# =============================================================================


@pytest.mark.unit
def test_save_and_get_record(sqlite_catalog, make_record):
    record = make_record("v1")

    sqlite_catalog.save_record(record)
    loaded = sqlite_catalog.get_record("v1")

    assert loaded == record
    assert loaded.status == VideoStatus.UPLOADED
    assert loaded.processed_url is None


@pytest.mark.unit
def test_save_is_idempotent_overwrite(sqlite_catalog, make_record):
    """A finalize retry writes the same key again without error"""
    sqlite_catalog.save_record(make_record("v1"))
    replacement = make_record("v1", minutes_ago=5)

    sqlite_catalog.save_record(replacement)

    assert sqlite_catalog.get_total_count() == 1
    assert sqlite_catalog.get_record("v1").created_at == replacement.created_at


@pytest.mark.unit
def test_get_missing_record(sqlite_catalog):
    assert sqlite_catalog.get_record("nope") is None


@pytest.mark.unit
def test_update_processing_result(sqlite_catalog, make_record):
    sqlite_catalog.save_record(make_record("v1"))

    updated = sqlite_catalog.update_processing_result(
        "v1",
        VideoStatus.PROCESSED,
        processed_url="https://cdn.test/v1.mp4",
    )

    assert updated.status == VideoStatus.PROCESSED
    assert updated.processed_url == "https://cdn.test/v1.mp4"
    assert updated.is_processed


@pytest.mark.unit
def test_update_keeps_processed_url_when_not_given(sqlite_catalog, make_record):
    sqlite_catalog.save_record(make_record("v1", processed_url="https://cdn.test/a"))

    updated = sqlite_catalog.update_processing_result("v1", VideoStatus.FAILED)

    assert updated.status == VideoStatus.FAILED
    assert updated.processed_url == "https://cdn.test/a"


@pytest.mark.unit
def test_update_missing_record_raises(sqlite_catalog):
    with pytest.raises(CatalogError):
        sqlite_catalog.update_processing_result("nope", VideoStatus.PROCESSED)


# =============================================================================
# QUERY TESTS
# =============================================================================


@pytest.mark.unit
def test_list_by_owner_newest_first(sqlite_catalog, make_record):
    sqlite_catalog.save_record(make_record("old", minutes_ago=60))
    sqlite_catalog.save_record(make_record("new", minutes_ago=1))
    sqlite_catalog.save_record(make_record("mid", minutes_ago=30))
    sqlite_catalog.save_record(make_record("other", owner_id="user-2"))

    ids = [r.video_id for r in sqlite_catalog.list_by_owner("user-1")]

    assert ids == ["new", "mid", "old"]


@pytest.mark.unit
def test_list_processed_only_has_processed_url(sqlite_catalog, make_record):
    sqlite_catalog.save_record(make_record("raw", minutes_ago=1))
    sqlite_catalog.save_record(
        make_record("done-old", minutes_ago=20, processed_url="https://cdn.test/1"),
    )
    sqlite_catalog.save_record(
        make_record("done-new", owner_id="user-2", processed_url="https://cdn.test/2"),
    )

    ids = [r.video_id for r in sqlite_catalog.list_processed()]

    assert ids == ["done-new", "done-old"]


@pytest.mark.unit
def test_list_limit(sqlite_catalog, make_record):
    for i in range(5):
        sqlite_catalog.save_record(make_record(f"v{i}", minutes_ago=i))

    ids = [r.video_id for r in sqlite_catalog.list_by_owner("user-1", limit=2)]

    assert ids == ["v0", "v1"]


@pytest.mark.unit
def test_records_survive_reopen(tmp_path, make_record):
    catalog = SQLiteCatalog(tmp_path)
    catalog.save_record(make_record("v1"))
    catalog.cleanup()

    reopened = SQLiteCatalog(tmp_path)
    assert reopened.get_record("v1") is not None
    reopened.cleanup()
