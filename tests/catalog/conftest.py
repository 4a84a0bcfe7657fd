"""
Catalog Test Configuration and Fixtures

This file contains pytest fixtures shared across catalog tests.

To use pytest:
    pip install -e ".[test]"
    pytest tests/catalog/
"""

from datetime import datetime, timedelta, timezone

import pytest

from catalog.constants import VideoStatus
from catalog.implementations.mock_catalog import MockCatalog
from catalog.implementations.sqlite_catalog import SQLiteCatalog
from catalog.models.video_record import VideoRecord

# =============================================================================
# CATALOG FIXTURES
# =============================================================================


@pytest.fixture
def sqlite_catalog(tmp_path):
    """
    Provide a SQLiteCatalog in a temporary directory.

    Usage:
        def test_save(sqlite_catalog):
            sqlite_catalog.save_record(record)
    """
    catalog = SQLiteCatalog(tmp_path)
    yield catalog
    catalog.cleanup()


@pytest.fixture
def mock_catalog_with_records():
    """
    Provide MockCatalog with a mix of processed and unprocessed records.

    - user-1: a (processed, newest), c (unprocessed)
    - user-2: b (processed, oldest)
    """
    catalog = MockCatalog()
    catalog.add_fake_record("a", owner_id="user-1", processed=True, age_minutes=1)
    catalog.add_fake_record("b", owner_id="user-2", processed=True, age_minutes=30)
    catalog.add_fake_record("c", owner_id="user-1", processed=False, age_minutes=10)
    return catalog


@pytest.fixture
def make_record():
    """
    Factory for VideoRecords with controllable age.

    Usage:
        record = make_record("v1", minutes_ago=5)
    """
    base = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

    def _make(
        video_id,
        owner_id="user-1",
        minutes_ago=0,
        processed_url=None,
    ):
        return VideoRecord(
            video_id=video_id,
            owner_id=owner_id,
            original_url=f"https://storage.test/{video_id}",
            filename=f"{video_id}.mp4",
            status=VideoStatus.PROCESSED if processed_url else VideoStatus.UPLOADED,
            processed_url=processed_url,
            created_at=base - timedelta(minutes=minutes_ago),
        )

    return _make
