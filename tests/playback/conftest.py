"""
Playback Test Configuration and Fixtures

This file contains pytest fixtures shared across playback tests.

To use pytest:
    pip install -e ".[test]"
    pytest tests/playback/
"""

from datetime import datetime, timezone

import pytest

from catalog.implementations.mock_catalog import MockCatalog
from catalog.models.video_record import VideoRecord
from playback.controllers.playback_scheduler import PlaybackScheduler
from playback.implementations.mock_player import MockPlayer
from playback.models.feed_entry import FeedEntry


def make_record(video_id: str) -> VideoRecord:
    return VideoRecord(
        video_id=video_id,
        owner_id="user-1",
        original_url=f"https://storage.test/{video_id}",
        processed_url=f"https://cdn.test/{video_id}",
        filename=f"{video_id}.mp4",
        created_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
    )


# =============================================================================
# ENTRY FIXTURES
# =============================================================================


@pytest.fixture
def entry_factory():
    """
    Build FeedEntries with a MockPlayer each.

    Usage:
        def test_something(entry_factory):
            entries = entry_factory(3)            # v0, v1, v2
            entries = entry_factory(["x", "y"])   # explicit ids
    """

    def _factory(ids):
        if isinstance(ids, int):
            ids = [f"v{i}" for i in range(ids)]
        return [
            FeedEntry(
                record=make_record(video_id),
                index=i,
                player=MockPlayer(f"https://cdn.test/{video_id}"),
            )
            for i, video_id in enumerate(ids)
        ]

    return _factory


@pytest.fixture
def scheduler():
    """Scheduler with the default 0.5 threshold and focus on"""
    return PlaybackScheduler(threshold=0.5)


@pytest.fixture
def two_entries(scheduler, entry_factory):
    """Scheduler loaded with two entries"""
    entries = entry_factory(2)
    scheduler.set_entries(entries)
    for entry in entries:
        entry.player.clear_history()
    return entries


@pytest.fixture
def feed_catalog():
    """
    MockCatalog with processed videos p0 (newest) .. p2 and one
    unprocessed video owned by user-1.
    """
    catalog = MockCatalog()
    catalog.add_fake_record("p0", owner_id="user-1", age_minutes=1)
    catalog.add_fake_record("p1", owner_id="user-2", age_minutes=2)
    catalog.add_fake_record("p2", owner_id="user-1", age_minutes=3)
    catalog.add_fake_record("raw", owner_id="user-1", processed=False, age_minutes=4)
    return catalog
