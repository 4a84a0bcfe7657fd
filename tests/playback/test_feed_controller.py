"""
Feed Controller Tests

Tests for loading feeds from the catalog and hosting the scheduler:
- Community feed shows processed videos only, newest first
- Profile feed shows one user's videos
- Refresh reuses players and releases vanished ones
- Catalog and player failures are contained

To run these tests:
    pytest tests/playback/test_feed_controller.py -v
"""

from unittest.mock import MagicMock

import pytest

from catalog.constants import CatalogMode
from catalog.interfaces.catalog_interface import CatalogError
from playback.constants import PlaybackCommand
from playback.controllers.feed_controller import FeedController
from playback.implementations.mock_player import MockPlayer
from playback.models.viewport import Viewport


@pytest.fixture
def feed(feed_catalog):
    """FeedController over feed_catalog with 800-unit pages"""
    return FeedController(
        feed_catalog,
        player_factory=MockPlayer.for_record,
        item_length=800,
    )


def _ids(entries):
    return [e.video_id for e in entries]


# =============================================================================
# LOADING TESTS
# =============================================================================


@pytest.mark.unit
def test_community_feed_lists_processed_newest_first(feed):
    entries = feed.load_community_feed()

    assert _ids(entries) == ["p0", "p1", "p2"]
    assert [e.index for e in entries] == [0, 1, 2]
    assert all(isinstance(e.player, MockPlayer) for e in entries)
    assert feed.mode == CatalogMode.COMMUNITY


@pytest.mark.unit
def test_profile_feed_lists_owner_videos(feed):
    entries = feed.load_profile_feed("user-1")

    assert _ids(entries) == ["p0", "p2", "raw"]
    # Unprocessed videos play their original upload
    assert entries[2].player.url.endswith("/raw/original.mp4")
    assert feed.owner_id == "user-1"


@pytest.mark.unit
def test_page_limit(feed_catalog):
    feed = FeedController(
        feed_catalog,
        player_factory=MockPlayer.for_record,
        page_limit=2,
    )

    assert _ids(feed.load_community_feed()) == ["p0", "p1"]


@pytest.mark.unit
def test_refresh_before_load_is_noop(feed):
    assert feed.refresh() == []


# =============================================================================
# PLAYBACK TESTS
# =============================================================================


@pytest.mark.unit
def test_scroll_settled_plays_visible_entry(feed):
    entries = feed.load_community_feed()

    feed.on_scroll_settled(Viewport(offset=0, height=800))
    assert feed.active_entry is entries[0]

    decision = feed.on_scroll_settled(Viewport(offset=700, height=800))

    assert feed.active_entry is entries[1]
    assert decision.commands_for(0) == [PlaybackCommand.PAUSE]
    assert not entries[0].player.is_playing
    assert entries[1].player.is_playing


@pytest.mark.unit
def test_visibility_report_and_focus(feed):
    entries = feed.load_community_feed()
    feed.on_visibility_report({2: 1.0})

    feed.set_focus(False)
    assert feed.active_entry is None
    assert not entries[2].player.is_playing

    feed.set_focus(True)
    assert feed.active_entry is entries[2]


# =============================================================================
# REFRESH TESTS
# =============================================================================


@pytest.mark.unit
def test_refresh_keeps_players_and_owner(feed, feed_catalog):
    entries = feed.load_community_feed()
    feed.on_visibility_report({1: 1.0})
    playing = entries[1].player
    playing.clear_history()

    feed_catalog.add_fake_record("old", owner_id="user-3", age_minutes=10)
    refreshed = feed.refresh()

    assert _ids(refreshed) == ["p0", "p1", "p2", "old"]
    assert refreshed[1].player is playing
    assert refreshed[1].index == 1
    assert feed.active_entry is refreshed[1]
    assert "pause" not in playing.history
    assert playing.is_playing


@pytest.mark.unit
def test_refresh_inserting_at_top_plays_what_is_on_screen(feed, feed_catalog):
    entries = feed.load_community_feed()
    feed.on_scroll_settled(Viewport(offset=0, height=800))
    previous = entries[0].player

    feed_catalog.add_fake_record("new", owner_id="user-3", age_minutes=0)
    refreshed = feed.refresh()

    assert _ids(refreshed) == ["new", "p0", "p1", "p2"]
    assert refreshed[1].player is previous
    assert feed.active_entry is refreshed[0]
    assert refreshed[0].player.is_playing
    assert not previous.is_playing
    assert not previous.released


@pytest.mark.unit
def test_refresh_removing_playing_entry(feed, feed_catalog):
    """Removed owner is paused first, then its player is released"""
    entries = feed.load_community_feed()
    feed.on_visibility_report({0: 1.0})
    removed_player = entries[0].player

    feed_catalog.remove_record("p0")
    refreshed = feed.refresh()

    assert _ids(refreshed) == ["p1", "p2"]
    assert removed_player.history[-3:] == ["play", "pause", "release"]
    assert removed_player.released
    # p1 slid into the visible slot
    assert feed.active_entry is refreshed[0]
    assert refreshed[0].player.is_playing


@pytest.mark.unit
def test_catalog_error_keeps_current_entries(feed_catalog):
    catalog = MagicMock(wraps=feed_catalog)
    feed = FeedController(catalog, player_factory=MockPlayer.for_record)
    entries = feed.load_community_feed()

    catalog.list_processed.side_effect = CatalogError("database is locked")

    assert _ids(feed.refresh()) == _ids(entries)
    assert feed.entries[0].player is entries[0].player


@pytest.mark.unit
def test_player_factory_failure_gives_entry_without_player(feed_catalog):
    def flaky_factory(record):
        if record.video_id == "p1":
            raise RuntimeError("decoder unavailable")
        return MockPlayer.for_record(record)

    feed = FeedController(feed_catalog, player_factory=flaky_factory)
    entries = feed.load_community_feed()

    assert len(entries) == 3
    assert entries[1].player is None
    assert entries[0].player is not None


# =============================================================================
# RELEASE TESTS
# =============================================================================


@pytest.mark.unit
def test_release_frees_every_player(feed):
    entries = feed.load_community_feed()
    feed.on_visibility_report({0: 1.0})

    feed.release()

    assert feed.entries == []
    assert feed.active_entry is None
    assert all(e.player.released for e in entries)
    assert entries[0].player.history[-2:] == ["pause", "release"]


@pytest.mark.unit
def test_get_status(feed):
    feed.load_profile_feed("user-2")
    feed.on_visibility_report({0: 0.9})

    status = feed.get_status()

    assert status["mode"] == "profile"
    assert status["owner_id"] == "user-2"
    assert status["entries"] == 1
    assert status["scheduler"]["active_index"] == 0
