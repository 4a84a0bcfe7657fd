"""
Playback Module

Viewport-driven playback scheduling: at most one feed entry plays at a time.

Architecture mirrors the upload module:
- interfaces/: PlayerInterface (the external decoder collaborator)
- implementations/: MockPlayer
- controllers/: PlaybackScheduler, FeedController
- models/: FeedEntry, Viewport, PlaybackDecision
- utils/: Visibility calculation

Usage:
    from playback import FeedController, MockPlayer, Viewport

    feed = FeedController(catalog, player_factory=MockPlayer.for_record)
    feed.load_community_feed()
    feed.on_scroll_settled(Viewport(offset=0.0, height=1.0))
"""

from playback.constants import PlaybackCommand
from playback.controllers.feed_controller import FeedController
from playback.controllers.playback_scheduler import PlaybackScheduler
from playback.implementations.mock_player import MockPlayer
from playback.interfaces.player_interface import PlayerError, PlayerInterface
from playback.models.feed_entry import FeedEntry
from playback.models.playback_decision import PlaybackDecision, PlayerCommand
from playback.models.viewport import EntryLayout, Viewport, ViewportState

__all__ = [
    "EntryLayout",
    "FeedController",
    "FeedEntry",
    "MockPlayer",
    "PlaybackCommand",
    "PlaybackDecision",
    "PlaybackScheduler",
    "PlayerCommand",
    "PlayerError",
    "PlayerInterface",
    "Viewport",
    "ViewportState",
]
