"""
Models Package

Feed and viewport data structures.
"""

from playback.models.feed_entry import FeedEntry
from playback.models.playback_decision import PlaybackDecision, PlayerCommand
from playback.models.viewport import EntryLayout, Viewport, ViewportState

__all__ = [
    "EntryLayout",
    "FeedEntry",
    "PlaybackDecision",
    "PlayerCommand",
    "Viewport",
    "ViewportState",
]
