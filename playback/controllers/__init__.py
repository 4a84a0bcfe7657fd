"""
Controllers Package

Playback scheduling and feed hosting.
"""

from playback.controllers.feed_controller import FeedController
from playback.controllers.playback_scheduler import PlaybackScheduler

__all__ = [
    "FeedController",
    "PlaybackScheduler",
]
