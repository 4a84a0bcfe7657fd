"""
Feed Entry Model

A VideoRecord plus the ephemeral UI state the scheduler needs.
"""

from dataclasses import dataclass
from typing import Optional

from catalog.models.video_record import VideoRecord
from playback.interfaces.player_interface import PlayerInterface


@dataclass
class FeedEntry:
    """
    One row of the feed.

    Recreated whenever the catalog list refreshes; never persisted.
    Only PlaybackScheduler writes visible_fraction and is_active.
    """

    record: VideoRecord
    index: int = 0
    visible_fraction: float = 0.0
    is_active: bool = False
    player: Optional[PlayerInterface] = None

    @property
    def video_id(self) -> str:
        return self.record.video_id

    def __repr__(self) -> str:
        return (
            f"FeedEntry(index={self.index}, video_id='{self.video_id}', "
            f"visible={self.visible_fraction:.2f}, active={self.is_active})"
        )
