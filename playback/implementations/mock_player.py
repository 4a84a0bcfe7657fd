"""
Mock Player Implementation

Simulated decoder for development and testing.
Logs commands instead of decoding video.

Perfect for:
- Scheduler unit tests (command history is inspectable)
- Running the feed without a media backend
"""

import logging
from typing import List

from catalog.models.video_record import VideoRecord
from config.settings import PLAYER_LOOP
from playback.interfaces.player_interface import PlayerError, PlayerInterface


class MockPlayer(PlayerInterface):
    """
    Mock player that records every command it receives.

    Usage:
        player = MockPlayer("https://cdn.example/clip.mp4")
        player.play()
        assert player.history == ["play"]

        # Player whose decoder fails
        player = MockPlayer(url, fail_on_play=True)
    """

    def __init__(
        self,
        url: str,
        loop: bool = PLAYER_LOOP,
        fail_on_play: bool = False,
    ):
        """
        Initialize mock player.

        Args:
            url: Media URL this player would decode
            loop: Restart at the end (feed videos loop forever)
            fail_on_play: play() raises PlayerError (tests error isolation)
        """
        self.logger = logging.getLogger(__name__)
        self.url = url
        self.loop = loop
        self.fail_on_play = fail_on_play

        self._playing = False
        self.released = False

        # Track commands for testing
        self.history: List[str] = []

    @classmethod
    def for_record(cls, record: VideoRecord) -> "MockPlayer":
        """Player factory for FeedController"""
        return cls(record.playback_url)

    def play(self) -> None:
        if self.released:
            raise PlayerError(f"Player for {self.url} already released")

        self.history.append("play")
        if self.fail_on_play:
            raise PlayerError(f"Simulated decoder failure for {self.url}")

        self._playing = True
        self.logger.debug(f"[MOCK PLAYER] Playing {self.url} (loop: {self.loop})")

    def pause(self) -> None:
        self.history.append("pause")
        self._playing = False
        self.logger.debug(f"[MOCK PLAYER] Paused {self.url}")

    def release(self) -> None:
        self.history.append("release")
        self._playing = False
        self.released = True
        self.logger.debug(f"[MOCK PLAYER] Released {self.url}")

    @property
    def is_playing(self) -> bool:
        return self._playing

    def clear_history(self) -> None:
        self.history.clear()
