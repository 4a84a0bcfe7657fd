"""
Player Interface

Abstract interface for the external decoder collaborator.
The scheduler decides; a player only executes play/pause.
"""

from abc import ABC, abstractmethod


class PlayerError(Exception):
    """Raised by a player that cannot execute a command"""


class PlayerInterface(ABC):
    """
    Abstract base class for video players.

    One player per feed entry. Only the designated entry's player is ever
    told to play.
    """

    @abstractmethod
    def play(self) -> None:
        """Start or resume playback"""

    @abstractmethod
    def pause(self) -> None:
        """Pause playback (must be safe to call when already paused)"""

    @abstractmethod
    def release(self) -> None:
        """Free decoder resources; the player is not used afterwards"""

    @property
    @abstractmethod
    def is_playing(self) -> bool:
        """True between play() and the next pause()/release()"""
