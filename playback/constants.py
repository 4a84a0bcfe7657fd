"""
Playback Constants

Type definitions for the playback module.
Tunable values (visibility threshold, looping) live in config/settings.py.
"""

from enum import Enum


class PlaybackCommand(Enum):
    """Instruction delivered to a feed entry's player"""

    PLAY = "play"
    PAUSE = "pause"
