"""
Interfaces Package

Abstract interface for the decoder collaborator.
"""

from playback.interfaces.player_interface import PlayerError, PlayerInterface

__all__ = [
    "PlayerError",
    "PlayerInterface",
]
