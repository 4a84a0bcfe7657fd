"""
Implementations Package

Player implementations.
"""

from playback.implementations.mock_player import MockPlayer

__all__ = [
    "MockPlayer",
]
