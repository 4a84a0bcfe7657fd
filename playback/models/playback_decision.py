"""
Playback Decision Model

What one scheduler run decided, in the order commands were delivered.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from playback.constants import PlaybackCommand


@dataclass(frozen=True)
class PlayerCommand:
    index: int
    video_id: str
    command: PlaybackCommand


@dataclass
class PlaybackDecision:
    """
    Result of apply_visibility / set_focus / set_entries / recompute.

    Attributes:
        designated_index: Entry chosen as playback candidate (None = nothing)
        active_index: Entry actually playing (None when unfocused)
        commands: Play/pause instructions in delivery order
    """

    designated_index: Optional[int] = None
    active_index: Optional[int] = None
    commands: List[PlayerCommand] = field(default_factory=list)

    def commands_for(self, index: int) -> List[PlaybackCommand]:
        """Commands delivered to one entry (test/debug helper)"""
        return [c.command for c in self.commands if c.index == index]
