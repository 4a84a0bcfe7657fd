"""
Viewport Models

Geometry along the scroll axis, and the scheduler's view of the screen.
"""

from dataclasses import dataclass, field
from typing import Dict


@dataclass(frozen=True)
class Viewport:
    """Visible window: [offset, offset + height)"""

    offset: float
    height: float


@dataclass(frozen=True)
class EntryLayout:
    """Position of one feed entry along the scroll axis"""

    index: int
    offset: float
    length: float


@dataclass
class ViewportState:
    """
    Focus flag plus the most recent visibility report.

    Lives for the lifetime of the feed screen.
    """

    focus: bool = True
    report: Dict[int, float] = field(default_factory=dict)
