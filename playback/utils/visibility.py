"""
Visibility Calculation

Pure functions turning scroll geometry into a visibility report
({index: visible_fraction}) for PlaybackScheduler.
"""

from typing import Dict, Iterable, List

from playback.models.viewport import EntryLayout, Viewport


def compute_visible_fractions(
    viewport: Viewport,
    layouts: Iterable[EntryLayout],
) -> Dict[int, float]:
    """
    Fraction of each entry's length inside the viewport.

    Args:
        viewport: Visible window [offset, offset + height)
        layouts: Entry positions along the same axis

    Returns:
        {index: fraction in [0, 1]} for every layout (zero-length
        entries report 0.0)
    """
    top = viewport.offset
    bottom = top + max(viewport.height, 0.0)

    fractions = {}
    for layout in layouts:
        if layout.length <= 0:
            fractions[layout.index] = 0.0
            continue

        overlap = min(bottom, layout.offset + layout.length) - max(top, layout.offset)
        fractions[layout.index] = min(1.0, max(0.0, overlap) / layout.length)

    return fractions


def paged_layouts(count: int, item_length: float) -> List[EntryLayout]:
    """
    Layouts for a full-screen paged feed (one entry per screen).

    Example:
        paged_layouts(3, 800)
        # [EntryLayout(0, 0, 800), EntryLayout(1, 800, 800), EntryLayout(2, 1600, 800)]
    """
    return [
        EntryLayout(index=i, offset=i * item_length, length=item_length)
        for i in range(max(count, 0))
    ]


def build_visibility_report(
    viewport: Viewport,
    layouts: Iterable[EntryLayout],
) -> Dict[int, float]:
    """Visible fractions with zero entries dropped"""
    return {
        index: fraction
        for index, fraction in compute_visible_fractions(viewport, layouts).items()
        if fraction > 0.0
    }
