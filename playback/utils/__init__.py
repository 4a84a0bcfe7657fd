"""
Utils Package

Pure helpers for the playback module.
"""

from playback.utils.visibility import (
    build_visibility_report,
    compute_visible_fractions,
    paged_layouts,
)

__all__ = [
    "build_visibility_report",
    "compute_visible_fractions",
    "paged_layouts",
]
