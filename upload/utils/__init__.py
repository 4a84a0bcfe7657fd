"""
Utils Package

Pure helpers for the upload module.
"""

from upload.utils.identifier import basename, derive_video_id, safe_basename

__all__ = [
    "basename",
    "derive_video_id",
    "safe_basename",
]
