"""
Models Package

Upload data structures.
"""

from upload.models.media_asset import MediaAsset
from upload.models.upload_result import UploadResult
from upload.models.upload_session import ProgressSnapshot, UploadOutcome, UploadSession

__all__ = [
    "MediaAsset",
    "ProgressSnapshot",
    "UploadOutcome",
    "UploadResult",
    "UploadSession",
]
