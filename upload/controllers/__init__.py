"""
Controllers Package

Upload session coordination.
"""

from upload.controllers.upload_controller import UploadController
from upload.controllers.upload_coordinator import UploadCoordinator
from upload.controllers.upload_task import UploadTask

__all__ = [
    "UploadController",
    "UploadCoordinator",
    "UploadTask",
]
