"""
Upload Module

Turns a local video into a durably identified remote object plus a
catalog record, with progress reporting and cancellation.

Public API:
    - UploadCoordinator: Session state machine
    - UploadController: One-call upload flow with retry
    - UploadTask: Progress/outcome handle returned by begin_upload()
    - UploadResult / UploadStatus: Controller result and status codes
    - SessionStatus: Session states
    - create_coordinator / create_transport / create_credentials: Factories

Usage:
    from upload import UploadController

    controller = UploadController(owner_id="user-1")
    result = controller.upload_video("/path/to/clip.mp4")
"""

from upload.constants import SessionStatus, UploadStatus
from upload.controllers.upload_controller import UploadController
from upload.controllers.upload_coordinator import UploadCoordinator
from upload.controllers.upload_task import UploadTask
from upload.factory import (
    UploadFactory,
    create_coordinator,
    create_credentials,
    create_transport,
)
from upload.models.media_asset import MediaAsset
from upload.models.upload_result import UploadResult

# Public API
__all__ = [
    "MediaAsset",
    "SessionStatus",
    "UploadController",
    "UploadCoordinator",
    "UploadFactory",
    "UploadResult",
    "UploadStatus",
    "UploadTask",
    "create_coordinator",
    "create_credentials",
    "create_transport",
]
