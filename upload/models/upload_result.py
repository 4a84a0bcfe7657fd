"""
Upload Result Model

Summary of one UploadController.upload_video() call.
"""

from dataclasses import dataclass
from typing import Optional

from catalog.models.video_record import VideoRecord
from upload.constants import UploadStatus


@dataclass
class UploadResult:
    """
    Result of an upload operation.

    Attributes:
        success: True if the record was persisted
        status: Upload status code
        video_id: Derived identifier (set once derivation happened)
        download_url: Remote object URL (set once the transfer succeeded)
        record: Persisted VideoRecord (if successful)
        error_message: Error description (if failed)
        upload_duration: Time taken in seconds
        file_size: Size of the uploaded file in bytes
        processing_requested: True if a processing job was accepted
    """

    success: bool
    status: UploadStatus = UploadStatus.SUCCESS
    video_id: Optional[str] = None
    download_url: Optional[str] = None
    record: Optional[VideoRecord] = None
    error_message: Optional[str] = None
    upload_duration: float = 0.0
    file_size: int = 0
    processing_requested: bool = False
