"""
Video Record Model

The persisted metadata document for an uploaded video.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from catalog.constants import VideoStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class VideoRecord:
    """
    Metadata document keyed by video_id.

    Written once by UploadCoordinator.finalize(). processed_url and status
    transitions past UPLOADED belong to the processing pipeline.
    """

    video_id: str  # Derived identifier, also the remote object name
    owner_id: str
    original_url: str  # Download URL of the uploaded original
    filename: str  # Display name of the source asset
    status: VideoStatus = VideoStatus.UPLOADED
    processed_url: Optional[str] = None
    created_at: datetime = field(default_factory=_utcnow)

    @property
    def is_processed(self) -> bool:
        return self.processed_url is not None

    @property
    def playback_url(self) -> str:
        """Processed version when available, original otherwise"""
        return self.processed_url or self.original_url

    def to_dict(self) -> dict:
        """Convert to the document shape used by the metadata store"""
        return {
            "videoId": self.video_id,
            "ownerId": self.owner_id,
            "originalUrl": self.original_url,
            "processedUrl": self.processed_url,
            "filename": self.filename,
            "status": self.status.value,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "VideoRecord":
        """Create VideoRecord from a stored document"""
        created_at = datetime.fromisoformat(data["createdAt"])
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)

        return cls(
            video_id=data["videoId"],
            owner_id=data["ownerId"],
            original_url=data["originalUrl"],
            processed_url=data.get("processedUrl"),
            filename=data["filename"],
            status=VideoStatus(data.get("status", VideoStatus.UPLOADED.value)),
            created_at=created_at,
        )

    def __repr__(self) -> str:
        return (
            f"VideoRecord(video_id='{self.video_id}', "
            f"owner='{self.owner_id}', status={self.status.value})"
        )
