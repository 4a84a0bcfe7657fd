"""
Upload Session Models

Data classes for a single upload attempt and the values it emits.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from catalog.models.video_record import VideoRecord
from config.settings import REMOTE_VIDEO_PREFIX
from core.errors import FailureReason, VideoAppError
from upload.constants import IN_FLIGHT_STATES, TERMINAL_STATES, SessionStatus
from upload.models.media_asset import MediaAsset


@dataclass
class UploadSession:
    """
    One attempt, from selection through terminal state, to upload an asset.

    Owned exclusively by one UploadCoordinator. Only the coordinator
    mutates it, always under its lock.
    """

    id: str
    asset: MediaAsset
    owner_id: str
    status: SessionStatus = SessionStatus.IDLE

    # Progress (both values only ever grow)
    bytes_sent: int = 0
    bytes_total: int = 0
    progress_percent: float = 0.0

    # Identifier derivation inputs and output
    timestamp_ms: Optional[int] = None
    video_id: Optional[str] = None

    # Results
    download_url: Optional[str] = None
    record: Optional[VideoRecord] = None
    error: Optional[VideoAppError] = None

    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    @property
    def is_in_flight(self) -> bool:
        return self.status in IN_FLIGHT_STATES

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATES

    @property
    def failure_reason(self) -> Optional[FailureReason]:
        return self.error.reason if self.error else None

    @property
    def remote_path(self) -> Optional[str]:
        if self.video_id is None:
            return None
        return f"{REMOTE_VIDEO_PREFIX}/{self.video_id}"

    def __repr__(self) -> str:
        return (
            f"UploadSession(id='{self.id}', "
            f"status={self.status.value}, "
            f"progress={self.progress_percent:.0f}%)"
        )


@dataclass(frozen=True)
class ProgressSnapshot:
    """Monotonic progress value observed for a session"""

    session_id: str
    bytes_sent: int
    bytes_total: int
    progress_percent: float


@dataclass(frozen=True)
class UploadOutcome:
    """
    Terminal result of an UploadTask.

    success=True means the transfer finished and the session is waiting in
    FINALIZING for finalize(). Otherwise error holds the typed failure.
    """

    session_id: str
    status: SessionStatus
    video_id: Optional[str] = None
    download_url: Optional[str] = None
    error: Optional[VideoAppError] = None

    @property
    def success(self) -> bool:
        return self.error is None and self.status == SessionStatus.FINALIZING
