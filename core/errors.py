"""
Error Taxonomy

Typed exceptions shared by the upload, catalog, processing and playback
packages. Every error carries a FailureReason so controllers can turn it
into a status code without string matching.
"""

from enum import Enum
from typing import Optional


class FailureReason(Enum):
    """Why an operation (or an upload session) failed"""

    INVALID_ASSET_TYPE = "invalid_asset_type"
    ASSET_NOT_FOUND = "asset_not_found"
    SESSION_BUSY = "session_busy"
    INVALID_STATE = "invalid_state"
    TRANSFER_ERROR = "transfer_error"
    FINALIZE_ERROR = "finalize_error"
    CANCELLED = "cancelled"
    AUTH_ERROR = "auth_error"
    CATALOG_ERROR = "catalog_error"
    SCHEDULER_INVARIANT = "scheduler_invariant"


class VideoAppError(Exception):
    """Base class for all application errors"""

    reason = FailureReason.TRANSFER_ERROR

    def __init__(self, message: str, reason: Optional[FailureReason] = None):
        super().__init__(message)
        if reason is not None:
            self.reason = reason


# =============================================================================
# ASSET VALIDATION
# =============================================================================


class AssetValidationError(VideoAppError):
    """Candidate asset cannot be uploaded (user-correctable)"""


class InvalidAssetType(AssetValidationError):
    reason = FailureReason.INVALID_ASSET_TYPE


class AssetNotFound(AssetValidationError):
    reason = FailureReason.ASSET_NOT_FOUND


# =============================================================================
# SESSION LIFECYCLE
# =============================================================================


class SessionBusy(VideoAppError):
    """Coordinator already owns an in-flight session"""

    reason = FailureReason.SESSION_BUSY


class InvalidSessionState(VideoAppError):
    """Operation is not allowed in the session's current state"""

    reason = FailureReason.INVALID_STATE


class TransferError(VideoAppError):
    """
    Network or storage failure while transferring the object.

    Attributes:
        status_code: HTTP status from the transfer endpoint (None for
            transport-level errors such as connection resets)
        body: Response body, verbatim
    """

    reason = FailureReason.TRANSFER_ERROR

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class UploadCancelled(VideoAppError):
    reason = FailureReason.CANCELLED


class FinalizeError(VideoAppError):
    """Metadata write failed after a successful transfer"""

    reason = FailureReason.FINALIZE_ERROR


class AuthError(VideoAppError):
    """
    Missing or expired credential. Surfaced for re-authentication.

    Attributes:
        status_code: HTTP status when an endpoint rejected the token
            (None for local credential failures)
        body: Response body, verbatim
    """

    reason = FailureReason.AUTH_ERROR

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


# =============================================================================
# CATALOG / PLAYBACK
# =============================================================================


class CatalogError(VideoAppError):
    """Metadata store or catalog query failed"""

    reason = FailureReason.CATALOG_ERROR


class SchedulerInvariantViolation(VideoAppError):
    """
    More than one feed entry claimed the decoder.

    Only raised inside PlaybackScheduler and handled there; should never
    happen in correct operation.
    """

    reason = FailureReason.SCHEDULER_INVARIANT
