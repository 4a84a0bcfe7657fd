"""
Core utilities and shared types.

Public API:
    - Error taxonomy (VideoAppError and subclasses, FailureReason)
    - setup_logging: Root logger configuration

Usage:
    from core.errors import TransferError

    try:
        coordinator.finalize()
    except FinalizeError as e:
        print(f"Retry later: {e}")
"""

from core.errors import (
    AssetNotFound,
    AssetValidationError,
    AuthError,
    CatalogError,
    FailureReason,
    FinalizeError,
    InvalidAssetType,
    InvalidSessionState,
    SchedulerInvariantViolation,
    SessionBusy,
    TransferError,
    UploadCancelled,
    VideoAppError,
)
from core.logging_setup import setup_logging

__all__ = [
    "AssetNotFound",
    "AssetValidationError",
    "AuthError",
    "CatalogError",
    "FailureReason",
    "FinalizeError",
    "InvalidAssetType",
    "InvalidSessionState",
    "SchedulerInvariantViolation",
    "SessionBusy",
    "TransferError",
    "UploadCancelled",
    "VideoAppError",
    "setup_logging",
]
