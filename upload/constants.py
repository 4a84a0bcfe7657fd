"""
Upload Constants

Type definitions for the upload module.
Tunable values live in config/settings.py.
"""

from enum import Enum

# =============================================================================
# SESSION STATE MACHINE
# =============================================================================


class SessionStatus(Enum):
    """Upload session states"""

    IDLE = "idle"  # Asset selected (or nothing yet)
    VERIFYING = "verifying"  # Re-checking the asset before transfer
    TRANSFERRING = "transferring"  # Bytes in flight
    FINALIZING = "finalizing"  # Transfer done, metadata not yet written
    COMPLETED = "completed"  # Record persisted
    FAILED = "failed"  # Terminal failure (see session.error)


# States that own the coordinator (no second session may start)
IN_FLIGHT_STATES = frozenset(
    {
        SessionStatus.VERIFYING,
        SessionStatus.TRANSFERRING,
        SessionStatus.FINALIZING,
    },
)

TERMINAL_STATES = frozenset({SessionStatus.COMPLETED, SessionStatus.FAILED})

# Forward-only transitions; FAILED is reachable from every in-flight state
ALLOWED_TRANSITIONS = {
    SessionStatus.IDLE: {SessionStatus.VERIFYING},
    SessionStatus.VERIFYING: {SessionStatus.TRANSFERRING, SessionStatus.FAILED},
    SessionStatus.TRANSFERRING: {SessionStatus.FINALIZING, SessionStatus.FAILED},
    SessionStatus.FINALIZING: {SessionStatus.COMPLETED, SessionStatus.FAILED},
    SessionStatus.COMPLETED: set(),
    SessionStatus.FAILED: set(),
}

# =============================================================================
# UPLOAD RESULT STATUS
# =============================================================================


class UploadStatus(Enum):
    """Upload operation status codes reported by UploadController"""

    SUCCESS = "success"
    FAILED = "failed"
    AUTH_ERROR = "auth_error"
    NETWORK_ERROR = "network_error"
    INVALID_FILE = "invalid_file"
    CANCELLED = "cancelled"
    FINALIZE_ERROR = "finalize_error"
    BUSY = "busy"
    TIMEOUT = "timeout"
