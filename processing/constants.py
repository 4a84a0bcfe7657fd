"""
Processing Constants

Type definitions for the processing module.
Tunable values live in config/settings.py.
"""

from enum import Enum


class ProcessingStatus(Enum):
    """Outcome of a processing request (accept/reject only, no job tracking)"""

    ACCEPTED = "accepted"
    REJECTED = "rejected"
    NETWORK_ERROR = "network_error"
    DISABLED = "disabled"
