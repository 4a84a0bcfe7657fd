"""
Catalog Module Enums

Type definitions for the catalog module.
Configuration values live in config/settings.py.
"""

from enum import Enum

# =============================================================================
# ENUMS
# =============================================================================


class VideoStatus(Enum):
    """Lifecycle of a persisted video record"""

    UPLOADED = "uploaded"  # Written by finalize(), original only
    PROCESSING = "processing"  # Picked up by the processing pipeline
    PROCESSED = "processed"  # processed_url available
    FAILED = "failed"  # Pipeline gave up


class CatalogMode(Enum):
    """Which slice of the catalog a feed shows"""

    COMMUNITY = "community"  # Every record with a processed_url
    PROFILE = "profile"  # Records of a single owner
