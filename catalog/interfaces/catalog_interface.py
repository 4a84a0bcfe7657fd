"""
Catalog Interface

Abstract interface for the metadata store and the catalog read contract.
UploadCoordinator writes through save_record(); feeds read through
list_by_owner() / list_processed(). Concrete stores (SQLite, in-memory)
live in catalog/implementations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from catalog.constants import VideoStatus
from catalog.models.video_record import VideoRecord
from core.errors import CatalogError

__all__ = ["CatalogError", "CatalogInterface"]


class CatalogInterface(ABC):
    """
    Abstract base class for video metadata storage.

    Any catalog implementation must provide these methods.
    This allows easy swapping between the SQLite store and the in-memory
    store used by tests.
    """

    # =========================================================================
    # WRITE CONTRACT
    # =========================================================================

    @abstractmethod
    def save_record(self, record: VideoRecord) -> VideoRecord:
        """
        Persist a video record keyed by record.video_id.

        Saving a record whose video_id already exists overwrites it, so a
        retried finalize with the same derivation inputs is idempotent.

        Args:
            record: Record to persist

        Returns:
            The stored record

        Raises:
            CatalogError: If the write fails
        """

    @abstractmethod
    def update_processing_result(
        self,
        video_id: str,
        status: VideoStatus,
        processed_url: Optional[str] = None,
    ) -> VideoRecord:
        """
        Record the outcome of the external processing pipeline.

        Only the pipeline calls this; the upload/playback core never does.

        Raises:
            CatalogError: If the record does not exist or the write fails
        """

    # =========================================================================
    # READ CONTRACT
    # =========================================================================

    @abstractmethod
    def get_record(self, video_id: str) -> Optional[VideoRecord]:
        """
        Retrieve a record by its video_id.

        Returns:
            VideoRecord or None if not found
        """

    @abstractmethod
    def list_by_owner(
        self,
        owner_id: str,
        limit: Optional[int] = None,
    ) -> List[VideoRecord]:
        """
        Records owned by owner_id, newest first (profile view).
        """

    @abstractmethod
    def list_processed(self, limit: Optional[int] = None) -> List[VideoRecord]:
        """
        Records that have a processed_url, newest first (community feed).
        """

    @abstractmethod
    def cleanup(self) -> None:
        """Release connections / resources"""
