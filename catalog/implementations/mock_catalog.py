"""
Mock Catalog Implementation

In-memory catalog for testing without a database.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from catalog.constants import VideoStatus
from catalog.interfaces.catalog_interface import CatalogError, CatalogInterface
from catalog.models.video_record import VideoRecord


class MockCatalog(CatalogInterface):
    """
    Mock catalog for testing.

    Keeps records in a dict and can simulate write failures, which is how
    tests exercise the FinalizeError path.
    """

    def __init__(self, fail_writes: bool = False):
        """
        Initialize mock catalog.

        Args:
            fail_writes: If True, save_record() raises CatalogError
        """
        self.logger = logging.getLogger(__name__)
        self.fail_writes = fail_writes

        self._records: Dict[str, VideoRecord] = {}

        # Track operations for test verification
        self.operation_log: List[str] = []

        self.logger.info("[MOCK] Catalog initialized (simulation mode)")

    def _log_operation(self, operation: str) -> None:
        self.operation_log.append(operation)
        self.logger.debug(f"[MOCK] {operation}")

    def save_record(self, record: VideoRecord) -> VideoRecord:
        self._log_operation(f"save_record: {record.video_id}")

        if self.fail_writes:
            raise CatalogError("Simulated metadata write failure")

        self._records[record.video_id] = record
        return record

    def update_processing_result(
        self,
        video_id: str,
        status: VideoStatus,
        processed_url: Optional[str] = None,
    ) -> VideoRecord:
        self._log_operation(f"update_processing_result: {video_id}")

        record = self._records.get(video_id)
        if record is None:
            raise CatalogError(f"Video not found: {video_id}")

        record.status = status
        if processed_url is not None:
            record.processed_url = processed_url
        return record

    def get_record(self, video_id: str) -> Optional[VideoRecord]:
        return self._records.get(video_id)

    def list_by_owner(
        self,
        owner_id: str,
        limit: Optional[int] = None,
    ) -> List[VideoRecord]:
        records = [r for r in self._records.values() if r.owner_id == owner_id]
        return self._newest_first(records, limit)

    def list_processed(self, limit: Optional[int] = None) -> List[VideoRecord]:
        records = [r for r in self._records.values() if r.is_processed]
        return self._newest_first(records, limit)

    @staticmethod
    def _newest_first(
        records: List[VideoRecord],
        limit: Optional[int],
    ) -> List[VideoRecord]:
        ordered = sorted(records, key=lambda r: r.created_at, reverse=True)
        return ordered[:limit] if limit else ordered

    def cleanup(self) -> None:
        self._log_operation("cleanup")

    # =========================================================================
    # TESTING HELPER METHODS
    # =========================================================================

    def add_fake_record(
        self,
        video_id: str,
        owner_id: str = "user-1",
        processed: bool = True,
        age_minutes: int = 0,
    ) -> VideoRecord:
        """
        Add a record directly (bypasses fail_writes).

        Args:
            video_id: Record key
            owner_id: Owner of the record
            processed: If True, record gets a processed_url
            age_minutes: How long ago the record was created

        Returns:
            The stored record
        """
        record = VideoRecord(
            video_id=video_id,
            owner_id=owner_id,
            original_url=f"https://storage.example/{video_id}/original.mp4",
            processed_url=(
                f"https://storage.example/{video_id}/processed.mp4"
                if processed
                else None
            ),
            filename=f"{video_id}.mp4",
            status=VideoStatus.PROCESSED if processed else VideoStatus.UPLOADED,
            created_at=datetime.now(timezone.utc) - timedelta(minutes=age_minutes),
        )
        self._records[video_id] = record
        return record

    def remove_record(self, video_id: str) -> None:
        """Drop a record, simulating deletion by another client"""
        self._records.pop(video_id, None)

    def get_record_count(self) -> int:
        return len(self._records)
