"""
SQLite Catalog

Video metadata stored in a local SQLite database.
Single responsibility: Database operations only.
"""

import logging
import sqlite3
import threading
from pathlib import Path
from typing import List, Optional, Union

from catalog.constants import VideoStatus
from catalog.interfaces.catalog_interface import CatalogError, CatalogInterface
from catalog.models.video_record import VideoRecord
from config.settings import METADATA_DB_NAME


class SQLiteCatalog(CatalogInterface):
    """
    Catalog backed by a SQLite database file.

    Responsibilities:
    - Create and maintain database schema
    - Write-once records keyed by video_id (overwrite on retry)
    - Owner / processed queries sorted by creation time

    Thread Safety:
    - READ operations are non-blocking and concurrent
    - WRITE operations use threading.Lock (the coordinator may finalize
      from a transport thread while a feed reads on the main thread)
    """

    def __init__(self, storage_base: Path, db_name: str = METADATA_DB_NAME):
        """
        Initialize catalog.

        Args:
            storage_base: Base storage directory (database goes here)
            db_name: Database filename
        """
        self.logger = logging.getLogger(__name__)
        self.db_path = Path(storage_base) / db_name
        self._connection: Optional[sqlite3.Connection] = None
        self._write_lock = threading.Lock()

        self._initialize_db()

        self.logger.info(f"SQLite catalog initialized (db: {self.db_path})")

    def _initialize_db(self) -> None:
        """Create database and tables if they don't exist"""
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = self._get_connection()
            cursor = conn.cursor()

            cursor.execute(
                """
                CREATE TABLE IF NOT EXISTS videos (
                    video_id TEXT PRIMARY KEY,
                    owner_id TEXT NOT NULL,
                    original_url TEXT NOT NULL,
                    processed_url TEXT,
                    filename TEXT NOT NULL,
                    status TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
            """,
            )

            cursor.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_owner_created
                ON videos(owner_id, created_at)
            """,
            )

            cursor.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_created_at
                ON videos(created_at)
            """,
            )

            conn.commit()
            self.logger.debug("Database schema initialized")

        except (sqlite3.Error, OSError) as e:
            raise CatalogError(f"Failed to initialize database: {e}") from e

    def _get_connection(self) -> sqlite3.Connection:
        """Get database connection (reuses existing or creates new)"""
        if self._connection is None:
            try:
                # Shared between the main thread and transport threads;
                # writes are serialized by _write_lock
                self._connection = sqlite3.connect(
                    str(self.db_path),
                    check_same_thread=False,
                )
                self._connection.row_factory = sqlite3.Row
            except sqlite3.Error as e:
                raise CatalogError(f"Failed to connect to database: {e}") from e

        return self._connection

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> VideoRecord:
        return VideoRecord.from_dict(
            {
                "videoId": row["video_id"],
                "ownerId": row["owner_id"],
                "originalUrl": row["original_url"],
                "processedUrl": row["processed_url"],
                "filename": row["filename"],
                "status": row["status"],
                "createdAt": row["created_at"],
            },
        )

    def save_record(self, record: VideoRecord) -> VideoRecord:
        """
        Insert or overwrite a record.

        Thread-safe: Uses lock to prevent concurrent writes.
        """
        with self._write_lock:
            try:
                conn = self._get_connection()
                data = record.to_dict()

                conn.execute(
                    """
                    INSERT OR REPLACE INTO videos (
                        video_id, owner_id, original_url, processed_url,
                        filename, status, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                    (
                        data["videoId"],
                        data["ownerId"],
                        data["originalUrl"],
                        data["processedUrl"],
                        data["filename"],
                        data["status"],
                        data["createdAt"],
                    ),
                )
                conn.commit()

                self.logger.debug(f"Saved record: {record.video_id}")
                return record

            except sqlite3.Error as e:
                raise CatalogError(f"Failed to save record: {e}") from e

    def update_processing_result(
        self,
        video_id: str,
        status: VideoStatus,
        processed_url: Optional[str] = None,
    ) -> VideoRecord:
        """Record pipeline outcome (status and optional processed_url)"""
        with self._write_lock:
            try:
                conn = self._get_connection()
                cursor = conn.execute(
                    """
                    UPDATE videos SET
                        status = ?,
                        processed_url = COALESCE(?, processed_url)
                    WHERE video_id = ?
                """,
                    (status.value, processed_url, video_id),
                )
                conn.commit()

                if cursor.rowcount == 0:
                    raise CatalogError(f"Video not found: {video_id}")

            except sqlite3.Error as e:
                raise CatalogError(f"Failed to update record: {e}") from e

        self.logger.info(f"Processing result for {video_id}: {status.value}")
        return self.get_record(video_id)

    def get_record(self, video_id: str) -> Optional[VideoRecord]:
        try:
            conn = self._get_connection()
            row = conn.execute(
                "SELECT * FROM videos WHERE video_id = ?",
                (video_id,),
            ).fetchone()

            return self._row_to_record(row) if row else None

        except sqlite3.Error as e:
            raise CatalogError(f"Failed to get record: {e}") from e

    def list_by_owner(
        self,
        owner_id: str,
        limit: Optional[int] = None,
    ) -> List[VideoRecord]:
        return self._query("WHERE owner_id = ?", [owner_id], limit)

    def list_processed(self, limit: Optional[int] = None) -> List[VideoRecord]:
        return self._query("WHERE processed_url IS NOT NULL", [], limit)

    def _query(
        self,
        where: str,
        params: List[Union[str, int]],
        limit: Optional[int],
    ) -> List[VideoRecord]:
        """Run a filtered query, newest first"""
        # where clauses are internal constants; values always go through ?
        query = f"SELECT * FROM videos {where} ORDER BY created_at DESC"
        if limit:
            query += " LIMIT ?"
            params = [*params, limit]

        try:
            rows = self._get_connection().execute(query, params).fetchall()
            return [self._row_to_record(row) for row in rows]

        except sqlite3.Error as e:
            raise CatalogError(f"Failed to list records: {e}") from e

    def get_total_count(self) -> int:
        """Get total number of records in database"""
        try:
            row = self._get_connection().execute(
                "SELECT COUNT(*) as count FROM videos",
            ).fetchone()
            return row["count"] if row else 0

        except sqlite3.Error as e:
            raise CatalogError(f"Failed to get total count: {e}") from e

    def cleanup(self) -> None:
        """Close database connection"""
        if self._connection:
            try:
                self._connection.close()
                self._connection = None
                self.logger.debug("Database connection closed")
            except sqlite3.Error as e:
                self.logger.warning(f"Error closing database: {e}")

    def __del__(self):
        self.cleanup()
