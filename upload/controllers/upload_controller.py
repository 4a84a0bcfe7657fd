"""
Upload Controller

High-level one-call upload flow for scripts and host applications.

Flow:
    select → begin → wait for transfer → finalize → (optional) request processing

Typed errors from the coordinator are converted into an UploadResult so
callers get a retry affordance instead of a crash.
"""

import logging
import time
from typing import Any, Callable, Dict, Optional

from catalog.models.video_record import VideoRecord
from config.settings import DEFAULT_OWNER_ID, UPLOAD_TIMEOUT
from core.errors import (
    AuthError,
    FailureReason,
    FinalizeError,
    VideoAppError,
)
from processing.interfaces.processing_interface import ProcessingClientInterface
from processing.models.processing_request import ProcessingRequest
from upload.constants import UploadStatus
from upload.controllers.upload_coordinator import UploadCoordinator
from upload.factory import create_coordinator
from upload.models.media_asset import MediaAsset
from upload.models.upload_result import UploadResult
from upload.models.upload_session import ProgressSnapshot

ProgressCallback = Callable[[ProgressSnapshot], None]

# FailureReason → UploadStatus reported to callers
_STATUS_BY_REASON = {
    FailureReason.INVALID_ASSET_TYPE: UploadStatus.INVALID_FILE,
    FailureReason.ASSET_NOT_FOUND: UploadStatus.INVALID_FILE,
    FailureReason.SESSION_BUSY: UploadStatus.BUSY,
    FailureReason.TRANSFER_ERROR: UploadStatus.NETWORK_ERROR,
    FailureReason.FINALIZE_ERROR: UploadStatus.FINALIZE_ERROR,
    FailureReason.CANCELLED: UploadStatus.CANCELLED,
    FailureReason.AUTH_ERROR: UploadStatus.AUTH_ERROR,
}


class UploadController:
    """
    High-level video upload controller.

    This class:
    - Validates and uploads a local file through UploadCoordinator
    - Finalizes the catalog record
    - Optionally emits a processing request
    - Remembers the last failure so it can be retried

    Usage:
        controller = UploadController(owner_id="user-1")

        result = controller.upload_video("/path/to/clip.mp4")
        if result.success:
            print(f"Uploaded: {result.video_id}")
        elif result.status == UploadStatus.FINALIZE_ERROR:
            result = controller.retry_last()
    """

    def __init__(
        self,
        coordinator: Optional[UploadCoordinator] = None,
        processing_client: Optional[ProcessingClientInterface] = None,
        owner_id: Optional[str] = None,
        transfer_timeout: float = UPLOAD_TIMEOUT,
    ):
        """
        Initialize upload controller.

        Args:
            coordinator: UploadCoordinator, or None to auto-create from .env
            processing_client: Client for processing requests (optional)
            owner_id: Owner used when auto-creating the coordinator
            transfer_timeout: Max seconds without progress before cancelling

        Example:
            # Normal usage - auto-creates from .env
            controller = UploadController(owner_id="user-1")

            # Test doubles
            coordinator = UploadCoordinator(MockTransport(), MockCatalog(),
                                            StaticTokenProvider("t"), "user-1")
            controller = UploadController(coordinator=coordinator)
        """
        self.logger = logging.getLogger(__name__)

        self.coordinator = coordinator or create_coordinator(
            owner_id=owner_id or DEFAULT_OWNER_ID,
        )
        self.processing_client = processing_client
        self.transfer_timeout = transfer_timeout

        # Called with every progress snapshot of the running upload
        self.on_progress: Optional[ProgressCallback] = None

        # Retry bookkeeping
        self._last_asset: Optional[MediaAsset] = None
        self._last_timestamp_ms: Optional[int] = None
        self._last_result: Optional[UploadResult] = None
        self._last_processing: Optional[tuple] = None

        if not self.coordinator.transport.is_available():
            self.logger.warning(
                "Transport initialized but not available. "
                "Check storage configuration.",
            )

        self.logger.info("Upload Controller initialized")

    def upload_video(
        self,
        video_path: str,
        mime_type: str = "",
        request_processing: bool = False,
        prompt: str = "",
    ) -> UploadResult:
        """
        Upload a local video and persist its record.

        Args:
            video_path: Path (or file:// URI) of the video
            mime_type: MIME type (guessed from the extension if empty)
            request_processing: Emit a processing request after finalize
            prompt: Optional instruction forwarded to the processing service

        Returns:
            UploadResult with success status and details

        Example:
            result = controller.upload_video("clip.mp4", request_processing=True)
            if not result.success:
                logger.error(f"Upload failed: {result.error_message}")
        """
        asset = MediaAsset.from_path(video_path, mime_type=mime_type)
        self.logger.info(f"Uploading video: {asset.display_name}")
        self._last_processing = (request_processing, prompt)

        try:
            self.coordinator.select_asset(asset)
        except VideoAppError as e:
            return self._remember(asset, self._failure(e))

        return self._run(asset, None, request_processing, prompt)

    def retry_last(self) -> UploadResult:
        """
        Retry the last failed upload.

        After a FinalizeError the same derivation timestamp is replayed, so
        the identical video_id is written again (the remote object is
        overwritten). After any other failure a fresh identifier is derived.

        Returns:
            UploadResult of the retry
        """
        last = self._last_result
        if last is None or last.success or self._last_asset is None:
            self.logger.warning("Nothing to retry")
            return UploadResult(
                success=False,
                status=UploadStatus.FAILED,
                error_message="No failed upload to retry",
            )

        replay = (
            self._last_timestamp_ms
            if last.status == UploadStatus.FINALIZE_ERROR
            else None
        )

        self.logger.info(
            f"Retrying upload of {self._last_asset.display_name} "
            f"({'same id' if replay is not None else 'fresh id'})",
        )

        request_processing, prompt = self._last_processing or (False, "")
        return self._run(self._last_asset, replay, request_processing, prompt)

    # =========================================================================
    # STATUS
    # =========================================================================

    def test_connection(self) -> bool:
        """
        Check that the transport is configured and a token is available.

        Returns:
            True if an upload could start now
        """
        self.logger.info("Testing upload readiness...")

        ready = (
            self.coordinator.transport.is_available()
            and self.coordinator.credentials.is_authenticated()
        )

        if ready:
            self.logger.info("✅ Connection test passed")
        else:
            self.logger.warning("❌ Connection test failed")

        return ready

    def is_ready(self) -> bool:
        return self.coordinator.transport.is_available()

    def get_status(self) -> Dict[str, Any]:
        """
        Get current controller status.

        Returns:
            Dictionary with status information
        """
        last = self._last_result
        return {
            "ready": self.is_ready(),
            "transport_type": type(self.coordinator.transport).__name__,
            "processing_enabled": self.processing_client is not None,
            "session": self.coordinator.get_status(),
            "last_status": last.status.value if last else None,
            "can_retry": bool(last and not last.success),
        }

    def cleanup(self) -> None:
        """Cancel any running transfer"""
        if self.coordinator.cancel():
            self.logger.info("Cancelled running upload during cleanup")
        self.logger.info("Upload Controller cleanup")

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _run(
        self,
        asset: MediaAsset,
        timestamp_ms: Optional[int],
        request_processing: bool,
        prompt: str,
    ) -> UploadResult:
        start_time = time.time()

        try:
            task = self.coordinator.begin_upload(asset, timestamp_ms=timestamp_ms)
        except VideoAppError as e:
            return self._remember(asset, self._failure(e))

        session = self.coordinator.session
        self._last_timestamp_ms = session.timestamp_ms if session else timestamp_ms

        try:
            for snapshot in task.snapshots(timeout=self.transfer_timeout):
                self._report_progress(snapshot)
        except TimeoutError:
            task.cancel()
            result = UploadResult(
                success=False,
                status=UploadStatus.TIMEOUT,
                video_id=session.video_id if session else None,
                error_message=f"No progress for {self.transfer_timeout}s",
            )
            self.logger.error(f"❌ Upload timed out: {asset.display_name}")
            return self._remember(asset, result)

        outcome = task.wait()
        if not outcome.success:
            result = self._failure(outcome.error, video_id=outcome.video_id)
            return self._remember(asset, result)

        try:
            record = self.coordinator.finalize()
        except FinalizeError as e:
            result = self._failure(
                e,
                video_id=outcome.video_id,
                download_url=outcome.download_url,
            )
            return self._remember(asset, result)

        result = UploadResult(
            success=True,
            status=UploadStatus.SUCCESS,
            video_id=record.video_id,
            download_url=record.original_url,
            record=record,
            upload_duration=time.time() - start_time,
            file_size=asset.size_bytes,
        )

        self.logger.info(
            f"✅ Upload successful: {record.video_id} "
            f"({result.upload_duration:.1f}s, "
            f"{result.file_size / (1024 * 1024):.1f} MB)",
        )

        if request_processing:
            result.processing_requested = self._request_processing(record, prompt)

        return self._remember(asset, result)

    def _request_processing(self, record: VideoRecord, prompt: str) -> bool:
        """Fire-and-forget; never fails the upload"""
        if self.processing_client is None:
            self.logger.warning("Processing requested but no client configured")
            return False

        request = ProcessingRequest(
            video_url=record.original_url,
            video_id=record.video_id,
            user_id=record.owner_id,
            prompt=prompt,
        )

        try:
            response = self.processing_client.request_processing(request)
        except AuthError as e:
            self.logger.error(f"❌ Processing request not authorized: {e}")
            return False

        if not response.accepted:
            self.logger.warning(
                f"Processing request rejected: {response.error_message}",
            )
        return response.accepted

    def _report_progress(self, snapshot: ProgressSnapshot) -> None:
        self.logger.debug(
            f"Upload progress: {snapshot.progress_percent:.1f}% "
            f"({snapshot.bytes_sent}/{snapshot.bytes_total} bytes)",
        )
        if self.on_progress:
            try:
                self.on_progress(snapshot)
            except Exception as e:
                self.logger.error(f"Error in progress callback: {e}")

    def _failure(
        self,
        error: Optional[VideoAppError],
        video_id: Optional[str] = None,
        download_url: Optional[str] = None,
    ) -> UploadResult:
        status = (
            _STATUS_BY_REASON.get(error.reason, UploadStatus.FAILED)
            if error is not None
            else UploadStatus.FAILED
        )
        message = str(error) if error is not None else "Upload failed"

        self.logger.error(
            f"❌ Upload failed: {message} (status: {status.value})",
        )

        return UploadResult(
            success=False,
            status=status,
            video_id=video_id,
            download_url=download_url,
            error_message=message,
        )

    def _remember(self, asset: MediaAsset, result: UploadResult) -> UploadResult:
        self._last_asset = asset
        self._last_result = result
        return result
