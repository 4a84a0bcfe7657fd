"""
Mock Transport Implementation

Simulated transport for testing without a storage endpoint.
Two modes:
- Scripted: start() replays raw progress values, then succeeds or fails
  before returning (synchronous, deterministic)
- Manual: start() only records the listener; the test drives events with
  emit_progress() / complete() / fail(), in any order it likes
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from core.errors import TransferError, VideoAppError
from upload.interfaces.transport_interface import (
    TransferHandle,
    TransferListener,
    TransferRequest,
    TransportInterface,
)


@dataclass
class MockTransfer(TransferHandle):
    """Recorded transfer; doubles as its own handle"""

    request: TransferRequest
    listener: TransferListener
    aborted: bool = False
    events: List[str] = field(default_factory=list)

    def abort(self) -> None:
        self.aborted = True
        self.events.append("abort")


class MockTransport(TransportInterface):
    """
    Mock object transport for testing.

    Usage:
        # Scripted: progress 0,10,55,40,100 then success
        transport = MockTransport(progress_script=[0, 10, 55, 40, 100])

        # Manual: drive events from the test
        transport = MockTransport(manual=True)
        task = coordinator.begin_upload(asset)
        transport.emit_progress(30, 100)
        transport.complete()
    """

    def __init__(
        self,
        progress_script: Optional[Sequence[int]] = None,
        manual: bool = False,
        fail_with: Optional[VideoAppError] = None,
        bytes_total: int = 100,
        base_url: str = "https://storage.mock/videos",
    ):
        """
        Initialize mock transport.

        Args:
            progress_script: Raw progress values (bytes of bytes_total)
                replayed in scripted mode
            manual: If True, start() returns without emitting anything
            fail_with: Scripted mode ends with this failure instead of success
            bytes_total: Total reported with every progress event
            base_url: Prefix for fake download URLs
        """
        self.logger = logging.getLogger(__name__)
        self.progress_script = list(progress_script or [0, 50, 100])
        self.manual = manual
        self.fail_with = fail_with
        self.bytes_total = bytes_total
        self.base_url = base_url.rstrip("/")

        # Track transfers for testing
        self.transfers: List[MockTransfer] = []

        self.logger.info(
            f"Mock Transport initialized "
            f"(manual: {manual}, script: {self.progress_script})",
        )

    def start(
        self,
        request: TransferRequest,
        listener: TransferListener,
    ) -> TransferHandle:
        transfer = MockTransfer(request=request, listener=listener)
        self.transfers.append(transfer)

        self.logger.info(f"[MOCK] Starting transfer -> {request.remote_path}")

        if not self.manual:
            for value in self.progress_script:
                self._emit_progress(transfer, value, self.bytes_total)

            if self.fail_with is not None:
                self._fail(transfer, self.fail_with)
            else:
                self._complete(transfer, None)

        return transfer

    def is_available(self) -> bool:
        """Mock transport is always available"""
        return True

    # =========================================================================
    # TESTING HELPER METHODS
    # =========================================================================

    @property
    def last_transfer(self) -> Optional[MockTransfer]:
        return self.transfers[-1] if self.transfers else None

    def emit_progress(
        self,
        bytes_sent: int,
        bytes_total: Optional[int] = None,
        transfer: Optional[MockTransfer] = None,
    ) -> None:
        """Deliver a progress event (defaults to the latest transfer)"""
        target = transfer or self._require_last()
        total = self.bytes_total if bytes_total is None else bytes_total
        self._emit_progress(target, bytes_sent, total)

    def complete(
        self,
        download_url: Optional[str] = None,
        transfer: Optional[MockTransfer] = None,
    ) -> None:
        """Deliver success (defaults to the latest transfer)"""
        self._complete(transfer or self._require_last(), download_url)

    def fail(
        self,
        error: Optional[VideoAppError] = None,
        transfer: Optional[MockTransfer] = None,
    ) -> None:
        """Deliver failure (defaults to a 503 TransferError)"""
        error = error or TransferError(
            "Upload failed with status 503: unavailable",
            status_code=503,
            body="unavailable",
        )
        self._fail(transfer or self._require_last(), error)

    def _require_last(self) -> MockTransfer:
        if not self.transfers:
            raise RuntimeError("No transfer started")
        return self.transfers[-1]

    def _emit_progress(
        self,
        transfer: MockTransfer,
        bytes_sent: int,
        bytes_total: int,
    ) -> None:
        transfer.events.append(f"progress:{bytes_sent}/{bytes_total}")
        transfer.listener.on_progress(bytes_sent, bytes_total)

    def _complete(self, transfer: MockTransfer, download_url: Optional[str]) -> None:
        url = download_url or (
            f"{self.base_url}/{transfer.request.remote_path}?alt=media"
        )
        transfer.events.append("success")
        transfer.listener.on_success(url)

    def _fail(self, transfer: MockTransfer, error: VideoAppError) -> None:
        transfer.events.append("failure")
        transfer.listener.on_failure(error)
