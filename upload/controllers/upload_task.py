"""
Upload Task

Cancellable handle returned by UploadCoordinator.begin_upload().

A task emits an ordered sequence of ProgressSnapshots and ends with
exactly one UploadOutcome. Callers either iterate snapshots() or block
on wait(); both see the same terminal result.
"""

import logging
import queue
import threading
from typing import Callable, Iterator, Optional

from upload.models.upload_session import ProgressSnapshot, UploadOutcome

# Queue marker placed after the last snapshot
_END = object()


class UploadTask:
    """
    Future-like view of one upload session's transfer phase.

    Usage:
        task = coordinator.begin_upload(asset)

        for snapshot in task.snapshots(timeout=30):
            print(f"{snapshot.progress_percent:.0f}%")

        outcome = task.wait()
        if outcome.success:
            record = coordinator.finalize()
    """

    def __init__(self, session_id: str, canceller: Callable[[], bool]):
        """
        Args:
            session_id: Session this task reports on
            canceller: Called by cancel(); returns True if it took effect
        """
        self.logger = logging.getLogger(__name__)
        self.session_id = session_id
        self._canceller = canceller

        self._snapshots: "queue.Queue[object]" = queue.Queue()
        self._done = threading.Event()
        self._outcome: Optional[UploadOutcome] = None
        self._lock = threading.Lock()

    # =========================================================================
    # PRODUCER SIDE (called by UploadCoordinator only)
    # =========================================================================

    def push_snapshot(self, snapshot: ProgressSnapshot) -> None:
        with self._lock:
            if self._done.is_set():
                return
            self._snapshots.put(snapshot)

    def set_outcome(self, outcome: UploadOutcome) -> bool:
        """
        Record the terminal result.

        Returns:
            False if the task already had an outcome (the new one is dropped)
        """
        with self._lock:
            if self._done.is_set():
                self.logger.debug(
                    f"Ignoring second outcome for task {self.session_id}",
                )
                return False

            self._outcome = outcome
            self._snapshots.put(_END)
            self._done.set()
            return True

    # =========================================================================
    # CONSUMER SIDE
    # =========================================================================

    def snapshots(self, timeout: Optional[float] = None) -> Iterator[ProgressSnapshot]:
        """
        Yield progress snapshots in order until the task finishes.

        Single consumer: snapshots are removed as they are yielded.

        Args:
            timeout: Max seconds to wait for each next snapshot

        Raises:
            TimeoutError: If no snapshot arrives within timeout
        """
        while True:
            try:
                item = self._snapshots.get(timeout=timeout)
            except queue.Empty:
                raise TimeoutError(
                    f"No progress from upload {self.session_id} in {timeout}s",
                ) from None

            if item is _END:
                return
            yield item

    def wait(self, timeout: Optional[float] = None) -> UploadOutcome:
        """
        Block until the terminal result is available.

        Raises:
            TimeoutError: If the task does not finish within timeout
        """
        if not self._done.wait(timeout):
            raise TimeoutError(f"Upload {self.session_id} still running")
        return self._outcome

    def done(self) -> bool:
        return self._done.is_set()

    @property
    def outcome(self) -> Optional[UploadOutcome]:
        return self._outcome

    def cancel(self) -> bool:
        """
        Cancel the transfer (only possible while transferring).

        Returns:
            True if the session was cancelled
        """
        if self.done():
            return False
        return self._canceller()

    def __repr__(self) -> str:
        state = "done" if self.done() else "running"
        return f"UploadTask(session_id='{self.session_id}', {state})"
