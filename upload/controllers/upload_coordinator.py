"""
Upload Coordinator

State machine that turns a local video into a durably identified remote
object plus a catalog record.

State Flow:
    IDLE → VERIFYING → TRANSFERRING → FINALIZING → COMPLETED
               ↓             ↓             ↓
               +--------→ FAILED ←---------+

Event Ordering:
- Every state change and every transport event is applied under one lock,
  so two progress events are never applied concurrently
- Transport events carry the session id they were issued for; events for
  a session that is no longer current, or no longer TRANSFERRING, are
  dropped (a cancelled session can never be resurrected)
- progress_percent is the maximum value observed so far
"""

import logging
import threading
import time
import uuid
from datetime import datetime, timezone
from functools import partial
from typing import Any, Callable, Dict, Optional

from catalog.interfaces.catalog_interface import CatalogError, CatalogInterface
from catalog.models.video_record import VideoRecord
from config.settings import VIDEO_MIME_PREFIX
from core.errors import (
    AssetNotFound,
    AssetValidationError,
    AuthError,
    FinalizeError,
    InvalidAssetType,
    InvalidSessionState,
    SessionBusy,
    TransferError,
    UploadCancelled,
    VideoAppError,
)
from upload.auth.credentials import CredentialProvider
from upload.constants import ALLOWED_TRANSITIONS, SessionStatus
from upload.controllers.upload_task import UploadTask
from upload.interfaces.transport_interface import (
    TransferHandle,
    TransferListener,
    TransferRequest,
    TransportInterface,
)
from upload.models.media_asset import MediaAsset
from upload.models.upload_session import ProgressSnapshot, UploadOutcome, UploadSession
from upload.utils.identifier import derive_video_id

StateChangeCallback = Callable[[UploadSession, SessionStatus, SessionStatus], None]


def _now_ms() -> int:
    return int(time.time() * 1000)


class _SessionListener(TransferListener):
    """Binds transport events to the session they were issued for"""

    def __init__(self, coordinator: "UploadCoordinator", session_id: str):
        self._coordinator = coordinator
        self._session_id = session_id

    def on_progress(self, bytes_sent: int, bytes_total: int) -> None:
        self._coordinator._on_progress(self._session_id, bytes_sent, bytes_total)

    def on_success(self, download_url: str) -> None:
        self._coordinator._on_transfer_success(self._session_id, download_url)

    def on_failure(self, error: VideoAppError) -> None:
        self._coordinator._on_transfer_failure(self._session_id, error)


class UploadCoordinator:
    """
    Owns at most one upload session at a time.

    Collaborators are injected so the coordinator has no hidden global
    state:
    - transport: moves bytes to videos/{video_id}
    - catalog: stores the VideoRecord written by finalize()
    - credentials: bearer token for the transfer endpoint

    Usage:
        coordinator = UploadCoordinator(transport, catalog, credentials,
                                        owner_id="user-1")

        asset = coordinator.select_asset(MediaAsset.from_path("clip.mp4"))
        task = coordinator.begin_upload()

        outcome = task.wait()
        if outcome.success:
            record = coordinator.finalize()
    """

    def __init__(
        self,
        transport: TransportInterface,
        catalog: CatalogInterface,
        credentials: CredentialProvider,
        owner_id: str,
        clock: Callable[[], int] = _now_ms,
    ):
        """
        Initialize coordinator.

        Args:
            transport: Object transport implementation
            catalog: Metadata store
            credentials: Token source for the transfer endpoint
            owner_id: User the uploads belong to
            clock: Milliseconds since the epoch (injectable for tests)
        """
        self.logger = logging.getLogger(__name__)

        if not owner_id:
            raise ValueError("owner_id is required")

        self.transport = transport
        self.catalog = catalog
        self.credentials = credentials
        self.owner_id = owner_id
        self._clock = clock

        self._lock = threading.RLock()
        self._selected_asset: Optional[MediaAsset] = None
        self._session: Optional[UploadSession] = None
        self._task: Optional[UploadTask] = None
        self._handle: Optional[TransferHandle] = None

        # Called on every state change (old/new state), under the lock
        self.on_state_change: Optional[StateChangeCallback] = None

        self.logger.info(f"Upload Coordinator initialized (owner: {owner_id})")

    # =========================================================================
    # PUBLIC OPERATIONS
    # =========================================================================

    def select_asset(self, candidate: MediaAsset) -> MediaAsset:
        """
        Validate and remember the asset for the next upload.

        A terminal session from a previous upload is discarded.

        Raises:
            InvalidAssetType: MIME type is not video/*
            AssetNotFound: Local file does not exist
            SessionBusy: An upload is in flight
        """
        with self._lock:
            if self._session is not None and self._session.is_in_flight:
                raise SessionBusy(
                    f"Cannot select a new asset while session "
                    f"{self._session.id} is {self._session.status.value}",
                )

            self._validate_asset(candidate)

            self._selected_asset = candidate
            self._session = None
            self._task = None
            self._handle = None

            self.logger.info(
                f"Asset selected: {candidate.display_name} "
                f"({candidate.mime_type}, {candidate.size_bytes} bytes)",
            )
            return candidate

    def begin_upload(
        self,
        asset: Optional[MediaAsset] = None,
        timestamp_ms: Optional[int] = None,
    ) -> UploadTask:
        """
        Start a new upload session.

        Args:
            asset: Asset to upload (default: the selected asset)
            timestamp_ms: Replay a previous derivation timestamp (retry
                after FinalizeError); default is the current time

        Returns:
            UploadTask reporting progress and the transfer outcome

        Raises:
            SessionBusy: A session is VERIFYING/TRANSFERRING/FINALIZING
                (that session is left untouched)
            InvalidSessionState: No asset given or selected
            AssetValidationError: Asset failed verification (session FAILED)
            AuthError: No credential available (session FAILED)
            TransferError: Transport refused to start (session FAILED)
        """
        with self._lock:
            current = self._session
            if current is not None and current.is_in_flight:
                self.logger.warning(
                    f"Upload rejected: session {current.id} is "
                    f"{current.status.value}",
                )
                raise SessionBusy(
                    f"Upload already in progress (session {current.id})",
                )

            asset = asset or self._selected_asset
            if asset is None:
                raise InvalidSessionState("No asset selected")

            session = UploadSession(
                id=uuid.uuid4().hex,
                asset=asset,
                owner_id=self.owner_id,
                bytes_total=asset.size_bytes,
            )
            task = UploadTask(session.id, partial(self._cancel_session, session.id))

            self._selected_asset = asset
            self._session = session
            self._task = task
            self._handle = None

            self.logger.info(
                f"Beginning upload {session.id}: {asset.display_name}",
            )

            # Verify
            self._transition(session, SessionStatus.VERIFYING)
            try:
                self._validate_asset(asset)
            except AssetValidationError as e:
                self._fail(session, e)
                raise

            session.timestamp_ms = (
                timestamp_ms if timestamp_ms is not None else self._clock()
            )
            session.video_id = derive_video_id(
                self.owner_id,
                session.timestamp_ms,
                asset.display_name,
            )

            try:
                token = self.credentials.get_token()
            except AuthError as e:
                self._fail(session, e)
                raise

            # Transfer
            self._transition(session, SessionStatus.TRANSFERRING)

            request = TransferRequest(
                session_id=session.id,
                asset=asset,
                remote_path=session.remote_path,
                auth_token=token,
            )

            try:
                handle = self.transport.start(
                    request,
                    _SessionListener(self, session.id),
                )
            except TransferError as e:
                self._fail(session, e)
                raise

            if session.status == SessionStatus.TRANSFERRING:
                self._handle = handle

            return task

    def finalize(self) -> VideoRecord:
        """
        Persist the VideoRecord for a transferred session.

        The remote object is never rolled back: a retry with the same
        derivation inputs overwrites it.

        Returns:
            The stored VideoRecord (session becomes COMPLETED)

        Raises:
            InvalidSessionState: Session is not FINALIZING
            FinalizeError: Metadata write failed (session FAILED)
        """
        with self._lock:
            session = self._session
            if session is None or session.status != SessionStatus.FINALIZING:
                state = session.status.value if session else "no session"
                raise InvalidSessionState(f"Cannot finalize in state: {state}")

            record = VideoRecord(
                video_id=session.video_id,
                owner_id=session.owner_id,
                original_url=session.download_url,
                filename=session.asset.display_name,
                created_at=datetime.fromtimestamp(
                    session.timestamp_ms / 1000,
                    tz=timezone.utc,
                ),
            )

            try:
                stored = self.catalog.save_record(record)
            except CatalogError as e:
                error = FinalizeError(f"Failed to save video record: {e}")
                self._fail(session, error)
                raise error from e

            session.record = stored
            self._transition(session, SessionStatus.COMPLETED)

            self.logger.info(f"✅ Upload complete: {stored.video_id}")
            return stored

    def cancel(self) -> bool:
        """
        Cancel the current session (only valid while TRANSFERRING).

        Returns:
            True if the session was cancelled, False if not transferring
        """
        with self._lock:
            if self._session is None:
                self.logger.warning("Cannot cancel - no upload session")
                return False
            session_id = self._session.id

        return self._cancel_session(session_id)

    def reset(self) -> None:
        """
        Discard a terminal session and the selected asset.

        Raises:
            SessionBusy: A session is in flight
        """
        with self._lock:
            if self._session is not None and self._session.is_in_flight:
                raise SessionBusy(
                    f"Cannot reset while session {self._session.id} is "
                    f"{self._session.status.value}",
                )

            self._selected_asset = None
            self._session = None
            self._task = None
            self._handle = None
            self.logger.debug("Coordinator reset to idle")

    # =========================================================================
    # STATUS
    # =========================================================================

    @property
    def session(self) -> Optional[UploadSession]:
        return self._session

    @property
    def selected_asset(self) -> Optional[MediaAsset]:
        return self._selected_asset

    @property
    def task(self) -> Optional[UploadTask]:
        return self._task

    @property
    def status(self) -> SessionStatus:
        session = self._session
        return session.status if session else SessionStatus.IDLE

    @property
    def progress_percent(self) -> float:
        session = self._session
        return session.progress_percent if session else 0.0

    def get_status(self) -> Dict[str, Any]:
        """
        Get current coordinator status.

        Returns:
            Dictionary with status information
        """
        with self._lock:
            session = self._session
            return {
                "status": self.status.value,
                "session_id": session.id if session else None,
                "video_id": session.video_id if session else None,
                "progress_percent": self.progress_percent,
                "error": str(session.error) if session and session.error else None,
                "selected_asset": (
                    self._selected_asset.display_name if self._selected_asset else None
                ),
            }

    # =========================================================================
    # TRANSPORT EVENTS (serialized by the lock, filtered by session id)
    # =========================================================================

    def _on_progress(self, session_id: str, bytes_sent: int, bytes_total: int) -> None:
        with self._lock:
            session = self._live_session(session_id, "progress")
            if session is None:
                return

            # Transport total is authoritative over the size seen at selection
            if bytes_total > 0:
                session.bytes_total = bytes_total
            session.bytes_sent = max(session.bytes_sent, bytes_sent)

            percent = self._percent(bytes_sent, bytes_total or session.bytes_total)
            if percent < session.progress_percent:
                self.logger.debug(
                    f"Progress regression ignored for {session_id}: "
                    f"{percent:.1f}% < {session.progress_percent:.1f}%",
                )
            session.progress_percent = max(session.progress_percent, percent)
            session.updated_at = datetime.now()

            self._emit_snapshot(session)

    def _on_transfer_success(self, session_id: str, download_url: str) -> None:
        with self._lock:
            session = self._live_session(session_id, "completion")
            if session is None:
                return

            session.download_url = download_url
            if session.progress_percent < 100.0:
                session.progress_percent = 100.0
                session.bytes_sent = max(session.bytes_sent, session.bytes_total)
                self._emit_snapshot(session)

            self._handle = None
            self._transition(session, SessionStatus.FINALIZING)
            self._set_outcome(session)

    def _on_transfer_failure(self, session_id: str, error: VideoAppError) -> None:
        with self._lock:
            session = self._live_session(session_id, "failure")
            if session is None:
                return

            self._handle = None
            self._fail(session, error)

    def _live_session(self, session_id: str, event: str) -> Optional[UploadSession]:
        """Current TRANSFERRING session with this id, or None (stale event)"""
        session = self._session
        if session is None or session.id != session_id:
            self.logger.debug(f"Dropping stale {event} event for {session_id}")
            return None

        if session.status != SessionStatus.TRANSFERRING:
            self.logger.debug(
                f"Dropping {event} event for {session_id} "
                f"in state {session.status.value}",
            )
            return None

        return session

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _cancel_session(self, session_id: str) -> bool:
        with self._lock:
            session = self._session
            if (
                session is None
                or session.id != session_id
                or session.status != SessionStatus.TRANSFERRING
            ):
                self.logger.warning(
                    f"Cannot cancel {session_id} - not transferring",
                )
                return False

            handle = self._handle
            self._handle = None
            self._fail(session, UploadCancelled("Upload cancelled by user"))

        # Abort outside the lock: a transport may block while stopping
        if handle is not None:
            try:
                handle.abort()
            except Exception as e:
                self.logger.warning(f"Abort request failed for {session_id}: {e}")

        return True

    def _validate_asset(self, candidate: MediaAsset) -> None:
        if not (candidate.mime_type or "").startswith(VIDEO_MIME_PREFIX):
            raise InvalidAssetType(
                f"Not a video: {candidate.display_name} ({candidate.mime_type})",
            )

        if not candidate.exists():
            raise AssetNotFound(f"File does not exist: {candidate.uri}")

    def _transition(self, session: UploadSession, new_state: SessionStatus) -> None:
        old_state = session.status
        if new_state not in ALLOWED_TRANSITIONS[old_state]:
            raise InvalidSessionState(
                f"Illegal transition {old_state.value} -> {new_state.value}",
            )

        session.status = new_state
        session.updated_at = datetime.now()
        self.logger.info(
            f"Upload {session.id[:8]}: {old_state.value} -> {new_state.value}",
        )

        if self.on_state_change:
            try:
                self.on_state_change(session, old_state, new_state)
            except Exception as e:
                self.logger.error(f"Error in state change callback: {e}")

    def _fail(self, session: UploadSession, error: VideoAppError) -> None:
        session.error = error
        self._transition(session, SessionStatus.FAILED)
        self.logger.error(
            f"❌ Upload {session.id[:8]} failed: {error} "
            f"(reason: {error.reason.value})",
        )
        self._set_outcome(session)

    def _emit_snapshot(self, session: UploadSession) -> None:
        if self._task is not None and self._task.session_id == session.id:
            self._task.push_snapshot(
                ProgressSnapshot(
                    session_id=session.id,
                    bytes_sent=session.bytes_sent,
                    bytes_total=session.bytes_total,
                    progress_percent=session.progress_percent,
                ),
            )

    def _set_outcome(self, session: UploadSession) -> None:
        if self._task is not None and self._task.session_id == session.id:
            self._task.set_outcome(
                UploadOutcome(
                    session_id=session.id,
                    status=session.status,
                    video_id=session.video_id,
                    download_url=session.download_url,
                    error=session.error,
                ),
            )

    @staticmethod
    def _percent(bytes_sent: int, bytes_total: int) -> float:
        if bytes_total <= 0:
            return 0.0
        return min(100.0, max(0.0, bytes_sent * 100.0 / bytes_total))
