"""
Transport Interface

Abstract interface for object transfer implementations.
Follows Dependency Inversion Principle - UploadCoordinator depends on this
abstraction, not on a concrete HTTP client.

A transport runs one transfer per start() call and reports back through a
TransferListener. Events may arrive on another thread, out of order, or
after the coordinator has stopped caring; filtering them is the
coordinator's job, not the transport's.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from core.errors import VideoAppError
from upload.models.media_asset import MediaAsset


@dataclass(frozen=True)
class TransferRequest:
    """
    Everything a transport needs to move one asset.

    Attributes:
        session_id: Owning upload session
        asset: Local file to send
        remote_path: Namespaced object path, e.g. "videos/{video_id}"
        auth_token: Bearer token for the transfer endpoint
    """

    session_id: str
    asset: MediaAsset
    remote_path: str
    auth_token: str


class TransferListener(ABC):
    """Receives transfer events for one request"""

    @abstractmethod
    def on_progress(self, bytes_sent: int, bytes_total: int) -> None:
        """Raw transport progress (may regress or arrive out of order)"""

    @abstractmethod
    def on_success(self, download_url: str) -> None:
        """Object stored; download_url resolves to it"""

    @abstractmethod
    def on_failure(self, error: VideoAppError) -> None:
        """Transfer failed (TransferError, or AuthError for 401/403)"""


class TransferHandle(ABC):
    """Handle to an in-flight transfer"""

    @abstractmethod
    def abort(self) -> None:
        """
        Request best-effort abort.

        The transfer may still complete; callers must not rely on abort()
        to suppress events.
        """


class TransportInterface(ABC):
    """
    Abstract base class for object transports.

    Any transport implementation (HTTP, mock, ...) must implement these
    methods.
    """

    @abstractmethod
    def start(
        self,
        request: TransferRequest,
        listener: TransferListener,
    ) -> TransferHandle:
        """
        Start a transfer.

        May return before the transfer finishes (background thread) or
        after it (synchronous fakes). Either way every outcome is reported
        through listener.

        Args:
            request: What to send and where
            listener: Event sink for this transfer

        Returns:
            Handle that can abort the transfer

        Raises:
            TransferError: If the transfer cannot even be started
        """

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if transport is configured and ready.

        Returns:
            True if an upload could be attempted now
        """
