"""
HTTP Transport Implementation

Concrete implementation of TransportInterface for a Firebase-Storage-style
REST endpoint. The binary body is streamed from disk on a background
thread so progress can be reported while bytes leave the device.
"""

import logging
import threading
import time
from typing import BinaryIO, Callable, Optional
from urllib.parse import quote

import requests

from config.settings import (
    HTTP_TIMEOUT,
    STORAGE_BASE_URL,
    UPLOAD_CHUNK_SIZE,
    UPLOAD_TIMEOUT,
)
from core.errors import AuthError, TransferError
from upload.interfaces.transport_interface import (
    TransferHandle,
    TransferListener,
    TransferRequest,
    TransportInterface,
)


class TransferAborted(IOError):
    """Raised from inside the body reader when abort() was requested"""


class _ProgressReader:
    """
    File wrapper handed to requests as the request body.

    requests/http.client pull the body through read(); every read is a
    chance to report progress and to honour an abort request.
    """

    def __init__(
        self,
        fileobj: BinaryIO,
        total: int,
        on_progress: Callable[[int, int], None],
        abort_event: threading.Event,
        report_every: int = UPLOAD_CHUNK_SIZE,
    ):
        self._file = fileobj
        self._total = total
        self._on_progress = on_progress
        self._abort_event = abort_event
        self._report_every = report_every
        self._sent = 0
        self._last_reported = 0

    def __len__(self) -> int:
        return self._total

    def read(self, size: int = -1) -> bytes:
        if self._abort_event.is_set():
            raise TransferAborted("Transfer aborted")

        chunk = self._file.read(size)
        self._sent += len(chunk)

        if (
            self._sent - self._last_reported >= self._report_every
            or self._sent >= self._total
        ) and self._sent != self._last_reported:
            self._last_reported = self._sent
            self._on_progress(self._sent, self._total)

        return chunk


class HttpTransferHandle(TransferHandle):
    """Handle for a transfer running on a worker thread"""

    def __init__(self, abort_event: threading.Event, thread: threading.Thread):
        self._abort_event = abort_event
        self.thread = thread

    def abort(self) -> None:
        self._abort_event.set()

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for the worker thread (used by tests and shutdown)"""
        self.thread.join(timeout)


class HttpTransport(TransportInterface):
    """
    Object transport using the storage REST API.

    Features:
    - Streams the file from disk (memory efficient)
    - Progress every UPLOAD_CHUNK_SIZE bytes
    - Best-effort abort between reads
    - Status and body of failed responses kept verbatim in TransferError
    """

    def __init__(
        self,
        bucket: str,
        base_url: str = STORAGE_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: float = UPLOAD_TIMEOUT,
    ):
        """
        Initialize HTTP transport.

        Args:
            bucket: Storage bucket name
            base_url: Endpoint root (default: Firebase Storage v0)
            session: requests.Session to reuse (default: new session)
            timeout: Read timeout for the upload request in seconds

        Example:
            transport = HttpTransport(bucket="my-app.appspot.com")
        """
        self.logger = logging.getLogger(__name__)

        if not bucket:
            raise ValueError("HttpTransport requires a storage bucket")

        self.bucket = bucket
        self.base_url = base_url.rstrip("/")
        self.http = session or requests.Session()
        self.timeout = timeout

        self.logger.info(f"HTTP Transport initialized (bucket: {bucket})")

    def object_url(self, remote_path: str) -> str:
        """Endpoint URL for an object path"""
        return f"{self.base_url}/{self.bucket}/o/{quote(remote_path, safe='')}"

    def start(
        self,
        request: TransferRequest,
        listener: TransferListener,
    ) -> TransferHandle:
        abort_event = threading.Event()
        thread = threading.Thread(
            target=self._run,
            args=(request, listener, abort_event),
            name=f"upload-{request.session_id[:8]}",
            daemon=True,
        )
        thread.start()

        self.logger.debug(f"Transfer thread started: {thread.name}")
        return HttpTransferHandle(abort_event, thread)

    def _run(
        self,
        request: TransferRequest,
        listener: TransferListener,
        abort_event: threading.Event,
    ) -> None:
        """Worker thread body: every outcome goes to listener"""
        start_time = time.time()

        try:
            download_url = self._transfer(request, listener, abort_event)
        except TransferAborted:
            self.logger.info(f"Transfer aborted: {request.remote_path}")
            listener.on_failure(TransferError("Transfer aborted"))
            return
        except (TransferError, AuthError) as e:
            self.logger.error(f"Transfer failed: {e}")
            listener.on_failure(e)
            return
        except requests.RequestException as e:
            if abort_event.is_set():
                self.logger.info(f"Transfer aborted: {request.remote_path}")
                listener.on_failure(TransferError("Transfer aborted"))
                return
            self.logger.error(f"Transfer error: {e}")
            listener.on_failure(TransferError(f"Network error: {e}"))
            return
        except OSError as e:
            self.logger.error(f"Cannot read asset: {e}")
            listener.on_failure(TransferError(f"Cannot read asset: {e}"))
            return
        except Exception as e:
            self.logger.error(f"Unexpected transfer error: {e}", exc_info=True)
            listener.on_failure(TransferError(f"Unexpected transfer error: {e}"))
            return

        self.logger.info(
            f"✅ Transfer complete: {request.remote_path} "
            f"({time.time() - start_time:.1f}s)",
        )
        listener.on_success(download_url)

    def _transfer(
        self,
        request: TransferRequest,
        listener: TransferListener,
        abort_event: threading.Event,
    ) -> str:
        """
        Send the file and return its download URL.

        Raises:
            AuthError: 401/403 from the endpoint
            TransferError: Any other non-2xx response
            TransferAborted: abort() was called mid-stream
            requests.RequestException: Transport-level failure
        """
        path = request.asset.local_path
        total = path.stat().st_size

        self.logger.info(
            f"Starting transfer: {request.asset.display_name} "
            f"-> {request.remote_path} ({total} bytes)",
        )

        headers = {
            "Authorization": f"Bearer {request.auth_token}",
            "Content-Type": request.asset.mime_type,
        }

        listener.on_progress(0, total)

        with open(path, "rb") as f:
            body = _ProgressReader(f, total, listener.on_progress, abort_event)
            response = self.http.post(
                self.object_url(request.remote_path),
                data=body,
                headers=headers,
                timeout=(HTTP_TIMEOUT, self.timeout),
            )

        if response.status_code in (401, 403):
            raise AuthError(
                f"Upload rejected ({response.status_code}): {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        if not 200 <= response.status_code < 300:
            raise TransferError(
                f"Upload failed with status {response.status_code}: "
                f"{response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        return self._resolve_download_url(request.remote_path, response)

    def _resolve_download_url(
        self,
        remote_path: str,
        response: requests.Response,
    ) -> str:
        """
        Build a resolvable download URL from the upload response.

        Storage returns object metadata; when it includes download tokens
        the URL carries the first one.
        """
        try:
            metadata = response.json()
        except ValueError:
            metadata = {}

        if not isinstance(metadata, dict):
            metadata = {}

        name = metadata.get("name") or remote_path
        url = f"{self.object_url(name)}?alt=media"

        tokens = metadata.get("downloadTokens")
        if isinstance(tokens, str) and tokens:
            url += f"&token={tokens.split(',')[0]}"

        return url

    def is_available(self) -> bool:
        return bool(self.bucket)
