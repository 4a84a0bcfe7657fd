"""
HTTP Processing Client

Posts processing job requests to the processing service as JSON.
The response is read only as accept (2xx) or reject.
"""

import logging
from typing import Optional

import requests

from config.settings import PROCESSING_TIMEOUT
from core.errors import AuthError
from processing.constants import ProcessingStatus
from processing.interfaces.processing_interface import ProcessingClientInterface
from processing.models.processing_request import ProcessingRequest, ProcessingResult
from upload.auth.credentials import CredentialProvider


class HttpProcessingClient(ProcessingClientInterface):
    """
    Processing request client using requests.

    Usage:
        client = HttpProcessingClient(
            endpoint_url="https://jobs.example.com/process",
            credentials=StaticTokenProvider(token),
        )

        result = client.request_processing(
            ProcessingRequest(video_url=url, video_id=vid, user_id=uid),
        )
        if not result.accepted:
            print(result.error_message)
    """

    def __init__(
        self,
        endpoint_url: str,
        credentials: Optional[CredentialProvider] = None,
        session: Optional[requests.Session] = None,
        timeout: float = PROCESSING_TIMEOUT,
    ):
        """
        Initialize client.

        Args:
            endpoint_url: Processing job endpoint
            credentials: Bearer token source (None = unauthenticated)
            session: requests.Session to reuse (default: new session)
            timeout: Request timeout in seconds
        """
        self.logger = logging.getLogger(__name__)

        if not endpoint_url:
            raise ValueError("HttpProcessingClient requires an endpoint URL")

        self.endpoint_url = endpoint_url
        self.credentials = credentials
        self.http = session or requests.Session()
        self.timeout = timeout

        self.logger.info(f"Processing client initialized ({endpoint_url})")

    def request_processing(self, request: ProcessingRequest) -> ProcessingResult:
        headers = {"Content-Type": "application/json"}
        if self.credentials is not None:
            headers["Authorization"] = f"Bearer {self.credentials.get_token()}"

        self.logger.info(f"Requesting processing for {request.video_id}")

        try:
            response = self.http.post(
                self.endpoint_url,
                json=request.to_payload(),
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            self.logger.error(f"Processing request failed: {e}")
            return ProcessingResult(
                accepted=False,
                status=ProcessingStatus.NETWORK_ERROR,
                error_message=f"Network error: {e}",
            )

        if response.status_code in (401, 403):
            raise AuthError(
                f"Processing request rejected ({response.status_code}): "
                f"{response.text}",
            )

        if not 200 <= response.status_code < 300:
            self.logger.warning(
                f"Processing request rejected for {request.video_id}: "
                f"{response.status_code}",
            )
            return ProcessingResult(
                accepted=False,
                status=ProcessingStatus.REJECTED,
                status_code=response.status_code,
                error_message=response.text,
            )

        self.logger.info(f"✅ Processing request accepted: {request.video_id}")
        return ProcessingResult(
            accepted=True,
            status=ProcessingStatus.ACCEPTED,
            status_code=response.status_code,
        )

    def is_available(self) -> bool:
        return bool(self.endpoint_url)
