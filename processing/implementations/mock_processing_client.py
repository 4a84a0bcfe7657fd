"""
Mock Processing Client

Records processing requests without any network access.
Useful for development and testing.
"""

import logging
from typing import List, Optional

from core.errors import AuthError
from processing.constants import ProcessingStatus
from processing.interfaces.processing_interface import ProcessingClientInterface
from processing.models.processing_request import ProcessingRequest, ProcessingResult


class MockProcessingClient(ProcessingClientInterface):
    """
    Mock processing client for testing.

    Usage:
        client = MockProcessingClient()
        client.request_processing(request)
        assert client.get_request_count() == 1

        # Simulate a rejection
        client = MockProcessingClient(accept=False)
    """

    def __init__(
        self,
        accept: bool = True,
        auth_error: bool = False,
        available: bool = True,
    ):
        """
        Args:
            accept: Answer accepted (True) or rejected (False)
            auth_error: Raise AuthError on every request
            available: Value reported by is_available()
        """
        self.logger = logging.getLogger(__name__)
        self.accept = accept
        self.auth_error = auth_error
        self.available = available

        # Track requests for testing
        self.requests: List[ProcessingRequest] = []

        self.logger.info("Mock Processing Client initialized")

    def request_processing(self, request: ProcessingRequest) -> ProcessingResult:
        self.requests.append(request)
        self.logger.info(f"[MOCK] Processing requested: {request.video_id}")

        if self.auth_error:
            raise AuthError("Simulated processing auth failure")

        if not self.accept:
            return ProcessingResult(
                accepted=False,
                status=ProcessingStatus.REJECTED,
                status_code=500,
                error_message="Simulated rejection",
            )

        return ProcessingResult(
            accepted=True,
            status=ProcessingStatus.ACCEPTED,
            status_code=202,
        )

    def is_available(self) -> bool:
        return self.available

    # =========================================================================
    # TESTING HELPER METHODS
    # =========================================================================

    @property
    def last_request(self) -> Optional[ProcessingRequest]:
        return self.requests[-1] if self.requests else None

    def get_request_count(self) -> int:
        return len(self.requests)

    def clear_history(self) -> None:
        self.requests.clear()
