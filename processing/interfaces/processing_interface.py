"""
Processing Client Interface

Abstract interface for emitting fire-and-forget processing requests.
The core never polls for job completion: the processing pipeline writes
its result into the catalog on its own.
"""

from abc import ABC, abstractmethod

from processing.models.processing_request import ProcessingRequest, ProcessingResult


class ProcessingClientInterface(ABC):
    """
    Abstract base class for processing request clients.
    """

    @abstractmethod
    def request_processing(self, request: ProcessingRequest) -> ProcessingResult:
        """
        Submit a processing job.

        Args:
            request: Job description

        Returns:
            ProcessingResult (accepted or rejected); transport problems are
            reported as a rejected result, not raised

        Raises:
            AuthError: If the endpoint refuses the credential (401/403)
        """

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if the client can send requests.

        Returns:
            True if an endpoint is configured
        """
