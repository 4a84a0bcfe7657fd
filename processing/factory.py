"""
Processing Factory

Factory pattern for creating processing clients.
Follows same pattern as upload/factory.py for consistency.

Automatically configures from environment variables.
"""

import logging
from typing import Literal, Optional

from config.settings import PROCESSING_ENDPOINT_URL
from processing.implementations.http_processing_client import HttpProcessingClient
from processing.implementations.mock_processing_client import MockProcessingClient
from processing.interfaces.processing_interface import ProcessingClientInterface
from upload.auth.credentials import CredentialProvider

# Type alias
ProcessingMode = Literal["auto", "http", "mock"]


class ProcessingClientFactory:
    """
    Factory for creating processing clients.

    Reads configuration from environment variables:
    - PROCESSING_ENDPOINT_URL: Job endpoint (empty = mock in auto mode)

    Usage:
        client = ProcessingClientFactory.create_client(credentials=provider)
        client = ProcessingClientFactory.create_client(mode="mock")
    """

    _logger = logging.getLogger(__name__)

    @classmethod
    def create_client(
        cls,
        mode: ProcessingMode = "auto",
        credentials: Optional[CredentialProvider] = None,
        endpoint_url: Optional[str] = None,
    ) -> ProcessingClientInterface:
        """
        Create a processing client.

        Args:
            mode: "auto" (from env), "http" (force real), "mock" (force sim)
            credentials: Bearer token source for the endpoint
            endpoint_url: Override PROCESSING_ENDPOINT_URL

        Raises:
            RuntimeError: If mode="http" but no endpoint is configured
        """
        url = endpoint_url or PROCESSING_ENDPOINT_URL

        if mode == "mock":
            cls._logger.info("Creating Mock Processing Client (forced)")
            return MockProcessingClient()

        if mode == "http":
            if not url:
                raise RuntimeError(
                    "PROCESSING_ENDPOINT_URL not set in environment. "
                    "Add to .env file: PROCESSING_ENDPOINT_URL=https://...",
                )
            cls._logger.info("Creating HTTP Processing Client (forced)")
            return HttpProcessingClient(url, credentials=credentials)

        # mode == "auto"
        if url:
            cls._logger.info("Creating HTTP Processing Client (auto-detected)")
            return HttpProcessingClient(url, credentials=credentials)

        cls._logger.warning(
            "PROCESSING_ENDPOINT_URL not set, using Mock Processing Client",
        )
        return MockProcessingClient()


def create_processing_client(
    force_mock: bool = False,
    credentials: Optional[CredentialProvider] = None,
) -> ProcessingClientInterface:
    """
    Quick processing client creation with simple mock override.

    Example:
        client = create_processing_client(credentials=provider)
    """
    mode = "mock" if force_mock else "auto"
    return ProcessingClientFactory.create_client(mode=mode, credentials=credentials)
