"""
Upload Factory

Factory pattern for creating transports, credential providers and a
ready-to-use UploadCoordinator.
Follows same pattern as catalog/factory.py for consistency.

Automatically configures from environment variables.
"""

import logging
import os
from typing import Literal, Optional

from catalog.factory import create_catalog
from catalog.interfaces.catalog_interface import CatalogInterface
from config.settings import (
    GOOGLE_TOKEN_PATH,
    STORAGE_BASE_URL,
    STORAGE_BUCKET,
    UPLOAD_AUTH_TOKEN,
)
from upload.auth.credentials import (
    CredentialProvider,
    GoogleCredentialProvider,
    StaticTokenProvider,
)
from upload.controllers.upload_coordinator import UploadCoordinator
from upload.implementations.http_transport import HttpTransport
from upload.implementations.mock_transport import MockTransport
from upload.interfaces.transport_interface import TransportInterface

# Type aliases
TransportMode = Literal["auto", "http", "mock"]
CredentialMode = Literal["auto", "static", "google", "mock"]

MOCK_TOKEN = "mock-token"


class UploadFactory:
    """
    Factory for creating upload collaborators.

    Reads configuration from environment variables:
    - STORAGE_BUCKET: Remote bucket (empty = mock transport in auto mode)
    - STORAGE_BASE_URL: Transfer endpoint root
    - UPLOAD_AUTH_TOKEN: Static bearer token
    - GOOGLE_TOKEN_PATH: Authorized-user token file

    Usage:
        # Auto-detect from environment
        transport = UploadFactory.create_transport()

        # Force mock for testing
        transport = UploadFactory.create_transport(mode="mock")
    """

    _logger = logging.getLogger(__name__)

    @classmethod
    def create_transport(
        cls,
        mode: TransportMode = "auto",
        bucket: Optional[str] = None,
    ) -> TransportInterface:
        """
        Create a transport instance.

        Args:
            mode: "auto" (from env), "http" (force real), "mock" (force sim)
            bucket: Override STORAGE_BUCKET

        Returns:
            TransportInterface implementation

        Raises:
            RuntimeError: If mode="http" but no bucket is configured
        """
        bucket = bucket or STORAGE_BUCKET

        if mode == "mock":
            cls._logger.info("Creating Mock Transport (forced)")
            return MockTransport()

        if mode == "http":
            if not bucket:
                raise RuntimeError(
                    "STORAGE_BUCKET not set in environment. "
                    "Add to .env file: STORAGE_BUCKET=my-project.appspot.com",
                )
            cls._logger.info("Creating HTTP Transport (forced)")
            return HttpTransport(bucket=bucket, base_url=STORAGE_BASE_URL)

        # mode == "auto"
        if bucket:
            cls._logger.info("Creating HTTP Transport (auto-detected)")
            return HttpTransport(bucket=bucket, base_url=STORAGE_BASE_URL)

        cls._logger.warning("STORAGE_BUCKET not set, using Mock Transport")
        return MockTransport()

    @classmethod
    def create_credentials(
        cls,
        mode: CredentialMode = "auto",
        token_path: Optional[str] = None,
    ) -> CredentialProvider:
        """
        Create a credential provider.

        Args:
            mode: "auto" (static token, then token file, then mock),
                "static", "google" or "mock"
            token_path: Override GOOGLE_TOKEN_PATH

        Raises:
            AuthError: If mode="google" and the token file is unusable
        """
        token_path = token_path or GOOGLE_TOKEN_PATH

        if mode == "mock":
            cls._logger.info("Creating mock credentials (forced)")
            return StaticTokenProvider(MOCK_TOKEN)

        if mode == "static":
            return StaticTokenProvider(UPLOAD_AUTH_TOKEN)

        if mode == "google":
            return GoogleCredentialProvider(token_path)

        # mode == "auto"
        if UPLOAD_AUTH_TOKEN:
            cls._logger.info("Using static upload token from environment")
            return StaticTokenProvider(UPLOAD_AUTH_TOKEN)

        if os.path.exists(token_path):
            cls._logger.info(f"Using Google credentials from {token_path}")
            return GoogleCredentialProvider(token_path)

        cls._logger.warning(
            "No upload credential configured, uploads will fail with AuthError",
        )
        return StaticTokenProvider("")

    @classmethod
    def create_coordinator(
        cls,
        owner_id: str,
        force_mock: bool = False,
        catalog: Optional[CatalogInterface] = None,
    ) -> UploadCoordinator:
        """
        Create a fully wired UploadCoordinator.

        Args:
            owner_id: User the uploads belong to
            force_mock: Use mock transport, credentials and catalog
            catalog: Catalog to write records to (default: from factory)
        """
        if force_mock:
            return UploadCoordinator(
                transport=cls.create_transport(mode="mock"),
                catalog=catalog or create_catalog(force_mock=True),
                credentials=cls.create_credentials(mode="mock"),
                owner_id=owner_id,
            )

        return UploadCoordinator(
            transport=cls.create_transport(),
            catalog=catalog or create_catalog(),
            credentials=cls.create_credentials(),
            owner_id=owner_id,
        )


# Convenience functions for quick creation
def create_transport(force_mock: bool = False) -> TransportInterface:
    """
    Quick transport creation with simple mock override.

    Example:
        transport = create_transport()
        transport = create_transport(force_mock=True)
    """
    mode = "mock" if force_mock else "auto"
    return UploadFactory.create_transport(mode=mode)


def create_credentials(force_mock: bool = False) -> CredentialProvider:
    mode = "mock" if force_mock else "auto"
    return UploadFactory.create_credentials(mode=mode)


def create_coordinator(
    owner_id: str,
    force_mock: bool = False,
    catalog: Optional[CatalogInterface] = None,
) -> UploadCoordinator:
    return UploadFactory.create_coordinator(
        owner_id=owner_id,
        force_mock=force_mock,
        catalog=catalog,
    )
