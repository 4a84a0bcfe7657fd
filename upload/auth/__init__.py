"""
Authentication Package

Bearer token providers for the transfer and processing endpoints.
"""

from upload.auth.credentials import (
    CredentialProvider,
    GoogleCredentialProvider,
    StaticTokenProvider,
)

__all__ = [
    "CredentialProvider",
    "GoogleCredentialProvider",
    "StaticTokenProvider",
]
