"""
Credential Providers

Bearer tokens for the transfer and processing endpoints.

Flow:
1. Static token (UPLOAD_AUTH_TOKEN in .env) for service accounts / CI
2. Authorized-user token file refreshed with google-auth at runtime
3. Missing or unrefreshable credential -> AuthError (never retried here)
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import List, Optional

from google.auth.exceptions import GoogleAuthError, RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials

from core.errors import AuthError

# Scope needed to write objects into the storage bucket
STORAGE_SCOPES = [
    "https://www.googleapis.com/auth/devstorage.read_write",
]


class CredentialProvider(ABC):
    """Source of bearer tokens"""

    @abstractmethod
    def get_token(self) -> str:
        """
        Return a currently valid bearer token.

        Raises:
            AuthError: If no valid credential is available
        """

    def is_authenticated(self) -> bool:
        """True if get_token() would succeed right now"""
        try:
            self.get_token()
            return True
        except AuthError:
            return False


class StaticTokenProvider(CredentialProvider):
    """Fixed token, e.g. from the environment"""

    def __init__(self, token: str):
        self.logger = logging.getLogger(__name__)
        self._token = token

    def get_token(self) -> str:
        if not self._token:
            raise AuthError("No auth token configured (set UPLOAD_AUTH_TOKEN)")
        return self._token


class GoogleCredentialProvider(CredentialProvider):
    """
    Manages Google OAuth 2.0 user credentials.

    This class:
    - Loads credentials from token.json
    - Refreshes expired tokens automatically
    - Persists refreshed tokens back to token.json
    """

    def __init__(self, token_path: str, scopes: Optional[List[str]] = None):
        """
        Initialize provider.

        Args:
            token_path: Path to authorized-user token.json
            scopes: OAuth scopes (default: storage read/write)

        Raises:
            AuthError: If the token file does not exist or is malformed
        """
        self.logger = logging.getLogger(__name__)
        self.token_path = token_path
        self.scopes = scopes or STORAGE_SCOPES

        if not os.path.exists(token_path):
            raise AuthError(f"Token file not found: {token_path}")

        try:
            self.credentials = Credentials.from_authorized_user_file(
                token_path,
                self.scopes,
            )
        except (ValueError, OSError) as e:
            raise AuthError(f"Invalid token file {token_path}: {e}") from e

        self.logger.info("Google credential provider initialized")

    def get_token(self) -> str:
        if not self.credentials.valid:
            self._refresh()
        return self.credentials.token

    def _refresh(self) -> None:
        """Refresh expired token or raise AuthError"""
        if not (self.credentials.expired and self.credentials.refresh_token):
            raise AuthError("Credentials invalid and cannot be refreshed")

        self.logger.info("Access token expired, refreshing...")
        try:
            self.credentials.refresh(Request())
        except (RefreshError, GoogleAuthError) as e:
            raise AuthError(f"Token refresh failed: {e}") from e

        self._save_credentials()

    def _save_credentials(self) -> None:
        """Persist refreshed token (non-critical)"""
        try:
            with open(self.token_path, "w") as f:
                f.write(self.credentials.to_json())
            self.logger.debug(f"Credentials saved to {self.token_path}")
        except OSError as e:
            self.logger.warning(f"Failed to save refreshed token: {e}")
