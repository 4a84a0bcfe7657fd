"""
Media Asset Model

A local video the user picked for upload.
"""

import mimetypes
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union
from urllib.parse import unquote, urlparse


def _uri_to_path(uri: str) -> Path:
    """Filesystem path for a local path or file:// URI"""
    if uri.startswith("file://"):
        return Path(unquote(urlparse(uri).path))
    return Path(uri)


@dataclass(frozen=True)
class MediaAsset:
    """
    Candidate local file.

    Ephemeral: discarded once its upload session reaches a terminal state.
    """

    uri: str  # Local path or file:// URI
    mime_type: str
    display_name: str
    size_bytes: int = 0

    @property
    def local_path(self) -> Path:
        """Filesystem path behind uri"""
        return _uri_to_path(self.uri)

    def exists(self) -> bool:
        """Check if the referenced file is still on disk"""
        try:
            return self.local_path.is_file()
        except OSError:
            return False

    @classmethod
    def from_path(
        cls,
        path: Union[str, Path],
        mime_type: str = "",
    ) -> "MediaAsset":
        """
        Build an asset from a local path or file:// URI.

        Args:
            path: File to upload
            mime_type: Override MIME type (default: guessed from extension)

        Example:
            asset = MediaAsset.from_path("/videos/clip.mp4")
            # MediaAsset(mime_type="video/mp4", display_name="clip.mp4", ...)

            asset = MediaAsset.from_path("file:///videos/clip.mp4")
            # uri keeps the URI, local_path is /videos/clip.mp4
        """
        uri = str(path)
        local = _uri_to_path(uri)
        guessed, _ = mimetypes.guess_type(local.name)

        try:
            size = os.path.getsize(local)
        except OSError:
            size = 0

        return cls(
            uri=uri,
            mime_type=mime_type or guessed or "application/octet-stream",
            display_name=local.name,
            size_bytes=size,
        )
