"""
Video Identifier Derivation

The derived identifier is used both as the remote object name
(videos/{video_id}) and as the catalog key. It is built from
(owner_id, timestamp_ms, basename) so that two devices never need to
coordinate: different inputs always give different identifiers, and
replaying the same inputs gives the same identifier.
"""

import hashlib
import json
import re

from config.settings import VIDEO_ID_DIGEST_LENGTH

# Characters kept in the readable filename part of an identifier
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def basename(filename: str) -> str:
    """
    Strip any directory part (POSIX or Windows separators).

    Example:
        basename("C:\\clips\\match.mp4")  # "match.mp4"
    """
    return re.split(r"[/\\]", filename)[-1]


def safe_basename(filename: str) -> str:
    """
    Make a basename safe for object names by replacing invalid characters.

    Example:
        safe_basename("my clip (1).mp4")  # "my_clip__1_.mp4"
    """
    safe = _UNSAFE_CHARS.sub("_", basename(filename)).strip(".")
    return safe or "video"


def derive_video_id(owner_id: str, timestamp_ms: int, filename: str) -> str:
    """
    Derive the collision-resistant identifier for an upload.

    Format: "{timestamp_ms}-{digest}-{safe_basename}"

    The digest covers the exact triple, so inputs that sanitize to the same
    readable name (or owners that only differ in case) still diverge.

    Args:
        owner_id: Uploading user
        timestamp_ms: Upload start time in milliseconds since the epoch
        filename: Asset name (directories are ignored)

    Returns:
        Identifier string

    Example:
        derive_video_id("user-1", 1718000000000, "clip.mp4")
        # "1718000000000-3f9a0c2b7d1e4a55-clip.mp4"
    """
    name = basename(filename)
    canonical = json.dumps([owner_id, int(timestamp_ms), name], ensure_ascii=False)
    digest = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
    digest = digest[:VIDEO_ID_DIGEST_LENGTH]

    return f"{int(timestamp_ms)}-{digest}-{safe_basename(name)}"
