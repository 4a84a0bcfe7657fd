"""
Processing Request Models

Payload sent to the processing endpoint and the accept/reject result.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from processing.constants import ProcessingStatus


@dataclass(frozen=True)
class ProcessingRequest:
    """
    Job request referencing an uploaded video.

    Attributes:
        video_url: Download URL of the original upload
        video_id: Derived identifier (catalog key)
        user_id: Owner of the video
        prompt: Optional free-text instruction for the processing service
    """

    video_url: str
    video_id: str
    user_id: str
    prompt: str = ""

    def to_payload(self) -> Dict[str, Any]:
        """JSON body; prompt is omitted when empty"""
        payload = {
            "videoUrl": self.video_url,
            "videoId": self.video_id,
            "userId": self.user_id,
        }
        if self.prompt and self.prompt.strip():
            payload["prompt"] = self.prompt.strip()
        return payload


@dataclass
class ProcessingResult:
    """
    Result of a processing request.

    Attributes:
        accepted: True if the endpoint answered 2xx
        status: Processing status code
        status_code: HTTP status (None if no response was received)
        error_message: Error description (if rejected)
    """

    accepted: bool
    status: ProcessingStatus = ProcessingStatus.ACCEPTED
    status_code: Optional[int] = None
    error_message: Optional[str] = None
