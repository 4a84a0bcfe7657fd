"""
Processing Module

Fire-and-forget processing job requests for uploaded videos.

Public API:
    - ProcessingRequest / ProcessingResult: Request and accept/reject result
    - ProcessingStatus: Status codes
    - ProcessingClientInterface: Client contract
    - create_processing_client: Factory function

Usage:
    from processing import ProcessingRequest, create_processing_client

    client = create_processing_client()
    result = client.request_processing(
        ProcessingRequest(video_url=url, video_id=video_id, user_id=owner),
    )
"""

from processing.constants import ProcessingStatus
from processing.factory import ProcessingClientFactory, create_processing_client
from processing.interfaces.processing_interface import ProcessingClientInterface
from processing.models.processing_request import ProcessingRequest, ProcessingResult

__all__ = [
    "ProcessingClientFactory",
    "ProcessingClientInterface",
    "ProcessingRequest",
    "ProcessingResult",
    "ProcessingStatus",
    "create_processing_client",
]
