"""
Models Package

Processing request/response data structures.
"""

from processing.models.processing_request import ProcessingRequest, ProcessingResult

__all__ = [
    "ProcessingRequest",
    "ProcessingResult",
]
