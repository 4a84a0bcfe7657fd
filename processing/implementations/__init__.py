"""
Implementations Package

Concrete processing client implementations.
"""

from processing.implementations.http_processing_client import HttpProcessingClient
from processing.implementations.mock_processing_client import MockProcessingClient

__all__ = [
    "HttpProcessingClient",
    "MockProcessingClient",
]
