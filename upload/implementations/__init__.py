"""
Implementations Package

Concrete transport implementations.
"""

from upload.implementations.http_transport import HttpTransport
from upload.implementations.mock_transport import MockTransport

__all__ = [
    "HttpTransport",
    "MockTransport",
]
