"""
Interfaces Package

Abstract interfaces for object transports.
"""

from upload.interfaces.transport_interface import (
    TransferHandle,
    TransferListener,
    TransferRequest,
    TransportInterface,
)

__all__ = [
    "TransferHandle",
    "TransferListener",
    "TransferRequest",
    "TransportInterface",
]
