"""
Interfaces Package

Abstract interface for processing request clients.
"""

from processing.interfaces.processing_interface import ProcessingClientInterface

__all__ = [
    "ProcessingClientInterface",
]
