"""
Screencast Interfaces Package

Exposes the capture backend abstraction and the error taxonomy.
"""

from screencast.interfaces.capture_backend_interface import (
    CaptureBackend,
    ConflictError,
    InternalError,
    NotFoundError,
    RecordingError,
    ValidationError,
)

# Public API
__all__ = [
    # Interface
    "CaptureBackend",
    "ConflictError",
    "InternalError",
    "NotFoundError",
    # Exceptions
    "RecordingError",
    "ValidationError",
]
