"""
Screencast Implementations Package

Exposes the per-platform capture backends.
"""

from screencast.implementations.avfoundation_backend import AVFoundationBackend
from screencast.implementations.gdigrab_backend import GdigrabBackend
from screencast.implementations.x11grab_backend import X11GrabBackend

# Public API
__all__ = [
    "AVFoundationBackend",
    "GdigrabBackend",
    "X11GrabBackend",
]
