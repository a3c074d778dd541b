"""
Backend Factory

Factory pattern for selecting the capture backend of a platform.
Single place that maps a platform identifier to its implementation, so no
other module branches on the operating system.
"""

import logging
import sys
from typing import Dict, List, Optional, Type

from screencast.implementations.avfoundation_backend import AVFoundationBackend
from screencast.implementations.gdigrab_backend import GdigrabBackend
from screencast.implementations.x11grab_backend import X11GrabBackend
from screencast.interfaces.capture_backend_interface import (
    CaptureBackend,
    ValidationError,
)


class BackendFactory:
    """
    Factory for platform capture backends.

    Usage:
        # Backend for the running interpreter's platform
        backend = BackendFactory.create_backend()

        # Explicit platform (tests, cross-platform command previews)
        backend = BackendFactory.create_backend("darwin")
    """

    _logger = logging.getLogger(__name__)

    # Lookup table: sys.platform value -> backend class
    _BACKENDS: Dict[str, Type[CaptureBackend]] = {
        GdigrabBackend.platform: GdigrabBackend,
        AVFoundationBackend.platform: AVFoundationBackend,
        X11GrabBackend.platform: X11GrabBackend,
    }

    @classmethod
    def create_backend(cls, platform: Optional[str] = None) -> CaptureBackend:
        """
        Create the capture backend for a platform.

        Args:
            platform: sys.platform style identifier (None = current platform)

        Returns:
            CaptureBackend implementation

        Raises:
            ValidationError: If the platform has no backend (code 400)
        """
        platform = platform or sys.platform
        backend_class = cls._BACKENDS.get(platform)

        if backend_class is None:
            cls._logger.error(f"No capture backend for platform: {platform}")
            raise ValidationError(
                "platform",
                platform,
                f"Unsupported platform: {platform}",
            )

        cls._logger.debug(f"Selected {backend_class.__name__} for {platform}")
        return backend_class()

    @classmethod
    def supported_platforms(cls) -> List[str]:
        """Platform identifiers that have a backend"""
        return sorted(cls._BACKENDS)

    @classmethod
    def is_supported(cls, platform: Optional[str] = None) -> bool:
        """Check if a platform (None = current) has a backend"""
        return (platform or sys.platform) in cls._BACKENDS


# Convenience function for quick creation

def create_backend(platform: Optional[str] = None) -> CaptureBackend:
    """
    Quick backend creation.

    Example:
        backend = create_backend()
    """
    return BackendFactory.create_backend(platform)
