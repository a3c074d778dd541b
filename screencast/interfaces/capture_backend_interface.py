"""
Capture Backend Interface

Abstract interface for platform capture backends, plus the error taxonomy
shared by the whole package.

A backend knows how ONE platform talks to FFmpeg:
- which screen-grab input format to use (gdigrab, avfoundation, x11grab)
- which video/audio sources to use when the caller gives none
- how an audio device becomes FFmpeg input arguments
- how to list audio devices and parse that listing

The command builder and device enumerator depend on this abstraction, not on
platform checks, so adding a platform means adding one implementation.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, List, Optional

from screencast.constants import ErrorCode


class CaptureBackend(ABC):
    """
    Abstract base class for platform capture backends.

    Backends are stateless descriptors: everything is defined on the class,
    so one instance per platform is all that is ever needed.
    """

    #: sys.platform value this backend serves
    platform: str = ""

    #: FFmpeg screen-grab input format (-f)
    input_format: str = ""

    #: Video source used when RecorderConfig.video_source is None
    default_video_source: str = ""

    #: Audio source used when RecorderConfig.audio_source is None
    #: (None means the platform has no usable audio input)
    default_audio_source: Optional[str] = None

    @abstractmethod
    def audio_input_args(self, device: str) -> List[str]:
        """
        Map an audio device to the platform's FFmpeg audio input arguments.

        Args:
            device: Audio device name or index (already escaped)

        Returns:
            Ordered argument fragment, e.g. ["-f", "pulse", "-i", "default"]
        """
        pass

    @abstractmethod
    def device_list_command(self) -> List[str]:
        """
        Command that lists audio devices on this platform.

        Must be read-only and non-interactive.

        Returns:
            Full argument list including the executable
        """
        pass

    @abstractmethod
    def parse_devices(self, output: str) -> List[str]:
        """
        Extract audio device names from the listing command's output.

        Args:
            output: Combined stdout/stderr text of device_list_command()

        Returns:
            Device names in the order they appear (may contain duplicates)
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(platform={self.platform!r})"


class RecordingError(Exception):
    """
    Base exception for every recorder failure.

    Every failure a caller can observe is exactly one RecordingError carrying
    a numeric code (see ErrorCode), a message and the time it was created.
    """

    def __init__(self, code: int, message: str):
        super().__init__(f"[{code}] {message}")
        self.code = code
        self.message = message
        self.timestamp = datetime.now()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code}, message={self.message!r})"


class ValidationError(RecordingError):
    """Invalid configuration value or unsupported platform (400)"""

    def __init__(self, field: str, value: Any, message: Optional[str] = None):
        super().__init__(ErrorCode.INVALID, message or f"Invalid {field}: {value!r}")
        self.field = field
        self.value = value


class NotFoundError(RecordingError):
    """Stop requested while no recording is active (404)"""

    def __init__(self, message: str = "No active recording to stop."):
        super().__init__(ErrorCode.NOT_FOUND, message)


class ConflictError(RecordingError):
    """Start requested while a recording is already active (409)"""

    def __init__(self, message: str = "Recording is already in progress."):
        super().__init__(ErrorCode.CONFLICT, message)


class InternalError(RecordingError):
    """Command build, spawn or FFmpeg runtime failure (500 or exit code)"""

    def __init__(self, message: str, code: int = ErrorCode.INTERNAL):
        super().__init__(code, message)
