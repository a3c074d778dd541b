"""
Screencast Module

Screen (and audio) recording through FFmpeg on Windows, macOS and Linux.

Public API:
    - ScreenRecorder: Start/stop a recording, callbacks for stop and errors
    - RecorderConfig: Validated, immutable recording configuration
    - list_audio_devices: Audio inputs usable as RecorderConfig.audio_source
    - BackendFactory: Platform capture backend selection
    - RecordingError: Base of all errors (code, message, timestamp)
    - RecordingState: State enumeration

Usage:
    from screencast import RecorderConfig, ScreenRecorder

    recorder = ScreenRecorder(RecorderConfig(file_name="demo", record_audio=True))
    recorder.on_error = lambda error: print(error.code, error.message)
    recorder.start()
    ...
    recorder.stop()
"""

from screencast.constants import RecordingState
from screencast.controllers.device_enumerator import (
    list_audio_devices,
    list_audio_devices_async,
)
from screencast.controllers.screen_recorder import ScreenRecorder
from screencast.factory import BackendFactory, create_backend
from screencast.interfaces.capture_backend_interface import (
    CaptureBackend,
    ConflictError,
    InternalError,
    NotFoundError,
    RecordingError,
    ValidationError,
)
from screencast.models.recorder_config import RecorderConfig

__all__ = [
    "BackendFactory",
    "CaptureBackend",
    "ConflictError",
    "InternalError",
    "NotFoundError",
    "RecorderConfig",
    "RecordingError",
    "RecordingState",
    "ScreenRecorder",
    "ValidationError",
    "create_backend",
    "list_audio_devices",
    "list_audio_devices_async",
]
