"""
Screencast Controllers Package

Exposes the recorder and the audio device enumerator.
"""

from screencast.controllers.device_enumerator import (
    list_audio_devices,
    list_audio_devices_async,
)
from screencast.controllers.screen_recorder import ScreenRecorder

# Public API
__all__ = [
    "ScreenRecorder",
    "list_audio_devices",
    "list_audio_devices_async",
]
