"""
Screencast Models Package

Data classes for recorder configuration and session state.
"""

from screencast.models.recorder_config import RecorderConfig
from screencast.models.recording_session import RecordingSession

__all__ = [
    "RecorderConfig",
    "RecordingSession",
]
