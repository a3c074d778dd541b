"""
Recording Session Model

Mutable runtime state of one ScreenRecorder: Idle or Recording, plus the
FFmpeg process it owns while recording.
"""

import subprocess
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from screencast.constants import RecordingState


@dataclass
class RecordingSession:
    """
    Session state owned exclusively by ScreenRecorder.

    The process handle, output file and state always change together:
    begin() and end() are the only transitions, and the recorder calls them
    while holding its lock.
    """

    state: RecordingState = RecordingState.IDLE
    process: Optional[subprocess.Popen] = None
    output_file: Optional[Path] = None
    started_at: Optional[float] = None

    # Set when the recorder itself asked FFmpeg to stop (one event per run)
    stop_requested: Optional[threading.Event] = None

    @property
    def is_recording(self) -> bool:
        return self.state == RecordingState.RECORDING

    def begin(self, process: subprocess.Popen, output_file: Path) -> threading.Event:
        """
        Idle -> Recording.

        Returns:
            The stop-requested event for this run
        """
        self.stop_requested = threading.Event()
        self.process = process
        self.output_file = output_file
        self.started_at = time.time()
        self.state = RecordingState.RECORDING
        return self.stop_requested

    def end(self) -> Optional[subprocess.Popen]:
        """
        Recording -> Idle, releasing the process handle.

        Returns:
            The process that was owned (None if none was)
        """
        process = self.process
        self.process = None
        self.output_file = None
        self.started_at = None
        self.stop_requested = None
        self.state = RecordingState.IDLE
        return process

    def get_elapsed_time(self) -> float:
        """Seconds since recording started, 0.0 when idle"""
        if not self.is_recording or self.started_at is None:
            return 0.0
        return time.time() - self.started_at
