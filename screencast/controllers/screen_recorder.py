"""
Screen Recorder

Owns one FFmpeg screen-capture process: start() spawns it, stop() asks it
to finish the file, and a supervision thread turns whatever FFmpeg does in
between into callbacks.

State machine:
    IDLE --start()--> RECORDING --stop() / FFmpeg exits--> IDLE

Errors:
- Configuration and platform problems raise ValidationError (400) from the
  constructor, before anything runs.
- Everything after that is reported through on_error, never raised:
  404 stop while idle, 409 start while recording, 500 build/spawn failure
  or FFmpeg failure (or FFmpeg's own exit code).
"""

import logging
import os
import subprocess
import sys
import threading
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from config.settings import FFMPEG_BINARY, STOP_TIMEOUT_SECONDS
from screencast.constants import (
    FFMPEG_QUIT_COMMAND,
    GRACEFUL_STOP_SIGNAL,
    ErrorCode,
    RecordingState,
)
from screencast.factory import BackendFactory
from screencast.interfaces.capture_backend_interface import (
    ConflictError,
    InternalError,
    NotFoundError,
    RecordingError,
)
from screencast.models.recorder_config import RecorderConfig
from screencast.models.recording_session import RecordingSession
from screencast.utils.command_builder import build_command, format_command
from screencast.utils.diagnostics import is_failure_line
from screencast.utils.recording_utils import (
    ensure_output_dir,
    format_duration,
    format_file_size,
    get_file_path,
)


class ScreenRecorder:
    """
    Records the screen (and optionally audio) to a file with FFmpeg.

    Features:
    - Platform backend chosen once, at construction
    - Non-blocking start/stop, FFmpeg runs in a child process
    - Graceful stop (interrupt + "q"), forced kill after stop_timeout
    - Callbacks for start, stop and errors

    Usage:
        recorder = ScreenRecorder(RecorderConfig(file_name="demo"))

        # Register callbacks
        recorder.on_error = lambda error: print(f"Failed: {error}")
        recorder.on_stop = lambda: print("Recording saved")

        recorder.start()
        # ... recording happens in background ...
        recorder.stop()

    Callbacks run on the calling thread for start()/stop() results and on
    the supervision thread for FFmpeg failures.
    """

    def __init__(
        self,
        config: Optional[RecorderConfig] = None,
        platform: Optional[str] = None,
        process_factory: Optional[Callable[..., subprocess.Popen]] = None,
        stop_timeout: float = STOP_TIMEOUT_SECONDS,
        ffmpeg_binary: str = FFMPEG_BINARY,
    ):
        """
        Initialize screen recorder.

        Args:
            config: Recording configuration (None = all defaults)
            platform: sys.platform style identifier (None = current platform)
            process_factory: Callable used to spawn FFmpeg (default Popen)
            stop_timeout: Seconds between graceful stop and forced kill
            ffmpeg_binary: FFmpeg executable

        Raises:
            ValidationError: Unsupported platform (400); configs validate
                themselves when built
        """
        self.logger = logging.getLogger(__name__)

        self.config = config if config is not None else RecorderConfig()

        # One backend for the recorder's lifetime, never re-selected
        self.backend = BackendFactory.create_backend(platform)

        self.stop_timeout = stop_timeout
        self.ffmpeg_binary = ffmpeg_binary
        self._process_factory = process_factory or subprocess.Popen

        # Session state, only touched while holding _lock
        self._session = RecordingSession()
        self._lock = threading.Lock()
        self._monitor_thread: Optional[threading.Thread] = None

        # Callbacks for events
        self.on_start: Optional[Callable[[Path], None]] = None
        self.on_stop: Optional[Callable[[], None]] = None
        self.on_error: Optional[Callable[[RecordingError], None]] = None

        self.logger.info(
            f"Screen Recorder initialized "
            f"(platform: {self.backend.platform}, input: {self.backend.input_format}, "
            f"resolution: {self.config.resolution}, fps: {self.config.frame_rate})",
        )

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    @property
    def state(self) -> RecordingState:
        return self._session.state

    @property
    def is_recording(self) -> bool:
        return self._session.is_recording

    def start(self) -> bool:
        """
        Start recording.

        Returns immediately; FFmpeg keeps running in the background.

        Returns:
            True if FFmpeg was spawned, False otherwise (reason sent to on_error)
        """
        with self._lock:
            if self._session.is_recording:
                error: Optional[RecordingError] = ConflictError()
            else:
                error = self._launch()
            output_file = self._session.output_file

        if error is not None:
            self.logger.error(f"Cannot start recording: {error}")
            self._trigger_error_callback(error)
            return False

        self._trigger_start_callback(output_file)
        return True

    def stop(self) -> bool:
        """
        Stop recording.

        Sends FFmpeg one graceful interrupt and its "q" quit command, then
        releases the process. FFmpeg finishes writing the file on its own;
        if it is still running after stop_timeout seconds it is killed.

        Returns:
            True if a recording was stopped, False if none was active
        """
        with self._lock:
            if not self._session.is_recording:
                process = None
            else:
                output_file = self._session.output_file
                elapsed = self._session.get_elapsed_time()
                self._session.stop_requested.set()
                process = self._session.end()

        if process is None:
            error = NotFoundError()
            self.logger.warning(f"Cannot stop: {error}")
            self._trigger_error_callback(error)
            return False

        self.logger.info(f"Stopping recording ({format_duration(elapsed)}): {output_file}")

        self._interrupt(process)
        self._schedule_kill(process)
        self._echo("Recording Finished")

        self._trigger_stop_callback()
        return True

    def cleanup(self) -> None:
        """
        Stop any active recording and wait briefly for supervision to end.

        Always call this when done with the recorder!
        """
        self.logger.info("Cleaning up Screen Recorder")

        if self.is_recording:
            self.stop()

        if self._monitor_thread and self._monitor_thread.is_alive():
            self._monitor_thread.join(timeout=self.stop_timeout + 1.0)

        self.logger.info("Screen Recorder cleanup complete")

    # =========================================================================
    # STATUS AND INFO
    # =========================================================================

    def get_output_file(self) -> Optional[Path]:
        """Path of the file being recorded, None when idle"""
        return self._session.output_file

    def get_elapsed_time(self) -> float:
        """Seconds since recording started, 0.0 when idle"""
        return self._session.get_elapsed_time()

    def get_status(self) -> Dict[str, Any]:
        """
        Get recorder status.

        Returns:
            Dictionary with status information
        """
        process = self._session.process
        output_file = self._session.output_file
        return {
            "state": self.state.value,
            "platform": self.backend.platform,
            "output_file": str(output_file) if output_file else None,
            "pid": process.pid if process is not None else None,
            "elapsed_time": self.get_elapsed_time(),
        }

    def build_command(self, output_file: Path) -> List[str]:
        """FFmpeg command this recorder would run for output_file"""
        return build_command(self.config, self.backend, output_file, self.ffmpeg_binary)

    # =========================================================================
    # PROCESS MANAGEMENT
    # =========================================================================

    def _launch(self) -> Optional[RecordingError]:
        """
        Resolve output path, build the command and spawn FFmpeg.

        Caller holds _lock. On any failure nothing is spawned and the session
        stays IDLE.

        Returns:
            None on success, the error otherwise
        """
        try:
            ensure_output_dir(self.config.output_path)
        except OSError as e:
            return InternalError(f"Cannot create output directory: {e}")

        output_file = get_file_path(
            self.config.output_path,
            self.config.file_name,
            self.config.format,
            self.config.include_uuid,
        )

        try:
            command = self.build_command(output_file)
        except Exception as e:
            return InternalError(str(e))

        self.logger.info(f"Starting recording: {output_file}")
        self.logger.debug(f"FFmpeg command: {format_command(command)}")
        self._echo(f"Starting recording: {output_file}")
        self._echo(f"FFmpeg Command: {format_command(command)}")

        popen_kwargs: Dict[str, Any] = {
            "stdin": subprocess.PIPE,
            "stdout": None if self.config.verbose else subprocess.DEVNULL,
            "stderr": subprocess.PIPE,
            "text": True,
            "encoding": "utf-8",
            "errors": "replace",
        }
        if os.name == "nt":
            # Own process group so CTRL_BREAK reaches FFmpeg only
            popen_kwargs["creationflags"] = subprocess.CREATE_NEW_PROCESS_GROUP

        try:
            process = self._process_factory(command, **popen_kwargs)
        except (OSError, ValueError) as e:
            return InternalError(f"Failed to start FFmpeg ({self.ffmpeg_binary}): {e}")

        stop_requested = self._session.begin(process, output_file)
        self._start_monitoring(process, stop_requested)

        self.logger.info(f"Recording started (PID: {process.pid})")
        return None

    def _interrupt(self, process: subprocess.Popen) -> None:
        """Graceful shutdown: one interrupt signal plus FFmpeg's quit command"""
        try:
            process.send_signal(GRACEFUL_STOP_SIGNAL)
        except (OSError, ValueError) as e:
            self.logger.warning(f"Could not signal FFmpeg: {e}")

        if process.stdin is None:
            return

        try:
            process.stdin.write(FFMPEG_QUIT_COMMAND)
            process.stdin.flush()
        except (OSError, ValueError) as e:
            # FFmpeg already exited on the signal and closed its end
            self.logger.debug(f"Could not send quit command: {e}")

        try:
            process.stdin.close()
        except (OSError, ValueError) as e:
            self.logger.debug(f"Error closing FFmpeg stdin: {e}")

    def _schedule_kill(self, process: subprocess.Popen) -> None:
        """Kill FFmpeg if it is still running stop_timeout seconds from now"""
        timer = threading.Timer(self.stop_timeout, self._force_kill, args=(process,))
        timer.daemon = True
        timer.start()

    def _force_kill(self, process: subprocess.Popen) -> None:
        if process.poll() is not None:
            return

        self.logger.warning(
            f"FFmpeg didn't stop within {self.stop_timeout}s, force killing "
            f"(PID: {process.pid})",
        )
        try:
            process.kill()
        except OSError as e:
            self.logger.error(f"Failed to kill FFmpeg: {e}")

    # =========================================================================
    # SUPERVISION
    # =========================================================================

    def _start_monitoring(
        self,
        process: subprocess.Popen,
        stop_requested: threading.Event,
    ) -> None:
        self._monitor_thread = threading.Thread(
            target=self._monitor_worker,
            args=(process, stop_requested),
            daemon=True,
            name="FFmpegMonitor",
        )
        self._monitor_thread.start()
        self.logger.debug("Monitoring thread started")

    def _monitor_worker(
        self,
        process: subprocess.Popen,
        stop_requested: threading.Event,
    ) -> None:
        """
        Background thread that follows one FFmpeg process until it exits.

        Responsibilities:
        - Drain stderr (echoed when verbose) so FFmpeg never blocks on it
        - Report failure lines while the recording is wanted
        - On exit, release the session unless stop() already did
        - Report unexpected exits; exits caused by stop() are expected
        """
        if process.stderr is not None:
            try:
                for line in process.stderr:
                    line = line.rstrip()
                    if not line:
                        continue
                    self._echo(line)
                    if not stop_requested.is_set() and is_failure_line(line):
                        self.logger.error(f"FFmpeg reported: {line}")
                        self._trigger_error_callback(InternalError(line))
            except (OSError, ValueError) as e:
                self.logger.debug(f"Stopped reading FFmpeg output: {e}")

        returncode = process.wait()

        with self._lock:
            if self._session.process is process:
                self._session.end()

        if stop_requested.is_set():
            self.logger.info(f"FFmpeg exited after stop (code {returncode})")
            self._log_output_file(process)
            return

        if returncode != 0:
            code = returncode if returncode > 0 else ErrorCode.INTERNAL
            error = InternalError(f"FFmpeg exited unexpectedly with code {returncode}", code=code)
            self.logger.error(str(error))
            self._trigger_error_callback(error)
            return

        self.logger.info("FFmpeg finished recording on its own")
        self._trigger_stop_callback()

    def _log_output_file(self, process: subprocess.Popen) -> None:
        """Log size of the finished file (argv ends with the output path)"""
        args = getattr(process, "args", None)
        if not args:
            return
        output_file = Path(args[-1])
        if output_file.exists():
            size = format_file_size(output_file.stat().st_size)
            self.logger.info(f"Recording saved: {output_file} ({size})")
        else:
            self.logger.warning(f"Output file was not created: {output_file}")

    def _echo(self, text: str) -> None:
        """Console passthrough, only in verbose mode"""
        if self.config.verbose:
            print(text, file=sys.stderr, flush=True)

    # =========================================================================
    # CALLBACK TRIGGERS
    # =========================================================================

    def _trigger_start_callback(self, output_file: Optional[Path]) -> None:
        """Trigger on_start callback"""
        if self.on_start:
            try:
                self.on_start(output_file)
            except Exception as e:
                self.logger.error(f"Error in start callback: {e}")

    def _trigger_stop_callback(self) -> None:
        """Trigger on_stop callback"""
        if self.on_stop:
            try:
                self.on_stop()
            except Exception as e:
                self.logger.error(f"Error in stop callback: {e}")

    def _trigger_error_callback(self, error: RecordingError) -> None:
        """Trigger on_error callback"""
        if self.on_error:
            try:
                self.on_error(error)
            except Exception as e:
                self.logger.error(f"Error in error callback: {e}")
