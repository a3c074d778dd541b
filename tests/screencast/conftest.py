"""
Screencast Test Configuration and Fixtures

Shared fixtures for screencast tests.

FFmpeg is never started: FakeProcess stands in for subprocess.Popen with
just enough behavior (stderr stream, signals, exit codes) to drive the
recorder's state machine.
"""

import itertools
import queue
import subprocess
import threading
import time

import pytest

from screencast.controllers.screen_recorder import ScreenRecorder
from screencast.models.recorder_config import RecorderConfig

# =============================================================================
# FAKE PROCESS
# =============================================================================

_pids = itertools.count(1000)


class FakeStdin:
    """Records what the recorder writes to FFmpeg's stdin"""

    def __init__(self):
        self.written = []
        self.closed = False

    def write(self, data):
        if self.closed:
            raise ValueError("I/O operation on closed file")
        self.written.append(data)
        return len(data)

    def flush(self):
        if self.closed:
            raise ValueError("I/O operation on closed file")

    def close(self):
        self.closed = True


class FakeProcess:
    """
    Test double for subprocess.Popen running FFmpeg.

    - Lines pushed with emit() come out of .stderr
    - A graceful signal ends the process with code 255 (FFmpeg's exit code
      after an interrupt) unless ignore_signals is set
    - exit(code) simulates FFmpeg ending on its own
    """

    def __init__(self, args, popen_kwargs=None, ignore_signals=False, stderr_lines=()):
        self.args = args
        self.popen_kwargs = popen_kwargs or {}
        self.pid = next(_pids)
        self.returncode = None
        self.ignore_signals = ignore_signals
        self.signals = []
        self.killed = False
        self.stdin = FakeStdin()

        self._lines = queue.Queue()
        self._exited = threading.Event()
        for line in stderr_lines:
            self.emit(line)
        self.stderr = self._stderr_lines()

    def _stderr_lines(self):
        while True:
            try:
                yield self._lines.get(timeout=0.01)
            except queue.Empty:
                if self._exited.is_set() and self._lines.empty():
                    return

    def emit(self, line):
        self._lines.put(line + "\n")

    def exit(self, code):
        if self.returncode is None:
            self.returncode = code
        self._exited.set()

    @property
    def has_exited(self):
        return self._exited.is_set()

    def send_signal(self, sig):
        self.signals.append(sig)
        if not self.ignore_signals:
            self.exit(255)

    def terminate(self):
        self.exit(-15)

    def kill(self):
        self.killed = True
        self.exit(-9)

    def poll(self):
        return self.returncode

    def wait(self, timeout=None):
        if not self._exited.wait(timeout):
            raise subprocess.TimeoutExpired(self.args, timeout)
        return self.returncode


class FakeProcessFactory:
    """Callable replacing subprocess.Popen; remembers every spawn"""

    def __init__(self):
        self.processes = []
        self.process_options = {}
        self.spawn_error = None

    def __call__(self, args, **kwargs):
        if self.spawn_error is not None:
            raise self.spawn_error
        process = FakeProcess(args, popen_kwargs=kwargs, **self.process_options)
        self.processes.append(process)
        return process

    @property
    def spawn_count(self):
        return len(self.processes)

    @property
    def last(self):
        return self.processes[-1] if self.processes else None

    def exit_all(self):
        for process in self.processes:
            process.exit(0)


# =============================================================================
# RECORDER FIXTURES
# =============================================================================


@pytest.fixture
def process_factory():
    """
    Provide a FakeProcessFactory.

    Usage:
        def test_spawn(process_factory):
            recorder = ScreenRecorder(config, process_factory=process_factory)
    """
    factory = FakeProcessFactory()
    yield factory
    factory.exit_all()


@pytest.fixture
def output_dir(tmp_path):
    """Directory for recordings, not created yet"""
    return tmp_path / "recordings"


@pytest.fixture
def recorder_config(output_dir):
    """Config writing a predictable file name into output_dir"""
    return RecorderConfig(
        output_path=str(output_dir),
        file_name="test_recording",
        include_uuid=False,
    )


@pytest.fixture
def recorder(recorder_config, process_factory):
    """
    Provide a Linux ScreenRecorder backed by fake processes.

    Usage:
        def test_record(recorder):
            recorder.start()
    """
    screen_recorder = ScreenRecorder(
        recorder_config,
        platform="linux",
        process_factory=process_factory,
        stop_timeout=0.2,
    )
    yield screen_recorder
    process_factory.exit_all()
    screen_recorder.cleanup()


# =============================================================================
# HELPERS
# =============================================================================


@pytest.fixture
def wait_until():
    """
    Poll a condition set by a background thread.

    Usage:
        assert wait_until(lambda: not recorder.is_recording)
    """

    def _wait_until(condition, timeout=2.0):
        deadline = time.time() + timeout
        while time.time() < deadline:
            if condition():
                return True
            time.sleep(0.01)
        return condition()

    return _wait_until


@pytest.fixture
def callback_tracker():
    """
    Provide helper for tracking callback calls.

    Usage:
        def test_callback(recorder, callback_tracker):
            recorder.on_stop = callback_tracker.track
            # ... trigger stop ...
            assert callback_tracker.was_called()
    """

    class CallbackTracker:
        def __init__(self):
            self.calls = []
            self._lock = threading.Lock()

        def track(self, *args, **kwargs):
            """Record a callback invocation"""
            with self._lock:
                self.calls.append({"args": args, "kwargs": kwargs})

        def was_called(self) -> bool:
            """Check if callback was called"""
            return len(self.calls) > 0

        def get_call_count(self) -> int:
            """Get number of times callback was called"""
            return len(self.calls)

        def get_last_call(self):
            """Get arguments from last call"""
            return self.calls[-1] if self.calls else None

        def first_args(self):
            """First positional argument of every call"""
            return [call["args"][0] for call in self.calls]

        def reset(self):
            """Clear call history"""
            self.calls.clear()

    return CallbackTracker()


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_configure(config):
    """
    Configure pytest with custom markers for screencast tests.
    """
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "unit_integration: Integration tests")
    config.addinivalue_line("markers", "requires_ffmpeg: Tests requiring FFmpeg")
