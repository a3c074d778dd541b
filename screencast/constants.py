"""
Screencast Constants

Enums, allowed values and validation patterns for the screen recorder.
Tunable defaults (paths, timeouts, binaries) live in config/settings.py.
"""

import os
import re
import signal
from enum import Enum

# =============================================================================
# SESSION STATE
# =============================================================================


class RecordingState(Enum):
    """Recording session states"""

    IDLE = "idle"
    RECORDING = "recording"


# =============================================================================
# ERROR CODES
# =============================================================================


class ErrorCode:
    """Error categories shared by every RecordingError"""

    INVALID = 400  # Bad configuration or unsupported platform
    NOT_FOUND = 404  # Stop requested with no active recording
    CONFLICT = 409  # Start requested while already recording
    INTERNAL = 500  # Build/spawn failure or FFmpeg failure


# =============================================================================
# ENCODER OPTIONS
# =============================================================================

ALLOWED_CODECS = ("libx264", "libvpx", "mpeg4")
ALLOWED_PRESETS = ("ultrafast", "fast", "medium", "slow")

MIN_VOLUME = 0.0
MAX_VOLUME = 2.0

# =============================================================================
# VALIDATION PATTERNS
# =============================================================================
# ASCII only, used with fullmatch(): these values end up in file names and
# FFmpeg arguments

RESOLUTION_PATTERN = re.compile(r"\d{1,5}x\d{1,5}", re.ASCII)
FILE_NAME_PATTERN = re.compile(r"[\w\-.]+", re.ASCII)
OUTPUT_PATH_PATTERN = re.compile(r"[\w\-./]+", re.ASCII)
FORMAT_PATTERN = re.compile(r"[A-Za-z0-9]+")

# =============================================================================
# PLATFORM IDENTIFIERS
# =============================================================================
# Values of sys.platform


class Platform:
    WINDOWS = "win32"
    MACOS = "darwin"
    LINUX = "linux"


# =============================================================================
# PROCESS CONTROL
# =============================================================================

# FFmpeg treats "q" on stdin as its documented quit command
FFMPEG_QUIT_COMMAND = "q\n"

# Graceful interrupt. On Windows FFmpeg is started in its own process group
# and receives CTRL_BREAK, which it handles like Ctrl+C.
if os.name == "nt":
    GRACEFUL_STOP_SIGNAL = signal.CTRL_BREAK_EVENT
else:
    GRACEFUL_STOP_SIGNAL = signal.SIGINT

# Marker FFmpeg's dshow lister puts on alternative (moniker) device names
DEVICE_ALIAS_MARKER = "@device"
