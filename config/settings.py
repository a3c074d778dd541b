"""
Central Configuration File

ALL configuration values live here. This is the single source of truth.

Guidelines:
- Machine-specific overrides (ffmpeg location, log directory) go in .env
- Import these settings in modules: from config.settings import FFMPEG_BINARY
- RecorderConfig defaults come from here, per-recording values are passed in code
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# =============================================================================
# EXTERNAL BINARIES
# =============================================================================

# FFmpeg executable used for capture and for device listing on Windows/macOS
FFMPEG_BINARY = os.getenv("FFMPEG_BINARY", "ffmpeg")

# PulseAudio control tool used for device listing on Linux
PACTL_BINARY = os.getenv("PACTL_BINARY", "pactl")

# =============================================================================
# RECORDING DEFAULTS
# =============================================================================

DEFAULT_OUTPUT_PATH = "./recordings"
DEFAULT_FILE_NAME = "output"
DEFAULT_FORMAT = "mp4"
DEFAULT_FRAME_RATE = 30
DEFAULT_CODEC = "libx264"
DEFAULT_PRESET = "ultrafast"  # FFmpeg encoding preset
DEFAULT_RESOLUTION = "1920x1080"
DEFAULT_VOLUME = 1.0  # 1.0 = unchanged, no volume filter emitted
DEFAULT_INCLUDE_UUID = True
DEFAULT_RECORD_AUDIO = False
DEFAULT_OVERWRITE = True  # -y (overwrite) vs -n (never overwrite)

# Pixel format written to the output (widest player compatibility)
OUTPUT_PIXEL_FORMAT = "yuv420p"

# =============================================================================
# PROCESS SUPERVISION
# =============================================================================

# Seconds to wait after the graceful interrupt before force killing FFmpeg.
# FFmpeg needs this long to flush buffers and write the container trailer.
STOP_TIMEOUT_SECONDS = float(os.getenv("STOP_TIMEOUT_SECONDS", "5.0"))

# Device listing is a short, read-only invocation
DEVICE_LIST_TIMEOUT_SECONDS = float(os.getenv("DEVICE_LIST_TIMEOUT_SECONDS", "10.0"))

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))
LOG_FILE = "screencast.log"
LOG_BACKUP_COUNT = 7  # Days of rotated logs to keep
