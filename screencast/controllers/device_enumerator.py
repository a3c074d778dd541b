"""
Audio Device Enumerator

Lists the audio input devices FFmpeg can record from on this machine.

Each platform backend supplies a read-only listing command and a parser:
- Windows: ffmpeg -list_devices true -f dshow -i dummy
- macOS:   ffmpeg -f avfoundation -list_devices true -i ""
- Linux:   pactl list sources short

The listing process is short-lived and independent of any recording.
"""

import logging
import subprocess
from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Optional

from config.settings import DEVICE_LIST_TIMEOUT_SECONDS
from screencast.constants import DEVICE_ALIAS_MARKER
from screencast.factory import BackendFactory
from screencast.interfaces.capture_backend_interface import (
    CaptureBackend,
    InternalError,
)
from screencast.utils.command_builder import format_command

logger = logging.getLogger(__name__)

# Listing runs off the caller's thread for list_audio_devices_async()
_executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="DeviceList")


def normalize_devices(names: List[str]) -> List[str]:
    """
    Drop alias entries, remove duplicates and sort.

    Example:
        normalize_devices(["b", "a", "b", "@device_cm_{...}"]) -> ["a", "b"]
    """
    return sorted({name for name in names if DEVICE_ALIAS_MARKER not in name})


def run_device_listing(
    backend: CaptureBackend,
    timeout: float = DEVICE_LIST_TIMEOUT_SECONDS,
) -> str:
    """
    Run the backend's listing command and return its combined output.

    FFmpeg always exits non-zero after listing (there is no real input), so
    the exit code is not checked.

    Raises:
        InternalError: Listing tool missing or timed out (500)
    """
    command = backend.device_list_command()
    logger.debug(f"Listing audio devices: {format_command(command)}")

    try:
        result = subprocess.run(
            command,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError as e:
        raise InternalError(f"Device listing tool not found: {command[0]}") from e
    except subprocess.TimeoutExpired as e:
        raise InternalError(f"Device listing timed out after {timeout}s") from e
    except OSError as e:
        raise InternalError(f"Device listing failed: {e}") from e

    return result.stdout or ""


def list_audio_devices(
    platform: Optional[str] = None,
    timeout: float = DEVICE_LIST_TIMEOUT_SECONDS,
) -> List[str]:
    """
    List audio input devices.

    Args:
        platform: sys.platform style identifier (None = current platform)
        timeout: Seconds to wait for the listing command

    Returns:
        Unique device names, sorted

    Raises:
        ValidationError: Unsupported platform (400), nothing is executed
        InternalError: Listing command could not run (500)

    Example:
        for device in list_audio_devices():
            print(device)
    """
    backend = BackendFactory.create_backend(platform)
    output = run_device_listing(backend, timeout=timeout)
    devices = normalize_devices(backend.parse_devices(output))

    logger.info(f"Found {len(devices)} audio device(s) on {backend.platform}")
    return devices


def list_audio_devices_async(
    platform: Optional[str] = None,
    timeout: float = DEVICE_LIST_TIMEOUT_SECONDS,
) -> "Future[List[str]]":
    """
    Non-blocking list_audio_devices().

    An unsupported platform fails the returned future with ValidationError
    without running anything.

    Example:
        future = list_audio_devices_async()
        devices = future.result()
    """
    return _executor.submit(list_audio_devices, platform, timeout)
