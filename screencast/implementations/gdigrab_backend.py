"""
Windows Capture Backend

Screen capture through FFmpeg's GDI grabber, audio through DirectShow.

FFmpeg's DirectShow device listing looks like (FFmpeg 5+):
    [dshow @ 0000021c] "Integrated Camera" (video)
    [dshow @ 0000021c]   Alternative name "@device_pnp_\\\\?\\usb#vid_..."
    [dshow @ 0000021c] "Microphone (Realtek(R) Audio)" (audio)

Older builds group devices under "DirectShow video devices" /
"DirectShow audio devices" headers instead of the per-line suffix.
Both layouts are handled.
"""

import re
from typing import List

from config.settings import FFMPEG_BINARY
from screencast.constants import DEVICE_ALIAS_MARKER, Platform
from screencast.interfaces.capture_backend_interface import CaptureBackend

_QUOTED_NAME = re.compile(r'"([^"]+)"')


class GdigrabBackend(CaptureBackend):
    """
    Windows backend (gdigrab + dshow).

    Usage:
        backend = GdigrabBackend()
        backend.audio_input_args("Microphone (USB)")
        # -> ["-f", "dshow", "-i", "audio=Microphone (USB)"]
    """

    platform = Platform.WINDOWS
    input_format = "gdigrab"
    default_video_source = "desktop"
    default_audio_source = "Stereo Mix (Realtek(R) Audio)"

    def audio_input_args(self, device: str) -> List[str]:
        return ["-f", "dshow", "-i", f"audio={device}"]

    def device_list_command(self) -> List[str]:
        return [
            FFMPEG_BINARY,
            "-hide_banner",
            "-list_devices", "true",
            "-f", "dshow",
            "-i", "dummy",
        ]

    def parse_devices(self, output: str) -> List[str]:
        devices = []
        section = None

        for line in output.splitlines():
            if "DirectShow video devices" in line:
                section = "video"
                continue
            if "DirectShow audio devices" in line:
                section = "audio"
                continue

            match = _QUOTED_NAME.search(line)
            if not match:
                continue

            name = match.group(1)
            if DEVICE_ALIAS_MARKER in name:
                continue

            # Per-line type suffix wins over the section header
            if "(audio)" in line:
                kind = "audio"
            elif "(video)" in line:
                kind = "video"
            else:
                kind = section

            if kind == "audio":
                devices.append(name)

        return devices
