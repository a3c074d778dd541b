"""
macOS Capture Backend

Screen and audio capture through FFmpeg's AVFoundation input. Devices are
addressed by numeric index, "video:audio".

Device listing output:
    [AVFoundation indev @ 0x7f9] AVFoundation video devices:
    [AVFoundation indev @ 0x7f9] [0] FaceTime HD Camera
    [AVFoundation indev @ 0x7f9] [1] Capture screen 0
    [AVFoundation indev @ 0x7f9] AVFoundation audio devices:
    [AVFoundation indev @ 0x7f9] [0] MacBook Pro Microphone
"""

import re
from typing import List

from config.settings import FFMPEG_BINARY
from screencast.constants import Platform
from screencast.interfaces.capture_backend_interface import CaptureBackend

_INDEXED_DEVICE = re.compile(r"\[(\d+)\]\s+(.+?)\s*$")


class AVFoundationBackend(CaptureBackend):
    """
    macOS backend (avfoundation for both screen and audio).

    Audio-only input is written ":<index>" so the index is not taken for a
    video device.
    """

    platform = Platform.MACOS
    input_format = "avfoundation"
    default_video_source = "0:"
    default_audio_source = "1"

    def audio_input_args(self, device: str) -> List[str]:
        if not device.startswith(":"):
            device = f":{device}"
        return ["-f", "avfoundation", "-i", device]

    def device_list_command(self) -> List[str]:
        return [
            FFMPEG_BINARY,
            "-hide_banner",
            "-f", "avfoundation",
            "-list_devices", "true",
            "-i", "",
        ]

    def parse_devices(self, output: str) -> List[str]:
        devices = []
        in_audio_section = False

        for line in output.splitlines():
            if "AVFoundation video devices" in line:
                in_audio_section = False
                continue
            if "AVFoundation audio devices" in line:
                in_audio_section = True
                continue
            if not in_audio_section:
                continue

            match = _INDEXED_DEVICE.search(line)
            if match:
                devices.append(match.group(2))

        return devices
