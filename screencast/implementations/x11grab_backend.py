"""
Linux Capture Backend

Screen capture through FFmpeg's X11 grabber, audio through PulseAudio.

Audio devices come from `pactl list sources short`, one tab-separated
line per source:
    0	alsa_output.pci-0000_00_1f.3.analog-stereo.monitor	module-alsa-card.c	s16le 2ch 44100Hz	SUSPENDED
    1	alsa_input.pci-0000_00_1f.3.analog-stereo	module-alsa-card.c	s16le 2ch 44100Hz	RUNNING
"""

from typing import List

from config.settings import PACTL_BINARY
from screencast.constants import Platform
from screencast.interfaces.capture_backend_interface import CaptureBackend


class X11GrabBackend(CaptureBackend):
    """
    Linux backend (x11grab + pulse).

    "default" tells PulseAudio to use the system's default input source.
    """

    platform = Platform.LINUX
    input_format = "x11grab"
    default_video_source = ":0.0"
    default_audio_source = "default"

    def audio_input_args(self, device: str) -> List[str]:
        return ["-f", "pulse", "-i", device]

    def device_list_command(self) -> List[str]:
        return [PACTL_BINARY, "list", "sources", "short"]

    def parse_devices(self, output: str) -> List[str]:
        devices = []

        for line in output.splitlines():
            columns = line.split("\t")
            if len(columns) < 2:
                columns = line.split()
            if len(columns) < 2 or not columns[0].strip().isdigit():
                continue

            name = columns[1].strip()
            if name:
                devices.append(name)

        return devices
