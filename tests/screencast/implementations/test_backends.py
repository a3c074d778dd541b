"""
Capture Backend Tests

Tests for the platform backends and their factory:
- Audio input syntax per platform
- Device listing parsers
- Unsupported platforms

To run:
    pytest tests/screencast/implementations/test_backends.py -v
"""

import pytest

from screencast.factory import BackendFactory, create_backend
from screencast.implementations import (
    AVFoundationBackend,
    GdigrabBackend,
    X11GrabBackend,
)
from screencast.interfaces.capture_backend_interface import (
    CaptureBackend,
    ValidationError,
)

# =============================================================================
# FACTORY TESTS
# =============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "platform,backend_class",
    [("win32", GdigrabBackend), ("darwin", AVFoundationBackend), ("linux", X11GrabBackend)],
)
def test_factory_selects_backend(platform, backend_class):
    backend = create_backend(platform)

    assert isinstance(backend, backend_class)
    assert isinstance(backend, CaptureBackend)
    assert backend.platform == platform


@pytest.mark.unit
@pytest.mark.parametrize("platform", ["aix", "freebsd13", "cygwin"])
def test_factory_rejects_unsupported_platform(platform):
    """Test unknown platforms are a 400 naming the platform."""
    with pytest.raises(ValidationError) as exc_info:
        BackendFactory.create_backend(platform)

    assert exc_info.value.code == 400
    assert exc_info.value.field == "platform"
    assert platform in exc_info.value.message


@pytest.mark.unit
def test_factory_supported_platforms():
    assert BackendFactory.supported_platforms() == ["darwin", "linux", "win32"]
    assert BackendFactory.is_supported("linux")
    assert not BackendFactory.is_supported("aix")


@pytest.mark.unit
def test_backend_cannot_be_abstract():
    with pytest.raises(TypeError):
        CaptureBackend()


# =============================================================================
# AUDIO INPUT TESTS
# =============================================================================


@pytest.mark.unit
def test_windows_audio_input():
    assert GdigrabBackend().audio_input_args("Microphone (USB)") == [
        "-f", "dshow", "-i", "audio=Microphone (USB)",
    ]


@pytest.mark.unit
@pytest.mark.parametrize("device", ["1", ":1"])
def test_macos_audio_input(device):
    """Test audio index is always written as audio-only input."""
    assert AVFoundationBackend().audio_input_args(device) == ["-f", "avfoundation", "-i", ":1"]


@pytest.mark.unit
def test_linux_audio_input():
    assert X11GrabBackend().audio_input_args("default") == ["-f", "pulse", "-i", "default"]


# =============================================================================
# PARSER TESTS
# =============================================================================


@pytest.mark.unit
def test_windows_parser_legacy_section_headers():
    """Test older FFmpeg output grouped under section headers."""
    output = "\n".join([
        '[dshow @ 0x1] DirectShow video devices (some may be both video and audio devices)',
        '[dshow @ 0x1]  "Integrated Camera"',
        '[dshow @ 0x1]     Alternative name "@device_pnp_\\\\?\\usb"',
        '[dshow @ 0x1] DirectShow audio devices',
        '[dshow @ 0x1]  "Microphone Array (Realtek(R) Audio)"',
        '[dshow @ 0x1]     Alternative name "@device_cm_{33D9A762}\\wave_{1}"',
    ])

    assert GdigrabBackend().parse_devices(output) == ["Microphone Array (Realtek(R) Audio)"]


@pytest.mark.unit
def test_macos_parser_ignores_video_devices():
    output = "\n".join([
        "[AVFoundation indev @ 0x1] AVFoundation video devices:",
        "[AVFoundation indev @ 0x1] [0] FaceTime HD Camera",
        "[AVFoundation indev @ 0x1] AVFoundation audio devices:",
        "[AVFoundation indev @ 0x1] [0] External Microphone  ",
    ])

    assert AVFoundationBackend().parse_devices(output) == ["External Microphone"]


@pytest.mark.unit
def test_linux_parser_skips_noise():
    """Test lines without an index column are ignored."""
    output = "\n".join([
        "Connection failure: Connection refused",
        "",
        "7 alsa_input.usb-mic.analog-mono module-alsa-card.c s16le 1ch 48000Hz IDLE",
    ])

    assert X11GrabBackend().parse_devices(output) == ["alsa_input.usb-mic.analog-mono"]


@pytest.mark.unit
@pytest.mark.parametrize("backend_class", [GdigrabBackend, AVFoundationBackend, X11GrabBackend])
def test_listing_commands_are_argument_lists(backend_class):
    command = backend_class().device_list_command()

    assert isinstance(command, list)
    assert all(isinstance(part, str) for part in command)
