"""
Command Builder Tests

Tests for FFmpeg argument construction showing:
- Argument order
- Optional resolution, audio, volume and duration blocks
- Per-platform input formats and audio syntax
- Hostile values stay single arguments

To run:
    pytest tests/screencast/utils/test_command_builder.py -v
"""

from pathlib import Path

import pytest

from screencast.factory import create_backend
from screencast.models.recorder_config import RecorderConfig
from screencast.utils.command_builder import (
    build_arguments,
    build_command,
    escape_token,
    format_command,
    format_number,
)

OUTPUT_FILE = Path("recordings/output.mp4")


def _value_after(arguments, flag):
    return arguments[arguments.index(flag) + 1]


@pytest.fixture
def linux_backend():
    return create_backend("linux")


# =============================================================================
# ORDER TESTS
# =============================================================================


@pytest.mark.unit
def test_build_arguments_video_only(linux_backend):
    """Test 720p/30fps config without audio."""
    config = RecorderConfig(frame_rate=30, resolution="1280x720", codec="libx264", record_audio=False)

    arguments = build_arguments(config, linux_backend, OUTPUT_FILE)

    assert arguments == [
        "-y",
        "-f", "x11grab",
        "-framerate", "30",
        "-video_size", "1280x720",
        "-i", ":0.0",
        "-c:v", "libx264",
        "-preset", "ultrafast",
        "-pix_fmt", "yuv420p",
        str(OUTPUT_FILE),
    ]
    assert "pulse" not in arguments
    assert "-af" not in arguments


@pytest.mark.unit
def test_build_arguments_is_pure(linux_backend):
    """Test identical inputs give identical arguments."""
    config = RecorderConfig(record_audio=True, volume=0.5, extra_args=["-crf", "18"])

    first = build_arguments(config, linux_backend, OUTPUT_FILE)
    second = build_arguments(config, linux_backend, OUTPUT_FILE)

    assert first == second


@pytest.mark.unit
def test_build_arguments_without_resolution(linux_backend):
    """Test no -video_size when resolution is None."""
    config = RecorderConfig(resolution=None)

    arguments = build_arguments(config, linux_backend, OUTPUT_FILE)

    assert "-video_size" not in arguments


@pytest.mark.unit
def test_build_arguments_no_overwrite(linux_backend):
    """Test -n replaces -y when overwrite is off."""
    arguments = build_arguments(RecorderConfig(overwrite=False), linux_backend, OUTPUT_FILE)

    assert arguments[0] == "-n"
    assert "-y" not in arguments


@pytest.mark.unit
def test_build_arguments_extra_args_before_output(linux_backend):
    """Test extra arguments come after encoding options, before the output."""
    config = RecorderConfig(extra_args=["-crf", "18", "-movflags", "+faststart"], duration=10)

    arguments = build_arguments(config, linux_backend, OUTPUT_FILE)

    pix_fmt_index = arguments.index("-pix_fmt")
    assert arguments[pix_fmt_index + 2:pix_fmt_index + 6] == ["-crf", "18", "-movflags", "+faststart"]
    assert arguments[-3:] == ["-t", "10", str(OUTPUT_FILE)]


@pytest.mark.unit
def test_build_command_prepends_binary(linux_backend):
    """Test build_command starts with the FFmpeg executable."""
    command = build_command(RecorderConfig(), linux_backend, OUTPUT_FILE, ffmpeg_binary="/opt/ffmpeg")

    assert command[0] == "/opt/ffmpeg"
    assert command[1:] == build_arguments(RecorderConfig(), linux_backend, OUTPUT_FILE)


# =============================================================================
# AUDIO TESTS
# =============================================================================


@pytest.mark.unit
def test_build_arguments_audio_with_volume(linux_backend):
    """Test volume filter follows the audio input."""
    config = RecorderConfig(volume=1.5, record_audio=True, audio_source="mic")

    arguments = build_arguments(config, linux_backend, OUTPUT_FILE)

    audio_index = arguments.index("pulse")
    assert arguments[audio_index - 1:audio_index + 5] == [
        "-f", "pulse", "-i", "mic", "-af", "volume=1.5",
    ]
    assert arguments.index("-af") < arguments.index("-c:v")


@pytest.mark.unit
def test_build_arguments_audio_default_volume_has_no_filter(linux_backend):
    """Test volume 1.0 emits no filter."""
    config = RecorderConfig(record_audio=True)

    arguments = build_arguments(config, linux_backend, OUTPUT_FILE)

    assert "-af" not in arguments
    assert _value_after(arguments, "pulse") == "-i"
    assert "default" in arguments


@pytest.mark.unit
def test_build_arguments_audio_disabled_ignores_source(linux_backend):
    """Test audio_source alone does not add an audio block."""
    config = RecorderConfig(record_audio=False, audio_source="mic", volume=1.5)

    arguments = build_arguments(config, linux_backend, OUTPUT_FILE)

    assert "mic" not in arguments
    assert "-af" not in arguments


@pytest.mark.unit
@pytest.mark.parametrize(
    "platform,input_format,video_source,audio_block",
    [
        ("win32", "gdigrab", "desktop", ["-f", "dshow", "-i", "audio=Stereo Mix (Realtek(R) Audio)"]),
        ("darwin", "avfoundation", "0:", ["-f", "avfoundation", "-i", ":1"]),
        ("linux", "x11grab", ":0.0", ["-f", "pulse", "-i", "default"]),
    ],
)
def test_build_arguments_platform_defaults(platform, input_format, video_source, audio_block):
    """Test each backend's input format, video source and audio syntax."""
    config = RecorderConfig(record_audio=True)

    arguments = build_arguments(config, create_backend(platform), OUTPUT_FILE)

    assert arguments[1:3] == ["-f", input_format]
    assert _value_after(arguments, "-video_size") == "1920x1080"
    video_index = arguments.index(video_source)
    assert arguments[video_index + 1:video_index + 5] == audio_block


# =============================================================================
# ESCAPING TESTS
# =============================================================================


@pytest.mark.unit
def test_hostile_values_stay_single_arguments(linux_backend):
    """Test shell metacharacters are passed as one untouched argument."""
    config = RecorderConfig(
        record_audio=True,
        audio_source="mic; rm -rf / #",
        video_source=":0.0 -i /etc/passwd",
        extra_args=["-metadata", "title=$(whoami) && echo"],
    )

    arguments = build_arguments(config, linux_backend, OUTPUT_FILE)

    assert "mic; rm -rf / #" in arguments
    assert ":0.0 -i /etc/passwd" in arguments
    assert "title=$(whoami) && echo" in arguments
    assert "/etc/passwd" not in arguments


@pytest.mark.unit
def test_escape_token_converts_to_string():
    """Test numbers and paths become strings."""
    assert escape_token(30) == "30"
    assert escape_token(Path("a/b.mp4")) == str(Path("a/b.mp4"))


@pytest.mark.unit
def test_escape_token_rejects_nul_byte():
    """Test a NUL byte cannot be smuggled into an argument."""
    with pytest.raises(ValueError):
        escape_token("mic\x00-i")


@pytest.mark.unit
def test_format_command_quotes_for_display():
    """Test logged command is shell-quoted."""
    rendered = format_command(["ffmpeg", "-i", "audio=Stereo Mix (Realtek(R) Audio)"])

    assert rendered == "ffmpeg -i 'audio=Stereo Mix (Realtek(R) Audio)'"


@pytest.mark.unit
@pytest.mark.parametrize(
    "duration,expected",
    [(12345.67, "12345.67"), (1_000_000, "1000000"), (1e6, "1000000"), (2.5, "2.5")],
)
def test_duration_keeps_exact_value(linux_backend, duration, expected):
    """Test -t is a plain decimal with every configured digit."""
    arguments = build_arguments(RecorderConfig(duration=duration), linux_backend, OUTPUT_FILE)

    assert _value_after(arguments, "-t") == expected


@pytest.mark.unit
def test_volume_keeps_exact_value(linux_backend):
    """Test the volume filter is not rounded."""
    config = RecorderConfig(record_audio=True, volume=1.2345678)

    arguments = build_arguments(config, linux_backend, OUTPUT_FILE)

    assert _value_after(arguments, "-af") == "volume=1.2345678"


@pytest.mark.unit
def test_format_number():
    assert format_number(30) == "30"
    assert format_number(1e-07) == "0.0000001"
    assert format_number(0.1) == "0.1"
