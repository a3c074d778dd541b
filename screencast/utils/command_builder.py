"""
FFmpeg Command Builder

Turns a validated RecorderConfig and a platform backend into the ordered
argument list for FFmpeg.

Arguments are never joined into a shell string. Each value that comes from
configuration passes through escape_token() and becomes exactly one argv
element, and the process is spawned with shell=False, so a device name like
"Stereo Mix (Realtek(R) Audio)" or an extra argument with spaces reaches
FFmpeg unchanged and cannot inject further arguments.
"""

import shlex
from decimal import Decimal
from numbers import Real
from pathlib import Path
from typing import Any, List, Sequence

from config.settings import FFMPEG_BINARY, OUTPUT_PIXEL_FORMAT
from screencast.interfaces.capture_backend_interface import CaptureBackend


def escape_token(value: Any) -> str:
    """
    Make a configuration value a single, safe argv element.

    Args:
        value: Any value destined for the FFmpeg command line

    Returns:
        The value as one string token

    Raises:
        ValueError: If the value cannot be passed as an argument (NUL byte)
    """
    token = str(value)
    if "\x00" in token:
        raise ValueError(f"Argument contains a NUL byte: {token!r}")
    return token


def format_number(value: Real) -> str:
    """
    Render a number as a plain decimal FFmpeg accepts, without losing digits.

    Example:
        format_number(1000000.0) -> "1000000"
        format_number(12345.67)  -> "12345.67"
        format_number(1e-07)     -> "0.0000001"
    """
    if float(value).is_integer():
        return str(int(value))
    return format(Decimal(repr(float(value))), "f")


def build_audio_arguments(config, backend: CaptureBackend) -> List[str]:
    """
    Audio input block (empty when audio recording is off).

    Raises:
        ValueError: If audio is requested but the platform has no audio source
    """
    if not config.record_audio:
        return []

    device = config.audio_source or backend.default_audio_source
    if device is None:
        raise ValueError(f"No audio source available on platform {backend.platform}")

    arguments = backend.audio_input_args(escape_token(device))
    if config.volume != 1.0:
        arguments += ["-af", escape_token(f"volume={format_number(config.volume)}")]

    return arguments


def build_arguments(config, backend: CaptureBackend, output_file: Path) -> List[str]:
    """
    Build FFmpeg arguments for a screen recording.

    Pure: the same config, backend and output path always give the same list.

    Order:
        overwrite flag, screen input format, frame rate, [video size],
        video source, [audio block], codec, preset, pixel format,
        extra arguments, [duration], output file

    Args:
        config: Validated RecorderConfig
        backend: Capture backend of the target platform
        output_file: Resolved output file path

    Returns:
        Argument list without the executable

    Example:
        args = build_arguments(config, X11GrabBackend(), Path("out.mp4"))
        # ["-y", "-f", "x11grab", "-framerate", "30", ...,  "out.mp4"]
    """
    arguments = [
        "-y" if config.overwrite else "-n",
        "-f", backend.input_format,
        "-framerate", escape_token(config.frame_rate),
    ]

    if config.resolution:
        arguments += ["-video_size", escape_token(config.resolution)]

    video_source = config.video_source or backend.default_video_source
    arguments += ["-i", escape_token(video_source)]

    arguments += build_audio_arguments(config, backend)

    arguments += [
        "-c:v", escape_token(config.codec),
        "-preset", escape_token(config.preset),
        "-pix_fmt", OUTPUT_PIXEL_FORMAT,
    ]

    arguments += [escape_token(arg) for arg in config.extra_args]

    if config.duration is not None:
        arguments += ["-t", escape_token(format_number(config.duration))]

    arguments.append(escape_token(output_file))

    return arguments


def build_command(
    config,
    backend: CaptureBackend,
    output_file: Path,
    ffmpeg_binary: str = FFMPEG_BINARY,
) -> List[str]:
    """
    Full command: FFmpeg executable followed by build_arguments().

    Example:
        subprocess.Popen(build_command(config, backend, path))
    """
    return [ffmpeg_binary] + build_arguments(config, backend, output_file)


def format_command(command: Sequence[str]) -> str:
    """
    Render a command for logs, quoted the way a POSIX shell would need it.

    Display only: commands are always executed as argument lists.
    """
    return shlex.join(command)
