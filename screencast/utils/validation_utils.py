"""
Validation Utilities

Checks a recording configuration before any FFmpeg process exists.

Every rule is a small pure function raising ValidationError (code 400) on
the first invalid value. validate_config() runs them all in field order;
running it twice on the same config gives the same result.
"""

import logging
from numbers import Real
from typing import Any, Optional, Sequence

from screencast.constants import (
    ALLOWED_CODECS,
    ALLOWED_PRESETS,
    FILE_NAME_PATTERN,
    FORMAT_PATTERN,
    MAX_VOLUME,
    MIN_VOLUME,
    OUTPUT_PATH_PATTERN,
    RESOLUTION_PATTERN,
)
from screencast.interfaces.capture_backend_interface import ValidationError

logger = logging.getLogger(__name__)


def validate_volume(volume: Any) -> None:
    if (
        isinstance(volume, bool)
        or not isinstance(volume, Real)
        or not MIN_VOLUME <= volume <= MAX_VOLUME
    ):
        raise ValidationError(
            "volume",
            volume,
            f"Invalid volume: {volume!r} (must be between {MIN_VOLUME} and {MAX_VOLUME})",
        )


def validate_codec(codec: Any) -> None:
    if codec not in ALLOWED_CODECS:
        raise ValidationError(
            "codec",
            codec,
            f"Invalid codec: {codec!r} (allowed: {', '.join(ALLOWED_CODECS)})",
        )


def validate_preset(preset: Any) -> None:
    if preset not in ALLOWED_PRESETS:
        raise ValidationError(
            "preset",
            preset,
            f"Invalid preset: {preset!r} (allowed: {', '.join(ALLOWED_PRESETS)})",
        )


def validate_resolution(resolution: Optional[str]) -> None:
    """None means "use the grabber's native size"."""
    if resolution is None:
        return
    if not isinstance(resolution, str) or not RESOLUTION_PATTERN.fullmatch(resolution):
        raise ValidationError("resolution", resolution)


def validate_frame_rate(frame_rate: Any) -> None:
    # bool is an int subclass, reject it explicitly
    if isinstance(frame_rate, bool) or not isinstance(frame_rate, int) or frame_rate <= 0:
        raise ValidationError("frame_rate", frame_rate)


def validate_file_name(file_name: Any) -> None:
    if not isinstance(file_name, str) or not FILE_NAME_PATTERN.fullmatch(file_name):
        raise ValidationError("file_name", file_name)


def validate_output_path(output_path: Any) -> None:
    if not isinstance(output_path, str) or not OUTPUT_PATH_PATTERN.fullmatch(output_path):
        raise ValidationError("output_path", output_path)


def validate_format(file_format: Any) -> None:
    if not isinstance(file_format, str) or not FORMAT_PATTERN.fullmatch(file_format):
        raise ValidationError("format", file_format)


def validate_flag(name: str, value: Any) -> None:
    if not isinstance(value, bool):
        raise ValidationError(name, value, f"Invalid {name}: {value!r} (must be a boolean)")


def validate_source(name: str, source: Any) -> None:
    """None means "use the backend default"."""
    if source is None:
        return
    if not isinstance(source, str) or not source.strip():
        raise ValidationError(name, source)


def validate_extra_args(extra_args: Sequence[Any]) -> None:
    if isinstance(extra_args, (str, bytes)):
        raise ValidationError(
            "extra_args",
            extra_args,
            "Invalid extra_args: expected a sequence of strings, got a single string",
        )
    for arg in extra_args:
        if not isinstance(arg, str):
            raise ValidationError("extra_args", arg)


def validate_duration(duration: Any) -> None:
    """None means "record until stopped"."""
    if duration is None:
        return
    if isinstance(duration, bool) or not isinstance(duration, Real) or duration <= 0:
        raise ValidationError("duration", duration)


def validate_config(config: Any) -> None:
    """
    Validate a recording configuration.

    Args:
        config: RecorderConfig (or any object with the same attributes)

    Raises:
        ValidationError: On the first invalid field (code 400)

    Example:
        validate_config(RecorderConfig(frame_rate=60))
    """
    validate_volume(config.volume)
    validate_codec(config.codec)
    validate_preset(config.preset)
    validate_resolution(config.resolution)
    validate_frame_rate(config.frame_rate)
    validate_file_name(config.file_name)
    validate_output_path(config.output_path)
    validate_format(config.format)
    validate_flag("verbose", config.verbose)
    validate_flag("include_uuid", config.include_uuid)
    validate_flag("record_audio", config.record_audio)
    validate_flag("overwrite", config.overwrite)
    validate_source("audio_source", config.audio_source)
    validate_source("video_source", config.video_source)
    validate_extra_args(config.extra_args)
    validate_duration(config.duration)


def is_valid_config(config: Any) -> bool:
    """
    Check a configuration without raising.

    Returns:
        True if validate_config() accepts it, False otherwise
    """
    try:
        validate_config(config)
    except ValidationError as e:
        logger.debug(f"Configuration rejected: {e}")
        return False
    return True
