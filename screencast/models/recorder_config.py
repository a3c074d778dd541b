"""
Recorder Configuration Model

Immutable value describing one recorder: where the file goes, how the
screen is encoded and whether audio is captured.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional, Sequence

from config.settings import (
    DEFAULT_CODEC,
    DEFAULT_FILE_NAME,
    DEFAULT_FORMAT,
    DEFAULT_FRAME_RATE,
    DEFAULT_INCLUDE_UUID,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_OVERWRITE,
    DEFAULT_PRESET,
    DEFAULT_RECORD_AUDIO,
    DEFAULT_RESOLUTION,
    DEFAULT_VOLUME,
)
from screencast.utils.validation_utils import validate_config


@dataclass(frozen=True)
class RecorderConfig:
    """
    Recording configuration.

    Validated when constructed: an invalid value raises ValidationError
    (code 400) here, never later at start time. Frozen, so changing a value
    means building a new config (dataclasses.replace re-validates).

    Usage:
        config = RecorderConfig(
            output_path="./videos",
            file_name="demo",
            resolution="1280x720",
            record_audio=True,
            volume=1.5,
        )
    """

    # Output file: {output_path}/{file_name}[_{uuid}].{format}
    output_path: str = DEFAULT_OUTPUT_PATH
    file_name: str = DEFAULT_FILE_NAME
    format: str = DEFAULT_FORMAT
    include_uuid: bool = DEFAULT_INCLUDE_UUID
    overwrite: bool = DEFAULT_OVERWRITE

    # Video encoding
    frame_rate: int = DEFAULT_FRAME_RATE
    codec: str = DEFAULT_CODEC
    preset: str = DEFAULT_PRESET
    resolution: Optional[str] = DEFAULT_RESOLUTION
    video_source: Optional[str] = None  # None = backend default

    # Audio
    record_audio: bool = DEFAULT_RECORD_AUDIO
    audio_source: Optional[str] = None  # None = backend default
    volume: float = DEFAULT_VOLUME

    # Stop automatically after this many seconds (None = until stop())
    duration: Optional[float] = None

    # Passed to FFmpeg before the output path
    extra_args: Sequence[str] = field(default_factory=tuple)

    verbose: bool = False

    def __post_init__(self):
        """Validate, then freeze extra_args into a tuple"""
        validate_config(self)
        object.__setattr__(self, "extra_args", tuple(self.extra_args))

    def to_dict(self) -> Dict[str, Any]:
        """Get configuration as dictionary"""
        data = asdict(self)
        data["extra_args"] = list(self.extra_args)
        return data
