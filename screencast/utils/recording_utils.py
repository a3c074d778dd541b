"""
Recording Utilities

Output directory and file name helpers for recordings.
"""

import logging
from pathlib import Path
from typing import Union
from uuid import uuid4

logger = logging.getLogger(__name__)


def ensure_output_dir(output_path: Union[str, Path]) -> Path:
    """
    Create the output directory (and parents) if missing.

    Args:
        output_path: Directory where recordings are saved

    Returns:
        The directory as a Path

    Raises:
        OSError: If the directory cannot be created
    """
    directory = Path(output_path)
    if not directory.exists():
        logger.info(f"Creating output directory: {directory}")
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def get_file_path(
    output_path: Union[str, Path],
    file_name: str,
    file_format: str,
    include_uuid: bool = False,
) -> Path:
    """
    Build the output file path for a recording.

    Creates unique filename when include_uuid is set, so two recordings with
    the same base name never overwrite each other.

    Args:
        output_path: Directory where file will be saved
        file_name: Base name without extension
        file_format: Container/extension (e.g. "mp4")
        include_uuid: Append "_<uuid4>" to the base name

    Returns:
        {output_path}/{file_name}[_{uuid}].{file_format}

    Example:
        get_file_path("./recordings", "demo", "mp4", include_uuid=False)
        # Returns: recordings/demo.mp4
    """
    if include_uuid:
        final_name = f"{file_name}_{uuid4()}.{file_format}"
    else:
        final_name = f"{file_name}.{file_format}"
    return Path(output_path) / final_name


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in human-readable form.

    Example:
        format_file_size(1536) -> "1.5 KB"
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"

    size = size_bytes / 1024
    for unit in ("KB", "MB"):
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} GB"


def format_duration(seconds: float) -> str:
    """
    Format duration in seconds to human-readable string.

    Example:
        format_duration(630) -> "10:30"
    """
    minutes = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{minutes}:{secs:02d}"
