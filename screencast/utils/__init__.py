"""
Screencast Utilities Package

Exposes configuration validation, command building and file helpers.
"""

from screencast.utils.command_builder import (
    build_arguments,
    build_command,
    escape_token,
    format_command,
    format_number,
)
from screencast.utils.diagnostics import is_failure_line
from screencast.utils.recording_utils import (
    ensure_output_dir,
    format_duration,
    format_file_size,
    get_file_path,
)
from screencast.utils.validation_utils import is_valid_config, validate_config

# Public API
__all__ = [
    "build_arguments",
    "build_command",
    "ensure_output_dir",
    "escape_token",
    "format_command",
    "format_number",
    "format_duration",
    "format_file_size",
    "get_file_path",
    "is_failure_line",
    "is_valid_config",
    "validate_config",
]
