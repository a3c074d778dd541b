"""
Logging Setup

Console + daily rotating file logging for the screencast CLI.
Library code only calls logging.getLogger(__name__); handlers are installed
here, once, by the application entry point.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, Union

from config.settings import LOG_BACKUP_COUNT, LOG_DIR, LOG_FILE, LOG_LEVEL

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s | %(name)s"


def setup_logging(
    level: Union[int, str] = LOG_LEVEL,
    log_dir: Optional[Path] = LOG_DIR,
) -> logging.Logger:
    """
    Configure the root logger.

    Args:
        level: Log level name or number
        log_dir: Directory for the rotating log file (None = console only)

    Returns:
        The configured root logger
    """
    logger = logging.getLogger()
    logger.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT)

    # Console handler (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir is None:
        return logger

    # File handler with rotation
    # Rotates daily, keeps LOG_BACKUP_COUNT days
    log_file = Path(log_dir) / LOG_FILE
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.TimedRotatingFileHandler(
            str(log_file),
            when="midnight",
            interval=1,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError as e:
        logger.warning(f"Cannot write to {log_file} ({e}), logging to console only")
        return logger

    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    return logger
