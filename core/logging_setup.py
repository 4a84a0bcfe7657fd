"""
Logging Setup

Root logger configuration shared by scripts and host applications.
Logs go to stdout and to a daily-rotated file.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

from config.settings import LOG_BACKUP_DAYS, LOG_DIR, LOG_FORMAT, LOG_SERVICE_FILE


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Setup logging with rotation.

    Logs to both console and file with rotation:
    - Daily rotation
    - Keep LOG_BACKUP_DAYS days of logs

    Args:
        level: Log level for root logger and handlers
        log_file: Log file path (default: LOG_DIR/LOG_SERVICE_FILE)
    """
    logger = logging.getLogger()
    logger.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT)

    # Console handler (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    target = log_file or str(Path(LOG_DIR) / LOG_SERVICE_FILE)
    try:
        file_handler = _create_file_handler(target)
    except (PermissionError, FileNotFoundError):
        # Fallback to local logs directory if LOG_DIR not writable
        logs_dir = Path("logs")
        logs_dir.mkdir(exist_ok=True)

        fallback_log = logs_dir / LOG_SERVICE_FILE
        logger.warning(f"Cannot write to {target}, using fallback: {fallback_log}")
        file_handler = _create_file_handler(str(fallback_log))

    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)


def _create_file_handler(path: str) -> logging.Handler:
    return logging.handlers.TimedRotatingFileHandler(
        path,
        when="midnight",
        interval=1,
        backupCount=LOG_BACKUP_DAYS,
        encoding="utf-8",
    )
