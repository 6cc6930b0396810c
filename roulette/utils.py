"""Utilities and helper functions."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

EMBED_URL_TEMPLATE = "https://www.youtube.com/embed/{video_id}"
WATCH_URL_TEMPLATE = "https://www.youtube.com/watch?v={video_id}"


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = "channel_roulette.log",
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 3,
    console_output: bool = False,
) -> None:
    """Setup logging configuration.

    Parameters
    ----------
    level: int
        Logging level.
    log_file: str or None
        Path to the log file. ``None`` disables the file handler.
    max_bytes: int
        Maximum size in bytes before rotating the log file.
    backup_count: int
        Number of rotated log files to keep.
    console_output: bool
        Whether to also log to the console.
    """

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)

    if log_file:
        file_handler = RotatingFileHandler(
            log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    # Suppress noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def normalize_query(query: Optional[str]) -> str:
    """Trim a user-entered query; ``None`` and whitespace collapse to ``""``."""
    if not query:
        return ""
    return query.strip()


def embed_url(video_id: str) -> str:
    """Embeddable player reference for a video."""
    return EMBED_URL_TEMPLATE.format(video_id=video_id)


def watch_url(video_id: str) -> str:
    return WATCH_URL_TEMPLATE.format(video_id=video_id)


def redact_key(params: dict) -> dict:
    """Copy of request params safe to log."""
    return {k: ("***" if k == "key" else v) for k, v in params.items()}
