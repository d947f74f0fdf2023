"""
AFS Monitor Logging Configuration

Centralized logging setup. Probes own stdout for their one-line verdict,
so every handler here writes to stderr or a file, never stdout.

Usage:
    from afs_monitor.utils.logging_config import setup_logging
    setup_logging(verbosity=args.verbose)

    import logging
    logger = logging.getLogger(__name__)
"""

import logging
import logging.handlers
import sys
import threading
from pathlib import Path
from typing import Optional

from .env_config import get_config, get_config_bool

# Thread-safe initialization
_initialized = False
_lock = threading.Lock()

DEFAULT_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
SIMPLE_FORMAT = "%(levelname)s: %(message)s"

LEVEL_COLORS = {
    'DEBUG': '\033[36m',     # Cyan
    'INFO': '\033[32m',      # Green
    'WARNING': '\033[33m',   # Yellow
    'ERROR': '\033[31m',     # Red
    'CRITICAL': '\033[35m',  # Magenta
}
RESET = '\033[0m'

# -v count -> level
VERBOSITY_LEVELS = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}


class ColoredFormatter(logging.Formatter):
    """Formatter that adds colors to log levels for terminal output."""

    def __init__(self, fmt=None, datefmt=None, use_colors=True):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record):
        if self.use_colors:
            levelname = record.levelname
            if levelname in LEVEL_COLORS:
                record = logging.makeLogRecord(record.__dict__)
                record.levelname = f"{LEVEL_COLORS[levelname]}{levelname}{RESET}"
        return super().format(record)


def level_for(verbosity: Optional[int]) -> int:
    """
    Resolve the log level.

    An explicit -v count wins; otherwise AFS_MONITOR_LOG_LEVEL, else WARNING.
    """
    if verbosity:
        return VERBOSITY_LEVELS.get(verbosity, logging.DEBUG)
    configured = get_config('AFS_MONITOR_LOG_LEVEL').upper()
    return getattr(logging, configured, logging.WARNING) if configured else logging.WARNING


def setup_logging(
    verbosity: Optional[int] = None,
    log_file: Optional[str] = None,
    use_colors: Optional[bool] = None,
    max_bytes: int = 1024 * 1024,
    backup_count: int = 3,
) -> None:
    """
    Configure the root logger once per process.

    Args:
        verbosity: Number of -v flags given
        log_file: Optional rotating log file (defaults to AFS_MONITOR_LOG_FILE)
        use_colors: Colour level names when stderr is a terminal
            (defaults to AFS_MONITOR_LOG_COLOR)
        max_bytes: Max log file size before rotation
        backup_count: Number of rotated files to keep
    """
    global _initialized

    with _lock:
        if _initialized:
            return

        level = level_for(verbosity)
        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        root_logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        if use_colors is None:
            use_colors = get_config_bool('AFS_MONITOR_LOG_COLOR', True)
        if use_colors:
            console_handler.setFormatter(ColoredFormatter(SIMPLE_FORMAT))
        else:
            console_handler.setFormatter(logging.Formatter(SIMPLE_FORMAT))
        root_logger.addHandler(console_handler)

        log_file = log_file or get_config('AFS_MONITOR_LOG_FILE')
        if log_file:
            try:
                Path(log_file).parent.mkdir(parents=True, exist_ok=True)
                file_handler = logging.handlers.RotatingFileHandler(
                    log_file,
                    maxBytes=max_bytes,
                    backupCount=backup_count,
                )
            except OSError as e:
                root_logger.warning(f"Cannot open log file {log_file}: {e}")
            else:
                file_handler.setLevel(level)
                file_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
                root_logger.addHandler(file_handler)

        _initialized = True


def reset_logging() -> None:
    """Forget previous setup (used by tests)."""
    global _initialized
    with _lock:
        logging.getLogger().handlers.clear()
        _initialized = False
