"""One-time logging setup for rustm.

``init_logging`` installs a file handler on the root logger the first time
it is called and reports whether it did so; later calls are no-ops that return
False. ``shutdown_logging`` undoes it.
"""

import logging
import threading
from pathlib import Path

from rustm.config import config_dir

LOG_FILENAME = "rustm.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"

# Records from the prompt library are noise in the log file
FILTERED_PREFIXES = ("prompt_toolkit", "InquirerPy")

_lock = threading.Lock()
_handler: logging.Handler | None = None


class LibraryNoiseFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return not record.name.startswith(FILTERED_PREFIXES)


def log_file_path() -> Path:
    """Log file lives next to config.yaml."""
    return config_dir() / LOG_FILENAME


def init_logging(log_path: Path | None = None, debug: bool = False) -> bool:
    """Initialize application logging once per process.

    Args:
        log_path: Override for the log file location
        debug: Log everything down to DEBUG instead of INFO

    Returns:
        True if this call installed the handler, False if logging was already
        initialized

    Raises:
        OSError: The log directory or file could not be created (first call only)
    """
    global _handler

    with _lock:
        if _handler is not None:
            return False

        path = log_path or log_file_path()
        path.parent.mkdir(parents=True, exist_ok=True)

        handler = logging.FileHandler(str(path), encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.addFilter(LibraryNoiseFilter())

        level = logging.DEBUG if debug else logging.INFO
        root = logging.getLogger()
        root.setLevel(level)
        handler.setLevel(level)
        root.addHandler(handler)
        _handler = handler

    logging.getLogger(__name__).info("Logger initialized at %s", path)
    return True


def shutdown_logging() -> None:
    """Remove and close the handler installed by init_logging, if any."""
    global _handler

    with _lock:
        if _handler is None:
            return
        logging.getLogger().removeHandler(_handler)
        _handler.close()
        _handler = None
