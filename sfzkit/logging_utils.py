from __future__ import annotations

import logging
import os
import sys
import traceback
from datetime import datetime
from pathlib import Path

_LOGGER = logging.getLogger("sfzkit.logging")
LOGGER_NAME = "sfzkit"
LOG_DIR_ENV = "SFZKIT_LOG_DIR"
_LOG_FILE = "sfzkit.log"
_HANDLER_NAME = "sfzkit-stderr"


def get_log_dir() -> Path:
    configured = os.environ.get(LOG_DIR_ENV)
    if configured:
        return Path(configured).expanduser()
    return Path.home() / ".cache" / "sfzkit" / "logs"


def get_log_path() -> Path:
    return get_log_dir() / _LOG_FILE


def configure_logging(level: int = logging.WARNING) -> logging.Logger:
    """Attach a single stderr handler to the package logger."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if any(handler.get_name() == _HANDLER_NAME for handler in logger.handlers):
        return logger
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    return logger


def format_exception_entry(context: str, exc: BaseException) -> str:
    stamp = datetime.now().isoformat(timespec="seconds")
    header = f"[{stamp}] {context} failed: {type(exc).__name__}: {exc}"
    trace = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return f"{header}\n{trace}\n"


def log_exception(context: str, exc: BaseException) -> Path | None:
    """Append `exc` with its traceback to the log file. Returns None if the file is unwritable."""
    path = get_log_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as handle:
            handle.write(format_exception_entry(context, exc))
    except OSError as log_exc:
        _LOGGER.warning("Could not append to %s: %s", path, log_exc, exc_info=True)
        return None
    return path
