from __future__ import annotations

import logging
import sys
import urllib.parse
from pathlib import Path
from typing import Any, Optional

from . import config

LOGGER = logging.getLogger("helpbridge")
_LOGGER_INITIALISED = False


def configure_logging(log_path: Optional[Path] = None, *, stream: bool = False) -> None:
    """Configure the shared library logger.

    With neither ``log_path`` nor ``stream`` the logger only carries a
    ``NullHandler`` so the library stays silent for callers that do not opt in.
    """

    global _LOGGER_INITIALISED

    for handler in list(LOGGER.handlers):
        LOGGER.removeHandler(handler)
        try:
            handler.close()
        except Exception:  # noqa: BLE001
            continue

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if stream:
        stream_handler = logging.StreamHandler(sys.stdout)
        stream_handler.setFormatter(formatter)
        LOGGER.addHandler(stream_handler)

    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        LOGGER.addHandler(file_handler)

    if not LOGGER.handlers:
        LOGGER.addHandler(logging.NullHandler())

    LOGGER.setLevel(logging.INFO)
    LOGGER.propagate = False
    _LOGGER_INITIALISED = True


def _ensure_logger() -> None:
    if _LOGGER_INITIALISED:
        return
    configure_logging(config.LOG_FILE, stream=config.LOG_TO_STDOUT)


def log_line(message: str) -> None:
    """Write a timestamped log line to the configured handlers."""

    _ensure_logger()
    LOGGER.info(message)


def redact_url(url: str) -> str:
    try:
        parsed = urllib.parse.urlparse(url)
        return urllib.parse.urlunparse(parsed._replace(query=""))
    except Exception:
        return url


def _submission_event(label: str, **fields: Any) -> None:
    """Log one submission event as ``[HELPBRIDGE][LABEL] key=value, ...``."""

    try:
        payload = ", ".join(f"{k}={repr(v)}" for k, v in sorted(fields.items()))
        log_line(f"[HELPBRIDGE][{label.upper()}] {payload}")
    except Exception:
        # Never let logging break a submission.
        return


__all__ = ["LOGGER", "configure_logging", "log_line", "redact_url", "_submission_event"]
