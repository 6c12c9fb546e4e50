"""Centralized logging bootstrap for scriptmark.

// [LAW:single-enforcer] Logger handler wiring is enforced in this module only.
// [LAW:one-source-of-truth] Log path and level are derived here and returned to the caller.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path


@dataclass(frozen=True)
class LoggingRuntime:
    """Resolved runtime logging configuration."""

    level: int
    file_path: str


_RUNTIME: LoggingRuntime | None = None


def _parse_level(raw: str) -> int:
    normalized = str(raw or "WARNING").strip().upper()
    level = getattr(logging, normalized, logging.WARNING)
    if not isinstance(level, int):
        level = logging.WARNING
    return int(level)


def _default_log_path() -> str:
    log_dir = Path(
        os.environ.get("SCRIPTMARK_LOG_DIR", os.path.expanduser("~/.local/share/scriptmark/logs"))
    )
    ts = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
    return str(log_dir / f"scriptmark-{ts}-{os.getpid()}.log")


def _make_stream_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("[%(name)s] %(levelname)s %(message)s"))
    return handler


def _make_file_handler(level: int, file_path: str) -> logging.Handler:
    handler = RotatingFileHandler(
        file_path,
        maxBytes=20 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    return handler


def configure(log_to_file: bool = True) -> LoggingRuntime:
    """Configure the scriptmark logger hierarchy.

    Idempotent: repeated calls return the originally configured runtime.
    """
    global _RUNTIME
    if _RUNTIME is not None:
        return _RUNTIME

    level = _parse_level(os.environ.get("SCRIPTMARK_LOG_LEVEL", "WARNING"))
    file_path = ""
    if log_to_file:
        file_path = os.environ.get("SCRIPTMARK_LOG_FILE") or _default_log_path()
        Path(file_path).parent.mkdir(parents=True, exist_ok=True)

    # [LAW:single-enforcer] All scriptmark module loggers propagate to this one logger.
    logger = logging.getLogger("scriptmark")
    logger.setLevel(level)
    logger.propagate = False
    logger.handlers.clear()
    logger.addHandler(_make_stream_handler(level))
    if file_path:
        logger.addHandler(_make_file_handler(level, file_path))

    logging.captureWarnings(True)

    _RUNTIME = LoggingRuntime(level=level, file_path=file_path)
    return _RUNTIME
