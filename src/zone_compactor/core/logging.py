"""Logging helpers for the compactor."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Mapping, Optional

from zone_compactor.core.time import utc_now_rfc3339_micro


_CONFIGURED = False
_FILE_HANDLERS: dict[str, logging.Handler] = {}
_LOG_FORMAT = "%(asctime)s,%(msecs)03d [%(levelname)s] %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_SEVERITY_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def configure_logging(level: int = logging.INFO) -> None:
    """Configure root logging once for CLI usage; later calls only adjust the level."""
    global _CONFIGURED
    if _CONFIGURED:
        logging.getLogger().setLevel(level)
        return
    logging.basicConfig(
        level=level,
        format=_LOG_FORMAT,
        datefmt=_DATE_FORMAT,
    )
    _CONFIGURED = True


def add_file_handler(path: Path, level: int = logging.INFO) -> None:
    """Mirror log output into ``path``, once per resolved path."""
    configure_logging(level=level)
    resolved = str(path.resolve())
    if resolved in _FILE_HANDLERS:
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))
    logging.getLogger().addHandler(handler)
    _FILE_HANDLERS[resolved] = handler


def emit_event(
    logger: logging.Logger,
    event: str,
    payload: Mapping[str, object],
    *,
    severity: str = "INFO",
) -> None:
    """Log a single-line JSON event record at the level matching ``severity``."""
    record: dict[str, object] = {
        "timestamp_utc": utc_now_rfc3339_micro(),
        "component": "zone_compactor",
        "event": event,
        "severity": severity.upper(),
    }
    record.update(payload)
    level = _SEVERITY_LEVELS.get(severity.upper(), logging.INFO)
    logger.log(level, "%s %s", event, json.dumps(record, ensure_ascii=True, sort_keys=True))


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Return a configured logger with optional level override."""
    configure_logging()
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger
