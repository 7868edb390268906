# -*- coding: utf-8 -*-
"""exifkit.log – levelled diagnostics to stderr, optionally mirrored to a file.

Usage::
    from exifkit.log import get_logger
    log = get_logger("session")
    log.info("opened %s", path)
    log.debug("skipping id %s", tag_id)

EXIFKIT_LOG_LEVEL picks the threshold (DEBUG | INFO | WARNING | ERROR, default
WARNING); EXIFKIT_LOG_FILE appends every emitted line to that file as well.
"""
from __future__ import annotations

import os
import sys
from datetime import datetime
from typing import Any, TextIO

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

LOG_FILE: str | None = os.environ.get("EXIFKIT_LOG_FILE", "").strip() or None
LOG_LEVEL: str = os.environ.get("EXIFKIT_LOG_LEVEL", "WARNING").strip().upper()

# One append handle shared by every logger; opened on first emitted line.
_sink: TextIO | None = None
_sink_failed = False


def _rank(level: str) -> int:
    return _LEVELS.index(level) if level in _LEVELS else 0


def _file_sink() -> TextIO | None:
    global _sink, _sink_failed
    if _sink is None and LOG_FILE and not _sink_failed:
        try:
            _sink = open(LOG_FILE, "a", encoding="utf-8")  # noqa: SIM115
        except OSError:
            _sink_failed = True
    return _sink


def _emit(line: str) -> None:
    for stream in (_file_sink(), sys.stderr):
        if stream is None:
            continue
        try:
            stream.write(line)
            stream.flush()
        except (OSError, ValueError):
            # closed or unwritable stream; diagnostics must not break callers
            continue


class _Logger:
    def __init__(self, name: str) -> None:
        self._prefix = f"exifkit.{name}"

    def _log(self, level: str, msg: str, args: tuple) -> None:
        if _rank(level) < _rank(LOG_LEVEL):
            return
        text = msg % args if args else msg
        stamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        _emit(f"{stamp} {level} {self._prefix} {text}\n")

    def debug(self, msg: str, *args: Any) -> None:
        self._log("DEBUG", msg, args)

    def info(self, msg: str, *args: Any) -> None:
        self._log("INFO", msg, args)

    def warning(self, msg: str, *args: Any) -> None:
        self._log("WARNING", msg, args)

    def error(self, msg: str, *args: Any) -> None:
        self._log("ERROR", msg, args)


_LOGGERS: dict[str, _Logger] = {}


def get_logger(name: str) -> _Logger:
    """Shared logger for ``name``."""
    if name not in _LOGGERS:
        _LOGGERS[name] = _Logger(name)
    return _LOGGERS[name]


def set_level(level: str) -> None:
    global LOG_LEVEL
    level = str(level or "").strip().upper()
    if level not in _LEVELS:
        raise ValueError(f"invalid log level: {level!r}")
    LOG_LEVEL = level
