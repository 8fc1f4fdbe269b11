"""Logging for the **AEO Scout** project.

Highlights
----------
* One project logger, ``"AeoScout"``: stderr plus an optional rotating log file.
* Modules log through the importable instance :data:`logger`::

      from aeo_scout.logger import logger
      logger.debug("Malformed JSON-LD block: %s", error)
* :func:`audit_logger` prefixes every record with the audited URL.
* The CLI calls :func:`init_logging` once with the user's level and file.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Final, List, MutableMapping, Tuple, Union

LOG_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "AeoScout"

_MAX_BYTES: Final[int] = 5 * 1024 * 1024
_BACKUP_COUNT: Final[int] = 3

_LevelT = Union[int, str]


def _build_handlers(log_file: str | Path | None, fmt: str) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(
                filename=str(log_file),
                maxBytes=_MAX_BYTES,
                backupCount=_BACKUP_COUNT,
                encoding="utf-8",
            )
        )
    formatter = logging.Formatter(fmt)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = LOG_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """(Re)configure the project logger.

    Parameters
    ----------
    level
        Numeric or textual logging level (e.g. ``"DEBUG"``).
    log_file
        Path to a logfile. *None* → stderr only.
    log_format
        Format string for :class:`logging.Formatter`.
    replace_handlers
        *True* – close and drop existing handlers first; *False* – append.
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    if replace_handlers:
        for old in list(lg.handlers):
            lg.removeHandler(old)
            old.close()
    for handler in _build_handlers(log_file, log_format):
        lg.addHandler(handler)
    lg.propagate = False
    return lg


def init_logging(level: _LevelT = "INFO", log_file: str | Path | None = None) -> logging.Logger:
    """Shortcut used by the CLI."""
    return configure(level=level, log_file=log_file)


class AuditLogAdapter(logging.LoggerAdapter):
    """Prefixes messages with ``[url]`` of the page under audit."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        return f"[{self.extra['url']}] {msg}", kwargs


def audit_logger(url: str) -> AuditLogAdapter:
    return AuditLogAdapter(logging.getLogger(LOGGER_NAME), {"url": url})


logger: logging.Logger = configure(level="WARNING")

__all__ = ["logger", "configure", "init_logging", "audit_logger", "LOG_FORMAT", "LOGGER_NAME"]
