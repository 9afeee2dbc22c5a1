"""Logging for the ``cashflow`` package.

Entry points call :func:`configure_logging` once; library modules only ask
for ``get_logger("cashflow.<module>")`` and never attach handlers.
"""

from __future__ import annotations

import logging

_PKG_LOGGER_NAME = "cashflow"
_CONFIGURED = False


def configure_logging(level: int | str = logging.INFO) -> None:
    """Send package log records to stderr at ``level`` (a number or level name)."""

    global _CONFIGURED
    if _CONFIGURED:
        return

    if isinstance(level, str):
        level = logging.getLevelName(level.strip().upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    logger.handlers = [h for h in logger.handlers if not isinstance(h, logging.NullHandler)]
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
