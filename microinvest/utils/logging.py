"""Rich logging utilities."""

from __future__ import annotations

import logging
import os
from typing import Optional

from rich.logging import RichHandler

LOG_LEVEL_ENV = "MICROINVEST_LOG_LEVEL"
PACKAGE_LOGGER = "microinvest"


def _resolve_level(level: str | int | None) -> int:
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, int):
        return level
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level {level!r}")
    return numeric


def setup_logging(level: str | int | None = None, *, force: bool = False) -> None:
    """Configure root logger with a Rich handler.

    ``level`` falls back to ``$MICROINVEST_LOG_LEVEL`` and then ``INFO``.
    """

    logging.basicConfig(
        level=_resolve_level(level),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, markup=True, show_path=False)],
        force=force,
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the package namespace, ensuring setup has been applied."""

    if not logging.getLogger().handlers:
        setup_logging()
    if name is None:
        return logging.getLogger(PACKAGE_LOGGER)
    if name != PACKAGE_LOGGER and not name.startswith(f"{PACKAGE_LOGGER}."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


__all__ = ["setup_logging", "get_logger", "LOG_LEVEL_ENV"]
