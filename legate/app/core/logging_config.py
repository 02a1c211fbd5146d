"""Process-wide logging setup."""

from __future__ import annotations

import logging

from legate.app.core.config import settings

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger once, at application start."""
    resolved = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(level=resolved, format=_FORMAT)
    logging.getLogger("legate").setLevel(resolved)
