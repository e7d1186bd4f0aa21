"""Process-wide logging setup."""

from __future__ import annotations

import logging

from superwallet.core.config import Settings


def configure_logging(settings: Settings) -> None:
    level = logging.DEBUG if settings.debug else getattr(logging, settings.logging.level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=settings.logging.format)
    logging.getLogger("superwallet").setLevel(level)
    if not settings.database.echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


__all__ = ["configure_logging"]
