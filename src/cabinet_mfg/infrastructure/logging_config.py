"""Process-wide logging setup for the command line."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: int = logging.WARNING, *, force: bool = False) -> None:
    """Install a root handler unless the host application already has one.

    Args:
        level: Root logger level.
        force: Replace existing handlers.
    """
    root = logging.getLogger()
    if root.handlers and not force:
        root.setLevel(level)
        return
    logging.basicConfig(level=level, format=LOG_FORMAT, force=force)
