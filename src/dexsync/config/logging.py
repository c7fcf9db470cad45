"""Shared logging helpers for dexsync."""

from __future__ import annotations

import logging


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Set up root logging for the CLI.

    Runs once unless ``force`` is set, which tests use to reset handlers.
    ``-v`` passes DEBUG.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    # httpx logs every request line at INFO.
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
