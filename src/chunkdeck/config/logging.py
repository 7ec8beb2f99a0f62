"""Shared logging helpers for chunkdeck."""

from __future__ import annotations

import logging

# httpx logs every request at INFO; one line per card drowns the run summary.
_NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger once with defaults suited to CLI output.

    Pass ``force=True`` to reconfigure during tests or specialised entry points.
    Transport loggers stay at WARNING unless ``level`` asks for DEBUG output.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    transport_level = level if level <= logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)
