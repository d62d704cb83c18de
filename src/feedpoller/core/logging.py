"""Logging setup for the CLI and embedding applications.

Library modules only create module loggers; nothing is configured until
``configure_logging`` is called.
"""

from __future__ import annotations

import logging

from rich.logging import RichHandler

_QUIET_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: str = "INFO", fmt: str = "console") -> logging.Logger:
    """Configure root logging and return the ``feedpoller`` logger.

    Args:
        level: Logging level name.
        fmt: ``console`` for rich output, ``plain`` for a timestamped stream.

    Returns:
        The package logger.
    """
    if fmt == "console":
        handler: logging.Handler = RichHandler(show_path=False, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="%H:%M:%S"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)s [%(name)s] %(message)s",
                datefmt="%H:%M:%S",
            )
        )

    logging.basicConfig(level=level.upper(), handlers=[handler], force=True)

    # Quiet noisy loggers
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logging.getLogger("feedpoller")
