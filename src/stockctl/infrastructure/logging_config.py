"""Logging setup for the command-line entry point."""

from __future__ import annotations

import logging


def setup_logging(level: str = "WARNING") -> None:
    """Attach a stderr handler to the root logger, once.

    Later calls only adjust the level, so repeated CLI invocations in
    the same process (as in tests) do not stack handlers.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))
    if root.handlers:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s - %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    root.addHandler(handler)
