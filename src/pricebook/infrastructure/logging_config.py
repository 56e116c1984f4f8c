"""Logging configuration helpers."""

from __future__ import annotations

import logging

_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Marks handlers installed here so a second call replaces them
_HANDLER_NAME = "pricebook-console"


def configure_logging(level: str | int = logging.WARNING) -> None:
    """Send log records to stderr at ``level``.

    Safe to call more than once.  Handlers installed by other code
    (pytest's capture handler, for instance) are left alone.
    """
    root = logging.getLogger()
    root.setLevel(level)

    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)
            handler.close()

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
    root.addHandler(handler)

    # SQLAlchemy engine logging is noisy below WARNING
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
