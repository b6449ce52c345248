"""Logging configuration helpers for the quiz backend."""

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level="INFO"):
    """Configure root logging once and return the application logger."""
    root = logging.getLogger()
    if not any(getattr(handler, "_quiz_backend", False) for handler in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._quiz_backend = True
        root.addHandler(handler)
    root.setLevel(level)
    return logging.getLogger("quiz_backend")
