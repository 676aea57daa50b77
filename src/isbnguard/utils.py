"""Logging setup shared by the scanner and the Streamlit UI."""

from __future__ import annotations

import logging

PACKAGE_LOGGER = "isbnguard"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str, level: int | None = None) -> logging.Logger:
    """Return a logger under the isbnguard namespace.

    The stream handler lives on the package logger only, so module loggers
    reach it through propagation and never print a line twice. The package
    level defaults to INFO; pass level to change it for every module.
    """
    package = logging.getLogger(PACKAGE_LOGGER)
    if not package.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package.addHandler(handler)
        package.setLevel(logging.INFO)
    if level is not None:
        package.setLevel(level)

    if name == PACKAGE_LOGGER or name.startswith(f"{PACKAGE_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
