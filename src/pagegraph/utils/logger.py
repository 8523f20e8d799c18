from __future__ import annotations

import logging

ROOT_LOGGER_NAME = "pagegraph"

# Library code stays silent unless the application configures logging.
logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a logger under the package namespace.
    get_logger("parsers.graphml") -> logger named "pagegraph.parsers.graphml".
    """
    if not name:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
