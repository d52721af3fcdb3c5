"""Deprecation notices for renamed session options."""

import logging

DEPRECATION_LOGGER = "webdriver_bridge.deprecations"


def default_logger() -> logging.Logger:
    return logging.getLogger(DEPRECATION_LOGGER)


def deprecate(logger: logging.Logger, old: str, new: str) -> None:
    """Log ``[DEPRECATION] <old> is deprecated. Use <new> instead.`` at WARNING."""
    logger.warning(f"[DEPRECATION] {old} is deprecated. Use {new} instead.")


__all__ = [
    "DEPRECATION_LOGGER",
    "default_logger",
    "deprecate",
]
