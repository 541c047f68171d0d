"""Utility helpers for crocodoc."""

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger.

    Args:
        level: Name of the logging level, e.g. "DEBUG"
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    logging.basicConfig(level=numeric_level, format=LOG_FORMAT, force=True)
    # urllib3 logs every connection at DEBUG, including query strings with the token
    logging.getLogger("urllib3").setLevel(max(numeric_level, logging.INFO))


__all__ = ["setup_logging"]
