"""
Logging infrastructure.

Provides the logger factory shared by the registry, the execution layer
and the API, and the one-time configuration used by the API process.
"""
import logging
from typing import Union

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Configure the root logger for the API process."""
    logging.basicConfig(level=level, format=LOG_FORMAT)


def get_logger(name: str) -> logging.Logger:
    """
    Get logger instance.

    When the root logger is not configured yet, a stream handler is
    attached to the named logger so library use still produces output.
    Once ``configure_logging`` has run, records propagate to the root
    handler only.

    Args:
        name: Logger name (usually module name)

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)
    if not logger.handlers and not logging.getLogger().handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    if logger.level == logging.NOTSET:
        logger.setLevel(logging.INFO)
    return logger
