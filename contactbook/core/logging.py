import logging
import sys

from contactbook.core.config import get_settings


def get_logger(name: str, log_level: str | None = None) -> logging.Logger:
    """
    Configures and returns a logger.
    """
    logger = logging.getLogger(name)
    logger.setLevel(log_level or get_settings().LOG_LEVEL)

    # get_logger is called once per module, but reloads must not stack handlers
    if not logger.handlers:
        # Create a handler to write logs to the console
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
