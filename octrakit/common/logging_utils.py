"""
Logging helpers shared by the client facade and the CLI.
"""

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(logger: logging.Logger, log_level: int) -> logging.Logger:
    """
    Attach a stream handler to ``logger`` once and apply ``log_level``.

    Calling it again only changes the level; handlers are never duplicated.

    Args:
        logger: The logger instance to configure
        log_level: The logging level to set

    Returns:
        The configured logger
    """
    logger.setLevel(log_level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setLevel(log_level)
    return logger
