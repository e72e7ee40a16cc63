"""
Logging setup for the gold_calculator package.
"""
import logging
from typing import Optional

LOG_NAME = "gold_calculator"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Attach a single stream handler to the package logger.

    Safe to call more than once (Streamlit re-runs the script on every
    interaction); later calls only update the level.
    """
    if level is None:
        from .settings import get_settings
        level = get_settings().log_level

    logger = logging.getLogger(LOG_NAME)
    logger.setLevel(level)

    if not any(getattr(h, "_gold_calculator", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._gold_calculator = True
        logger.addHandler(handler)
        logger.propagate = False

    return logger
