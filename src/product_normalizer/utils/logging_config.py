import logging
import os
import sys
from typing import Optional

LOG_LEVEL_ENV = "PRODUCT_NORMALIZER_LOG_LEVEL"


def level_from_env(default: int = logging.INFO) -> int:
    """Reads the log level name from PRODUCT_NORMALIZER_LOG_LEVEL; unknown names keep the default."""
    level = logging.getLevelName(os.getenv(LOG_LEVEL_ENV, "").strip().upper())
    return level if isinstance(level, int) else default


def setup_logging(name: str = "product_normalizer", level: Optional[int] = None) -> logging.Logger:
    """
    Sets up the library logger.

    Args:
        name: Name of the logger.
        level: Logging level. Defaults to PRODUCT_NORMALIZER_LOG_LEVEL, else INFO.

    Returns:
        logging.Logger: Configured logger instance.
    """
    logger = logging.getLogger(name)

    # Configured once per name
    if logger.handlers:
        return logger

    logger.setLevel(level if level is not None else level_from_env())

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    logger.addHandler(handler)

    return logger


# Default logger for the package
logger = setup_logging()
