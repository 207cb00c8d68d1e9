"""
Shared helpers: logging and text normalization.
"""

from .logging_config import logger, setup_logging
from .normalization import (
    clean_text,
    format_number,
    parse_decimal,
    script_skeleton,
)

__all__ = [
    "logger",
    "setup_logging",
    "clean_text",
    "format_number",
    "parse_decimal",
    "script_skeleton",
]
