"""
Runtime settings for the product normalizer.

Values come from the process environment (optionally seeded from a `.env`
file) and are frozen once read.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from product_normalizer.utils.logging_config import logger

DEFAULT_MATCH_THRESHOLD = 0.6
DEFAULT_FUZZY_TOKEN_THRESHOLD = 0.8


def _read_unit_interval(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={raw!r}, using {default}")
        return default
    if not 0.0 <= value <= 1.0:
        logger.warning(f"Ignoring out-of-range {name}={value}, using {default}")
        return default
    return value


@dataclass(frozen=True)
class NormalizerSettings:
    """Tunable thresholds for matching and similarity scoring."""

    match_threshold: float = DEFAULT_MATCH_THRESHOLD
    fuzzy_token_threshold: float = DEFAULT_FUZZY_TOKEN_THRESHOLD

    @classmethod
    def from_env(cls) -> "NormalizerSettings":
        """
        Builds settings from environment variables.

        Recognized variables:
            PRODUCT_MATCH_THRESHOLD: minimum composite score accepted by match_product
            PRODUCT_FUZZY_TOKEN_THRESHOLD: minimum ratio for two tokens to count as fuzzy equal
        """
        load_dotenv()
        return cls(
            match_threshold=_read_unit_interval("PRODUCT_MATCH_THRESHOLD", DEFAULT_MATCH_THRESHOLD),
            fuzzy_token_threshold=_read_unit_interval(
                "PRODUCT_FUZZY_TOKEN_THRESHOLD", DEFAULT_FUZZY_TOKEN_THRESHOLD
            ),
        )
