"""
Similarity scoring and catalog matching.
"""

from .product_matcher import ProductMatcher
from .similarity import (
    FUZZY_TOKEN_THRESHOLD,
    TOKEN_WEIGHT_CAP,
    calculate_jaccard_similarity,
    calculate_similarity,
    token_set_similarity,
)

__all__ = [
    "ProductMatcher",
    "FUZZY_TOKEN_THRESHOLD",
    "TOKEN_WEIGHT_CAP",
    "calculate_jaccard_similarity",
    "calculate_similarity",
    "token_set_similarity",
]
