"""
Bulgarian grocery product-name normalizer.

Parses noisy OCR product names, renders canonical names and keywords, scores
similarity and matches products against a caller-supplied catalog.
"""

from .config import NormalizerSettings
from .models import MatchCandidate, MatchResult, NormalizedProduct, ProductComponents
from .normalizer import (
    ProductNormalizer,
    calculate_jaccard_similarity,
    calculate_similarity,
    create_display_name,
    extract_brand,
    extract_fat_content,
    extract_size_unit,
    generate_keywords,
    get_default_normalizer,
    match_product,
    normalize,
    normalize_batch,
    normalize_product_name,
    parse_product_name,
)
from .parsers import DEFAULT_TABLES, LookupTables, ProductNameParser

__version__ = "0.1.0"

__all__ = [
    "ProductNormalizer",
    "NormalizerSettings",
    "ProductComponents",
    "MatchCandidate",
    "MatchResult",
    "NormalizedProduct",
    "ProductNameParser",
    "LookupTables",
    "DEFAULT_TABLES",
    "get_default_normalizer",
    "parse_product_name",
    "normalize_product_name",
    "create_display_name",
    "generate_keywords",
    "calculate_similarity",
    "calculate_jaccard_similarity",
    "match_product",
    "normalize",
    "normalize_batch",
    "extract_brand",
    "extract_size_unit",
    "extract_fat_content",
]
