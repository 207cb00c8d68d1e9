"""
ProductNormalizer - the public face of the library.

Wires the parser, similarity scoring and catalog matcher together behind one
object. Module-level functions of the same names delegate to a shared
default instance.
"""

from functools import lru_cache
from typing import Iterable, List, Optional, Tuple

from product_normalizer.config import NormalizerSettings
from product_normalizer.matching.product_matcher import CandidateLike, ProductMatcher
from product_normalizer.matching.similarity import (
    calculate_jaccard_similarity as _jaccard,
    calculate_similarity as _similarity,
)
from product_normalizer.models import MatchResult, NormalizedProduct, ProductComponents
from product_normalizer.parsers.product_parser import ProductNameParser
from product_normalizer.parsers.tables import DEFAULT_TABLES, LookupTables
from product_normalizer.utils.logging_config import logger
from product_normalizer.utils.normalization import format_number


class ProductNormalizer:
    """
    Normalizes OCR product names and matches them against a catalog.

    Tables and settings are injected; by default the built-in Bulgarian
    tables are used and settings come from the environment.
    """

    # Confidence earned by each recognized field
    KNOWN_BASE_CONFIDENCE = 0.30
    FALLBACK_BASE_CONFIDENCE = 0.10
    BRAND_CONFIDENCE = 0.20
    MEASUREMENT_CONFIDENCE = 0.20
    TYPE_CONFIDENCE = 0.10
    FAT_CONFIDENCE = 0.10
    ATTRIBUTES_CONFIDENCE = 0.05
    BARCODE_CONFIDENCE = 0.05

    def __init__(self, tables: LookupTables = DEFAULT_TABLES, settings: Optional[NormalizerSettings] = None):
        self.tables = tables
        self.settings = settings or NormalizerSettings.from_env()
        self.parser = ProductNameParser(tables)
        self.matcher = ProductMatcher(
            tables=tables,
            parser=self.parser,
            threshold=self.settings.match_threshold,
            fuzzy_threshold=self.settings.fuzzy_token_threshold,
        )

    # --- Parsing and rendering ---

    def parse_product_name(self, raw: Optional[str]) -> ProductComponents:
        """Parses a raw OCR product name. Never raises on malformed text."""
        return self.parser.parse(raw)

    def normalize_product_name(self, components: ProductComponents) -> str:
        """
        Canonical string: base product, type, brand, fat%, size+unit.

        >>> normalizer.normalize_product_name(normalizer.parse_product_name("VEREIA MLEKO 3.6% 1L"))
        'мляко Vereia 3.6% 1л'
        """
        parts = [components.base_product]
        if components.type:
            parts.append(components.type)
        if components.brand:
            parts.append(components.brand)
        if components.fat_content is not None:
            parts.append(f"{format_number(components.fat_content)}%")
        if components.has_measurement:
            parts.append(f"{format_number(components.size)}{components.unit}")
        return ' '.join(parts)

    def create_display_name(self, components: ProductComponents) -> str:
        """Human-readable name, e.g. 'Мляко прясно Vereia 3.6% био 1 л'."""
        parts = [components.base_product[:1].upper() + components.base_product[1:]]
        if components.type:
            parts.append(components.type)
        if components.brand:
            parts.append(components.brand)
        if components.fat_content is not None:
            parts.append(f"{format_number(components.fat_content)}%")
        parts.extend(components.attributes)
        if components.has_measurement:
            parts.append(f"{format_number(components.size)} {components.unit}")
        return ' '.join(parts)

    def generate_keywords(self, components: ProductComponents) -> List[str]:
        """
        Search keywords for a parsed product, in first-seen order.

        Includes the base product with its synonyms, the brand (also without
        spaces), type, attributes, size+unit and barcode.
        """
        candidates = [components.base_product.lower()]
        candidates.extend(s.lower() for s in self.tables.synonyms_for(components.base_product))

        if components.brand:
            brand = components.brand.lower()
            candidates.extend([brand, brand.replace(' ', '')])
        if components.type:
            candidates.append(components.type.lower())
        candidates.extend(a.lower() for a in components.attributes)
        if components.has_measurement:
            candidates.append(f"{format_number(components.size)}{components.unit}")
        if components.barcode:
            candidates.append(components.barcode)

        keywords = []
        for keyword in candidates:
            if len(keyword) >= 2 and keyword not in keywords:
                keywords.append(keyword)
        return keywords

    def calculate_confidence(self, components: ProductComponents) -> float:
        """Weighted count of the fields the parser recognized, in [0, 1]."""
        if self.tables.is_known_base_product(components.base_product):
            confidence = self.KNOWN_BASE_CONFIDENCE
        else:
            confidence = self.FALLBACK_BASE_CONFIDENCE

        if components.brand:
            confidence += self.BRAND_CONFIDENCE
        if components.has_measurement:
            confidence += self.MEASUREMENT_CONFIDENCE
        if components.type:
            confidence += self.TYPE_CONFIDENCE
        if components.fat_content is not None:
            confidence += self.FAT_CONFIDENCE
        if components.attributes:
            confidence += self.ATTRIBUTES_CONFIDENCE
        if components.barcode:
            confidence += self.BARCODE_CONFIDENCE

        return round(min(1.0, confidence), 2)

    # --- Similarity and matching ---

    def calculate_similarity(self, a: Optional[str], b: Optional[str]) -> float:
        return _similarity(a, b, self.parser, self.settings.fuzzy_token_threshold)

    def calculate_jaccard_similarity(self, keywords1: List[str], keywords2: List[str]) -> float:
        return _jaccard(keywords1, keywords2)

    def match_product(
        self,
        components: ProductComponents,
        candidates: Iterable[CandidateLike],
    ) -> Optional[MatchResult]:
        """
        Best catalog candidate for a parsed product, or None.

        Candidates may be MatchCandidate instances or dicts with the same
        fields; malformed dicts raise pydantic.ValidationError.
        """
        return self.matcher.match(
            components,
            candidates,
            self.normalize_product_name(components),
            self.generate_keywords(components),
        )

    # --- Full pipeline ---

    def normalize(self, raw: Optional[str]) -> NormalizedProduct:
        """Parse, render, index and rate one product name."""
        components = self.parse_product_name(raw)
        result = NormalizedProduct(
            normalized_name=self.normalize_product_name(components),
            display_name=self.create_display_name(components),
            keywords=self.generate_keywords(components),
            confidence=self.calculate_confidence(components),
            components=components,
        )
        logger.debug(f"Normalized {raw!r} -> '{result.normalized_name}' (confidence {result.confidence})")
        return result

    def normalize_batch(self, names: Iterable[Optional[str]]) -> List[str]:
        normalized = [self.normalize_product_name(self.parse_product_name(name)) for name in names]
        logger.info(f"Normalized batch of {len(normalized)} product names")
        return normalized

    # --- Single-field helpers ---

    def extract_brand(self, raw: Optional[str]) -> Optional[str]:
        return self.parse_product_name(raw).brand

    def extract_size_unit(self, raw: Optional[str]) -> Optional[Tuple[float, str]]:
        components = self.parse_product_name(raw)
        if not components.has_measurement:
            return None
        return components.size, components.unit

    def extract_fat_content(self, raw: Optional[str]) -> Optional[float]:
        return self.parse_product_name(raw).fat_content


@lru_cache(maxsize=1)
def get_default_normalizer() -> ProductNormalizer:
    """Shared instance built from the default tables and environment settings."""
    return ProductNormalizer()


def parse_product_name(raw: Optional[str]) -> ProductComponents:
    return get_default_normalizer().parse_product_name(raw)


def normalize_product_name(components: ProductComponents) -> str:
    return get_default_normalizer().normalize_product_name(components)


def create_display_name(components: ProductComponents) -> str:
    return get_default_normalizer().create_display_name(components)


def generate_keywords(components: ProductComponents) -> List[str]:
    return get_default_normalizer().generate_keywords(components)


def calculate_similarity(a: Optional[str], b: Optional[str]) -> float:
    return get_default_normalizer().calculate_similarity(a, b)


def calculate_jaccard_similarity(keywords1: List[str], keywords2: List[str]) -> float:
    return _jaccard(keywords1, keywords2)


def match_product(components: ProductComponents, candidates: Iterable[CandidateLike]) -> Optional[MatchResult]:
    return get_default_normalizer().match_product(components, candidates)


def normalize(raw: Optional[str]) -> NormalizedProduct:
    return get_default_normalizer().normalize(raw)


def normalize_batch(names: Iterable[Optional[str]]) -> List[str]:
    return get_default_normalizer().normalize_batch(names)


def extract_brand(raw: Optional[str]) -> Optional[str]:
    return get_default_normalizer().extract_brand(raw)


def extract_size_unit(raw: Optional[str]) -> Optional[Tuple[float, str]]:
    return get_default_normalizer().extract_size_unit(raw)


def extract_fat_content(raw: Optional[str]) -> Optional[float]:
    return get_default_normalizer().extract_fat_content(raw)
