"""
Catalog matching for parsed products.

ProductMatcher scores a parsed product against caller-supplied catalog
candidates and returns the best one only when it clears the acceptance
threshold.
"""

import math
from typing import Iterable, List, Mapping, Optional, Union

from product_normalizer.config import DEFAULT_FUZZY_TOKEN_THRESHOLD, DEFAULT_MATCH_THRESHOLD
from product_normalizer.matching.similarity import (
    calculate_jaccard_similarity,
    calculate_similarity,
    fuzzy_ratio,
)
from product_normalizer.models import MatchCandidate, MatchResult, ProductComponents
from product_normalizer.parsers.product_parser import ProductNameParser
from product_normalizer.parsers.tables import DEFAULT_TABLES, LookupTables
from product_normalizer.utils.logging_config import logger
from product_normalizer.utils.normalization import clean_text

CandidateLike = Union[MatchCandidate, Mapping]


class ProductMatcher:
    """
    Composite scorer over catalog candidates.

    Signals and weights (a signal only counts when both sides carry it):
    - name similarity   0.40, always
    - brand equality    0.25
    - size and unit     0.20
    - keyword overlap   0.15, when the candidate has keywords
    The score is the weighted average over the signals that apply. Brand and
    size agreement are only credited when both sides name the same base
    product.
    """

    NAME_WEIGHT = 0.40
    BRAND_WEIGHT = 0.25
    SIZE_WEIGHT = 0.20
    KEYWORD_WEIGHT = 0.15

    def __init__(
        self,
        tables: LookupTables = DEFAULT_TABLES,
        parser: Optional[ProductNameParser] = None,
        threshold: float = DEFAULT_MATCH_THRESHOLD,
        fuzzy_threshold: float = DEFAULT_FUZZY_TOKEN_THRESHOLD,
    ):
        self.tables = tables
        self.parser = parser or ProductNameParser(tables)
        self.threshold = threshold
        self.fuzzy_threshold = fuzzy_threshold

    def match(
        self,
        components: ProductComponents,
        candidates: Iterable[CandidateLike],
        normalized_name: str,
        keywords: List[str],
    ) -> Optional[MatchResult]:
        """
        Picks the best candidate for a parsed product.

        Args:
            components: The parsed product.
            candidates: MatchCandidate instances or plain dicts with the same fields.
            normalized_name: Normalized name of the parsed product.
            keywords: Keywords of the parsed product.

        Returns:
            MatchResult for the winner, or None when no candidate reaches the threshold.
            Ties break on brand match, then size match, then catalog order.
        """
        best = None
        best_key = None

        for index, raw_candidate in enumerate(candidates):
            candidate = MatchCandidate.model_validate(raw_candidate)
            result = self.score(components, candidate, normalized_name, keywords)
            key = (round(result.score, 6), result.brand_match, result.size_match, -index)
            if best_key is None or key > best_key:
                best, best_key = result, key

        if best is None:
            logger.debug(f"No candidates to match '{normalized_name}' against")
            return None

        if best.score < self.threshold:
            logger.debug(f"Best candidate {best.candidate.id} for '{normalized_name}' "
                         f"scored {best.score:.3f}, below threshold {self.threshold}")
            return None

        logger.debug(f"Matched '{normalized_name}' to candidate {best.candidate.id} ({best.score:.3f})")
        return best

    def score(
        self,
        components: ProductComponents,
        candidate: MatchCandidate,
        normalized_name: str,
        keywords: List[str],
    ) -> MatchResult:
        """Scores one candidate; see the class docstring for the weighting."""
        brand_match = self._brands_equal(components.brand, candidate.brand)
        size_match = self._sizes_equal(components, candidate)

        if normalized_name.strip().lower() == candidate.normalized_name.strip().lower():
            return MatchResult(
                candidate=candidate,
                score=1.0,
                name_similarity=1.0,
                keyword_similarity=calculate_jaccard_similarity(keywords, candidate.keywords),
                brand_match=brand_match,
                size_match=size_match,
                base_match=True,
            )

        name_similarity = calculate_similarity(
            normalized_name, candidate.normalized_name, self.parser, self.fuzzy_threshold
        )
        base_match = self._base_products_equal(components, candidate)
        weighted = self.NAME_WEIGHT * name_similarity
        total_weight = self.NAME_WEIGHT

        if components.brand and candidate.brand:
            total_weight += self.BRAND_WEIGHT
            if brand_match and base_match:
                weighted += self.BRAND_WEIGHT

        if components.has_measurement and candidate.size is not None and candidate.unit:
            total_weight += self.SIZE_WEIGHT
            if size_match and base_match:
                weighted += self.SIZE_WEIGHT

        keyword_similarity = 0.0
        if candidate.keywords:
            keyword_similarity = calculate_jaccard_similarity(keywords, candidate.keywords)
            weighted += self.KEYWORD_WEIGHT * keyword_similarity
            total_weight += self.KEYWORD_WEIGHT

        return MatchResult(
            candidate=candidate,
            score=min(1.0, round(weighted / total_weight, 6)),
            name_similarity=name_similarity,
            keyword_similarity=keyword_similarity,
            brand_match=brand_match,
            size_match=size_match,
            base_match=base_match,
        )

    def _base_products_equal(self, components: ProductComponents, candidate: MatchCandidate) -> bool:
        candidate_base = self.parser.parse(candidate.normalized_name).base_product
        return fuzzy_ratio(components.base_product, candidate_base) >= self.fuzzy_threshold

    def _canonical_brand(self, brand: str) -> str:
        return (self.tables.lookup_brand(clean_text(brand)) or brand).casefold()

    def _brands_equal(self, brand: Optional[str], other: Optional[str]) -> bool:
        if not brand or not other:
            return False
        return self._canonical_brand(brand) == self._canonical_brand(other)

    def _sizes_equal(self, components: ProductComponents, candidate: MatchCandidate) -> bool:
        if not components.has_measurement or candidate.size is None or not candidate.unit:
            return False
        unit = self.tables.lookup_unit(candidate.unit.strip()) or candidate.unit.strip()
        own_unit = self.tables.lookup_unit(components.unit) or components.unit
        return unit == own_unit and math.isclose(components.size, candidate.size)
