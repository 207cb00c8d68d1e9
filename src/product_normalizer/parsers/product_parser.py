"""
Product-name parsing for Bulgarian grocery receipts.

This module provides the ProductNameParser class, which turns a raw OCR product
string into a ProductComponents model.
"""

import math
import re
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Tuple

from product_normalizer.models import ProductComponents
from product_normalizer.parsers.tables import (
    DEFAULT_TABLES,
    FALLBACK_BASE_PRODUCT,
    LookupTables,
)
from product_normalizer.utils.logging_config import logger
from product_normalizer.utils.normalization import (
    clean_text,
    format_number,
    has_letters,
    parse_decimal,
)


@dataclass(frozen=True)
class NumericFields:
    """Output of the numeric stage."""
    size: Optional[float] = None
    unit: Optional[str] = None
    fat_content: Optional[float] = None
    barcode: Optional[str] = None
    consumed: FrozenSet[int] = frozenset()


@dataclass(frozen=True)
class WordFields:
    """Output of the brand / type / attribute stage."""
    brand: Optional[str] = None
    type: Optional[str] = None
    attributes: Tuple[str, ...] = ()
    leftovers: Tuple[str, ...] = ()


class ProductNameParser:
    """
    Layered parser for noisy, multi-script product names.

    Design:
    - Every stage is a pure method with a typed input and output, so each
      heuristic can be tested on its own.
    - All vocabulary comes from an injected LookupTables bundle.
    - Bad input degrades to empty fields; nothing here raises on OCR noise.
    """

    NUMBER = r'\d+(?:[.,]\d+)?'

    PERCENT_RE = re.compile(rf'^({NUMBER})%$')
    PACK_RE = re.compile(rf'^(\d+)[xх×*]({NUMBER})([^\W\d_]+)$', re.IGNORECASE)
    MEASURE_RE = re.compile(rf'^({NUMBER})([^\W\d_]+)$')
    BARCODE_RE = re.compile(r'^\d{8,14}$')
    NUMBER_RE = re.compile(rf'^{NUMBER}$')

    GLUE_PERCENT_RE = re.compile(rf'({NUMBER})\s+%')
    GLUE_PACK_RE = re.compile(r'(\d)\s*[xх×*]\s*(\d)', re.IGNORECASE)

    MIN_ATTRIBUTE_LENGTH = 3

    def __init__(self, tables: LookupTables = DEFAULT_TABLES):
        self.tables = tables
        units = sorted(tables.units, key=len, reverse=True)
        self.glue_unit_re = re.compile(
            rf'({self.NUMBER})\s+({"|".join(re.escape(u) for u in units)})(?![^\W\d_])',
            re.IGNORECASE,
        )

    def parse(self, raw: Optional[str]) -> ProductComponents:
        """
        Main entry point for parsing one product name.

        Execution pipeline:
        1. Cleanup: strip punctuation noise, glue numbers to their units.
        2. Tokenize on whitespace.
        3. Numeric stage: fat percentage, size/unit, barcode.
        4. Base product: first table hit in input order.
        5. Brand, type and attributes from the remaining words.
        6. Fallback base product when nothing was recognized.
        """
        tokens = self.tokenize(raw)
        numeric = self.extract_numeric(tokens)
        base_product, base_span = self.extract_base_product(tokens, numeric.consumed)
        words = self.extract_words(tokens, numeric.consumed, base_span)

        attributes = list(words.attributes)
        if base_product is None:
            base_product = FALLBACK_BASE_PRODUCT
            if words.leftovers:
                base_product = words.leftovers[0]
                attributes.remove(base_product)

        logger.debug(f"Parsed {raw!r}: base={base_product}, brand={words.brand}, "
                     f"size={numeric.size}{numeric.unit or ''}, fat={numeric.fat_content}")

        return ProductComponents(
            base_product=base_product,
            brand=words.brand,
            type=words.type,
            size=numeric.size,
            unit=numeric.unit,
            fat_content=numeric.fat_content,
            attributes=attributes,
            barcode=numeric.barcode,
        )

    # --- Stage 1-2: cleanup and tokenization ---

    def prepare(self, raw: Optional[str]) -> str:
        """Cleans the string and glues '1 литър' -> '1литър', '3,6 %' -> '3,6%'."""
        text = clean_text(raw)
        text = self.GLUE_PERCENT_RE.sub(r'\1%', text)
        text = self.GLUE_PACK_RE.sub(r'\1x\2', text)
        return self.glue_unit_re.sub(r'\1\2', text)

    def tokenize(self, raw: Optional[str]) -> List[str]:
        return self.prepare(raw).split()

    # --- Stage 3: numbers ---

    def parse_measure(self, token: str) -> Optional[Tuple[float, str]]:
        """Returns (size, canonical unit) for tokens like '1L', '400gr', '6x330мл'."""
        pack = self.PACK_RE.match(token)
        if pack:
            count, amount = parse_decimal(pack.group(1)), parse_decimal(pack.group(2))
            unit = self.tables.lookup_unit(pack.group(3))
            if unit and count is not None and amount is not None and math.isfinite(count * amount):
                return count * amount, unit
            return None

        measure = self.MEASURE_RE.match(token)
        if measure:
            size = parse_decimal(measure.group(1))
            unit = self.tables.lookup_unit(measure.group(2))
            if unit and size is not None:
                return size, unit
        return None

    def parse_percentage(self, token: str) -> Optional[float]:
        match = self.PERCENT_RE.match(token)
        return parse_decimal(match.group(1)) if match else None

    def extract_numeric(self, tokens: List[str]) -> NumericFields:
        """
        Scans tokens for percentages, measurements and barcodes.

        A percentage is always fat content, never size. The first of each kind
        wins; later ones are consumed and dropped. Bare numbers are consumed
        without being reported as size.
        """
        size = unit = fat_content = barcode = None
        consumed = set()

        for i, token in enumerate(tokens):
            percentage = self.parse_percentage(token)
            if percentage is not None:
                if fat_content is None:
                    fat_content = percentage
                consumed.add(i)
                continue

            measure = self.parse_measure(token)
            if measure is not None:
                if size is None:
                    size, unit = measure
                consumed.add(i)
                continue

            if self.BARCODE_RE.match(token):
                if barcode is None:
                    barcode = token
                consumed.add(i)
            elif self.NUMBER_RE.match(token):
                consumed.add(i)

        return NumericFields(
            size=size,
            unit=unit,
            fat_content=fat_content,
            barcode=barcode,
            consumed=frozenset(consumed),
        )

    # --- Stage 4: base product ---

    def _match_phrase(self, tokens: List[str], start: int, blocked, lookup) -> Tuple[int, Optional[str]]:
        """Longest phrase starting at `start` that `lookup` recognizes."""
        longest = min(self.tables.max_phrase_len, len(tokens) - start)
        for length in range(longest, 0, -1):
            span = range(start, start + length)
            if any(i in blocked for i in span):
                continue
            value = lookup(' '.join(tokens[start:start + length]))
            if value:
                return length, value
        return 0, None

    def extract_base_product(self, tokens: List[str], blocked: FrozenSet[int]) -> Tuple[Optional[str], FrozenSet[int]]:
        """First base-product phrase in input order, with the token indices it covers."""
        for i in range(len(tokens)):
            if i in blocked:
                continue
            length, base_product = self._match_phrase(tokens, i, blocked, self.tables.lookup_base_product)
            if base_product:
                return base_product, frozenset(range(i, i + length))
        return None, frozenset()

    # --- Stage 5: brand, type, attributes ---

    def extract_brand(self, tokens: List[str], blocked: FrozenSet[int]) -> Tuple[Optional[str], FrozenSet[int]]:
        """
        First brand phrase in input order. Every later brand phrase is consumed too.

        Brand phrases may overlap the base product ("Coca Cola", "Кириешки"
        name both the product and its maker), so only numeric tokens block.
        """
        brand = None
        consumed = set()
        i = 0
        while i < len(tokens):
            length, found = self._match_phrase(tokens, i, blocked, self.tables.lookup_brand)
            if not found:
                i += 1
                continue
            if brand is None:
                brand = found
            consumed.update(range(i, i + length))
            i += length
        return brand, frozenset(consumed)

    def _classify(self, phrase: str) -> Tuple[Optional[str], Optional[str]]:
        for kind, lookup in (
            ('base', self.tables.lookup_base_product),
            ('type', self.tables.lookup_type),
            ('attribute', self.tables.lookup_attribute),
        ):
            value = lookup(phrase)
            if value:
                return kind, value
        return None, None

    def extract_words(self, tokens: List[str], numeric: FrozenSet[int], base_span: FrozenSet[int]) -> WordFields:
        """Assigns brand, type and attributes; collects unrecognized content words."""
        brand, brand_span = self.extract_brand(tokens, numeric)
        blocked = numeric | base_span | brand_span

        product_type = None
        attributes: List[str] = []
        leftovers: List[str] = []

        i = 0
        while i < len(tokens):
            if i in blocked:
                i += 1
                continue

            kind, value = None, None
            longest = min(self.tables.max_phrase_len, len(tokens) - i)
            for length in range(longest, 0, -1):
                if any(j in blocked for j in range(i, i + length)):
                    continue
                kind, value = self._classify(' '.join(tokens[i:i + length]))
                if kind:
                    break

            if kind == 'type' and product_type is None:
                product_type = value
            elif kind in ('type', 'attribute'):
                if value not in attributes:
                    attributes.append(value)
            elif kind is None:
                length = 1
                token = tokens[i].lower()
                if self._is_content_word(token) and token not in attributes:
                    attributes.append(token)
                    leftovers.append(token)
            # kind == 'base': a repeated product noun adds nothing

            i += length

        return WordFields(
            brand=brand,
            type=product_type,
            attributes=tuple(attributes),
            leftovers=tuple(leftovers),
        )

    def _is_content_word(self, token: str) -> bool:
        return (
            len(token) >= self.MIN_ATTRIBUTE_LENGTH
            and has_letters(token)
            and not self.tables.is_stop_word(token)
        )

    # --- Canonical tokens for similarity scoring ---

    def classified_tokens(self, raw: Optional[str]) -> List[Tuple[str, str]]:
        """
        Reduces a product name to script-independent (token, kind) pairs.

        Kinds are 'fat', 'size', 'number', 'brand', 'base', 'type', 'attribute' and 'word'.
        Table phrases become their canonical value (brands lowercased),
        numbers are rendered with '.' decimals, and unknown words are
        lowercased. Order of first appearance is kept; duplicates are dropped.
        """
        tokens = self.tokenize(raw)
        result: List[Tuple[str, str]] = []
        seen = set()
        i = 0
        while i < len(tokens):
            length, (kind, value) = 1, self._canonical_number(tokens[i])
            if value is None:
                length, kind, value = self._canonical_phrase(tokens, i)
            if value is None:
                kind, value = 'word', tokens[i].lower()
            if value not in seen and not self.tables.is_stop_word(value):
                seen.add(value)
                result.append((value, kind))
            i += length
        return result

    def canonical_tokens(self, raw: Optional[str]) -> List[str]:
        return [token for token, _ in self.classified_tokens(raw)]

    def _canonical_number(self, token: str) -> Tuple[Optional[str], Optional[str]]:
        percentage = self.parse_percentage(token)
        if percentage is not None:
            return 'fat', f"{format_number(percentage)}%"
        measure = self.parse_measure(token)
        if measure is not None:
            return 'size', f"{format_number(measure[0])}{measure[1]}"
        number = parse_decimal(token) if self.NUMBER_RE.match(token) else None
        if number is not None:
            return 'number', format_number(number)
        return None, None

    def _canonical_phrase(self, tokens: List[str], start: int) -> Tuple[int, Optional[str], Optional[str]]:
        longest = min(self.tables.max_phrase_len, len(tokens) - start)
        for length in range(longest, 0, -1):
            phrase = ' '.join(tokens[start:start + length])
            brand = self.tables.lookup_brand(phrase)
            if brand:
                return length, 'brand', brand.lower()
            kind, value = self._classify(phrase)
            if kind:
                return length, kind, value
        return 1, None, None
