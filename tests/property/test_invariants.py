"""
Property-based tests using hypothesis for edge case discovery.
Tests system invariants that should always hold true.
"""
import pytest
from hypothesis import given, strategies as st, settings

from product_normalizer import NormalizerSettings, ProductNormalizer

normalizer = ProductNormalizer(settings=NormalizerSettings())

# Receipt-like vocabulary: known words in several scripts, numbers and noise
WORDS = st.sampled_from([
    "мляко", "MLEKO", "хляб", "Hleb", "сирене", "SIRENE", "бира", "вода", "шоколад",
    "Верея", "VEREIA", "BDS", "Devin", "Milka", "Загорка",
    "прясно", "BJALO", "черен", "газирана",
    "био", "bio", "light", "без", "с",
    "3.6%", "3,6%", "2%", "1л", "1L", "500g", "400 гр", "1,5 литра", "6x330ml", "42",
    "3800123456789", "xyzzy", "plumbus", "ab",
])
RECEIPT_NAMES = st.lists(WORDS, min_size=0, max_size=8).map(" ".join)


class TestParserProperties:
    """Invariants of parse_product_name and normalize_product_name."""

    @given(raw=st.one_of(st.none(), st.text(max_size=80)))
    @settings(max_examples=200, deadline=None)
    def test_parse_never_raises(self, raw):
        components = normalizer.parse_product_name(raw)
        assert components.base_product
        assert (components.size is None) == (components.unit is None)

    @given(raw=RECEIPT_NAMES)
    @settings(max_examples=200, deadline=None)
    def test_normalization_is_idempotent(self, raw):
        once = normalizer.normalize_product_name(normalizer.parse_product_name(raw))
        twice = normalizer.normalize_product_name(normalizer.parse_product_name(once))
        assert once == twice

    @given(
        fat=st.sampled_from([("0,5", 0.5), ("1.5", 1.5), ("3,6", 3.6), ("45", 45.0)]),
        size=st.sampled_from([("1л", 1.0, "л"), ("400 г", 400.0, "г"), ("2KG", 2.0, "кг")]),
    )
    @settings(max_examples=30, deadline=None)
    def test_percentage_never_becomes_size(self, fat, size):
        (fat_text, fat_value), (size_text, size_value, unit) = fat, size
        components = normalizer.parse_product_name(f"Мляко {fat_text}% {size_text}")
        assert components.fat_content == fat_value
        assert (components.size, components.unit) == (size_value, unit)

    @given(raw=RECEIPT_NAMES)
    @settings(max_examples=100, deadline=None)
    def test_confidence_is_bounded(self, raw):
        result = normalizer.normalize(raw)
        assert 0.0 <= result.confidence <= 1.0
        assert len(result.keywords) == len(set(result.keywords))


class TestSimilarityProperties:
    """Invariants of calculate_similarity."""

    @given(a=st.text(max_size=40), b=st.text(max_size=40))
    @settings(max_examples=200, deadline=None)
    def test_symmetric_and_bounded(self, a, b):
        forward = normalizer.calculate_similarity(a, b)
        assert forward == normalizer.calculate_similarity(b, a)
        assert 0.0 <= forward <= 1.0

    @given(a=RECEIPT_NAMES, b=RECEIPT_NAMES)
    @settings(max_examples=200, deadline=None)
    def test_symmetric_on_receipt_names(self, a, b):
        assert normalizer.calculate_similarity(a, b) == normalizer.calculate_similarity(b, a)

    @given(raw=RECEIPT_NAMES)
    @settings(max_examples=100, deadline=None)
    def test_self_similarity_is_one(self, raw):
        assert normalizer.calculate_similarity(raw, raw) == 1.0

    @given(
        bases=st.lists(
            st.sampled_from(["мляко", "хляб", "вода", "бира", "сок", "сирене", "кафе", "шоколад", "ориз", "захар"]),
            min_size=2, max_size=2, unique=True,
        ),
        brand=st.sampled_from(["", "Девин", "BDS", "Vereia"]),
        size=st.sampled_from(["0.5л", "1л", "1,5 литра", "400г", "1кг"]),
    )
    @settings(max_examples=100, deadline=None)
    def test_different_products_sharing_brand_and_size_stay_apart(self, bases, brand, size):
        first, second = (f"{base} {brand} {size}" for base in bases)
        assert normalizer.calculate_similarity(first, second) < 0.3

        parsed = normalizer.parse_product_name(first)
        other = normalizer.parse_product_name(second)
        candidate = {
            "id": 1,
            "normalized_name": normalizer.normalize_product_name(other),
            "brand": other.brand,
            "size": other.size,
            "unit": other.unit,
        }
        assert normalizer.match_product(parsed, [candidate]) is None

    @given(a=st.lists(st.text(max_size=10), max_size=6), b=st.lists(st.text(max_size=10), max_size=6))
    @settings(max_examples=100, deadline=None)
    def test_jaccard_bounded(self, a, b):
        score = normalizer.calculate_jaccard_similarity(a, b)
        assert 0.0 <= score <= 1.0
        assert score == normalizer.calculate_jaccard_similarity(b, a)
