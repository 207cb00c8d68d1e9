import pytest

import product_normalizer
from product_normalizer import NormalizerSettings, ProductComponents, ProductNormalizer


def test_normalize_product_name(normalizer):
    components = normalizer.parse_product_name("VEREIA MLEKO 3.6% 1L")
    assert normalizer.normalize_product_name(components) == "мляко Vereia 3.6% 1л"


def test_normalize_product_name_orders_fields(normalizer):
    components = ProductComponents(
        base_product="сирене", type="бяло", brand="BDS", fat_content=45.0, size=0.4, unit="кг"
    )
    assert normalizer.normalize_product_name(components) == "сирене бяло BDS 45% 0.4кг"


def test_zero_fat_is_rendered(normalizer):
    components = ProductComponents(base_product="мляко", fat_content=0.0)
    assert normalizer.normalize_product_name(components) == "мляко 0%"


@pytest.mark.parametrize("raw", [
    "VEREIA MLEKO 3.6% 1L",
    "Мляко прясно Верея био 3,6% 1 литър",
    "COCA COLA 2L",
    "Xyzzy 500g",
    "прясно",
    "Бира Загорка 6 x 500 мл",
])
def test_normalization_is_idempotent(normalizer, raw):
    once = normalizer.normalize_product_name(normalizer.parse_product_name(raw))
    twice = normalizer.normalize_product_name(normalizer.parse_product_name(once))
    assert once == twice


def test_create_display_name(normalizer):
    components = normalizer.parse_product_name("Мляко прясно Верея био 3.6% 1л")
    assert normalizer.create_display_name(components) == "Мляко прясно Vereia 3.6% био 1 л"


def test_generate_keywords(normalizer):
    components = normalizer.parse_product_name("VEREIA MLEKO 3.6% 1L")
    assert normalizer.generate_keywords(components) == ["мляко", "milk", "mleko", "млеко", "vereia", "1л"]


def test_keywords_include_compact_brand_and_barcode(normalizer):
    components = ProductComponents(base_product="сирене", brand="Bor Chvor", barcode="3800123456789")
    keywords = normalizer.generate_keywords(components)
    assert "bor chvor" in keywords
    assert "borchvor" in keywords
    assert "3800123456789" in keywords


def test_short_keywords_are_dropped(normalizer):
    components = ProductComponents(base_product="лук", attributes=["x"])
    assert "x" not in normalizer.generate_keywords(components)


@pytest.mark.parametrize("raw, expected", [
    ("Мляко прясно Верея био 3.6% 1л", 0.95),
    ("VEREIA MLEKO 3.6% 1L", 0.8),
    ("Продукт", 0.1),
    ("", 0.1),
])
def test_confidence(normalizer, raw, expected):
    assert normalizer.normalize(raw).confidence == pytest.approx(expected)


def test_confidence_grows_with_recognized_fields(normalizer):
    sparse = normalizer.normalize("Мляко").confidence
    rich = normalizer.normalize("Мляко Верея 3.6% 1л").confidence
    assert rich > sparse


def test_normalize_returns_full_result(normalizer):
    result = normalizer.normalize("VEREIA MLEKO 3.6% 1L")
    assert result.normalized_name == "мляко Vereia 3.6% 1л"
    assert result.display_name == "Мляко Vereia 3.6% 1 л"
    assert result.components.brand == "Vereia"
    assert "milk" in result.keywords


def test_normalize_batch(normalizer):
    assert normalizer.normalize_batch(["Mleko 1L", None]) == ["мляко 1л", "продукт"]


def test_overlong_number_normalizes_idempotently(normalizer):
    raw = "мляко " + "9" * 400 + "л"
    once = normalizer.normalize_product_name(normalizer.parse_product_name(raw))
    twice = normalizer.normalize_product_name(normalizer.parse_product_name(once))
    assert once == twice
    assert normalizer.parse_product_name(raw).size is None


def test_single_field_helpers(normalizer):
    assert normalizer.extract_brand("Кашкавал Витоша 400г") == "Vitosha"
    assert normalizer.extract_size_unit("Кашкавал Витоша 400г") == (400, "г")
    assert normalizer.extract_size_unit("Кашкавал") is None
    assert normalizer.extract_fat_content("Мляко 1,5%") == 1.5


def test_settings_flow_into_matcher():
    normalizer = ProductNormalizer(settings=NormalizerSettings(match_threshold=0.9, fuzzy_token_threshold=0.7))
    assert normalizer.matcher.threshold == 0.9
    assert normalizer.matcher.fuzzy_threshold == 0.7


def test_module_level_helpers():
    components = product_normalizer.parse_product_name("VEREIA MLEKO 3.6% 1L")
    assert product_normalizer.normalize_product_name(components) == "мляко Vereia 3.6% 1л"
    assert product_normalizer.calculate_similarity("Мляко 3,6%", "Мляко 3.6%") == 1.0
    assert product_normalizer.get_default_normalizer() is product_normalizer.get_default_normalizer()
