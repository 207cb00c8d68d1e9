import pytest

from product_normalizer.utils import clean_text, format_number, parse_decimal, script_skeleton


def test_clean_text_separators():
    assert clean_text('Мляко, "Верея" - прясно/био') == "Мляко Верея прясно био"


def test_clean_text_keeps_decimal_separators():
    assert clean_text("Мляко 3,6% 1.5л.") == "Мляко 3,6% 1.5л"


def test_clean_text_collapses_whitespace():
    assert clean_text("  Хляб \t черен  ") == "Хляб черен"


@pytest.mark.parametrize("raw", [None, "", "  ", "---"])
def test_clean_text_empty(raw):
    assert clean_text(raw) == ""


@pytest.mark.parametrize("value, expected", [("3,6", 3.6), ("3.6", 3.6), ("400", 400.0)])
def test_parse_decimal(value, expected):
    assert parse_decimal(value) == expected


@pytest.mark.parametrize("value", ["abc", "", None, "9" * 400, "inf", "nan"])
def test_parse_decimal_invalid(value):
    assert parse_decimal(value) is None


@pytest.mark.parametrize("value, expected", [(1.0, "1"), (3.6, "3.6"), (1.50, "1.5"), (0.0, "0"), (2.0004, "2")])
def test_format_number(value, expected):
    assert format_number(value) == expected


@pytest.mark.parametrize("token", ["МЛЯКО", "mlqko", "mljako", "mliako"])
def test_script_skeleton_folds_transliterations(token):
    assert script_skeleton(token) == "mliako"


def test_script_skeleton_latin_c():
    assert script_skeleton("coca") == "koka"
    assert script_skeleton("кока") == "koka"
    assert script_skeleton("chips") == "chips"


@pytest.mark.parametrize("token, expected", [
    ("Хляб", "hliab"),
    ("hlqb", "hliab"),
    ("щека", "shteka"),
    ("ябълка", "iabalka"),
    ("yabalka", "iabalka"),
    ("жълто", "zhalto"),
])
def test_script_skeleton_bulgarian_transliteration(token, expected):
    assert script_skeleton(token) == expected
