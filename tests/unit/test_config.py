import pytest

from product_normalizer.config import (
    DEFAULT_FUZZY_TOKEN_THRESHOLD,
    DEFAULT_MATCH_THRESHOLD,
    NormalizerSettings,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("PRODUCT_MATCH_THRESHOLD", raising=False)
    monkeypatch.delenv("PRODUCT_FUZZY_TOKEN_THRESHOLD", raising=False)
    # Keep a developer's .env out of the picture
    monkeypatch.setattr("product_normalizer.config.load_dotenv", lambda: False)


def test_defaults():
    settings = NormalizerSettings.from_env()
    assert settings.match_threshold == DEFAULT_MATCH_THRESHOLD == 0.6
    assert settings.fuzzy_token_threshold == DEFAULT_FUZZY_TOKEN_THRESHOLD == 0.8


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("PRODUCT_MATCH_THRESHOLD", "0.75")
    monkeypatch.setenv("PRODUCT_FUZZY_TOKEN_THRESHOLD", "0.9")
    settings = NormalizerSettings.from_env()
    assert settings.match_threshold == 0.75
    assert settings.fuzzy_token_threshold == 0.9


@pytest.mark.parametrize("raw", ["abc", "1.5", "-0.1", "  "])
def test_malformed_values_fall_back(monkeypatch, raw):
    monkeypatch.setenv("PRODUCT_MATCH_THRESHOLD", raw)
    assert NormalizerSettings.from_env().match_threshold == DEFAULT_MATCH_THRESHOLD


def test_settings_are_frozen():
    settings = NormalizerSettings()
    with pytest.raises(AttributeError):
        settings.match_threshold = 0.1
