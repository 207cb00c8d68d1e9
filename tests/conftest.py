import sys
import os

import pytest

# Ensure src/ is on the python path for all tests
# This lets the suite run from a plain checkout without installing the package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

from product_normalizer import NormalizerSettings, ProductNormalizer  # noqa: E402


@pytest.fixture
def normalizer():
    """Normalizer with default thresholds, independent of the environment."""
    return ProductNormalizer(settings=NormalizerSettings())


@pytest.fixture
def catalog():
    return [
        {"id": 1, "normalized_name": "мляко прясно Vereia 3.6% 1л", "brand": "Верея",
         "size": 1, "unit": "л", "keywords": ["мляко", "milk", "vereia", "прясно", "1л"]},
        {"id": 2, "normalized_name": "мляко 2.5% 1л", "brand": None,
         "size": 1, "unit": "л", "keywords": None},
        {"id": 3, "normalized_name": "хляб бял Dobrudzha 500г", "brand": "Dobrudzha",
         "size": 500, "unit": "г", "keywords": ["хляб", "bread", "бял"]},
    ]
