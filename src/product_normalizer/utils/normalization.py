"""
Centralized text normalization utilities for the product normalizer.
"""

import math
import re
from functools import lru_cache
from typing import Optional

from unidecode import unidecode

# Letters where Bulgarian receipt transliteration differs from unidecode's
# Russian-style output (х -> kh, щ -> shch, ъ and ь -> apostrophes)
BULGARIAN_OVERRIDES = {
    'х': 'h', 'щ': 'sht', 'ъ': 'a', 'ь': '',
}

LATIN_FOLDS = [
    (re.compile(r'c(?!h)'), 'k'),
    (re.compile(r'q'), 'ia'),
    (re.compile(r'[jy]'), 'i'),
    (re.compile(r'w'), 'v'),
    (re.compile(r'x'), 'ks'),
]

# Punctuation that separates words on printed receipts
_SEPARATORS_RE = re.compile('[\\-\u2010-\u2015;/\\\\()\\[\\]{}+!?:|_"\'`\u201c\u201d\u201e\u00ab\u00bb]')
# Commas and dots are decimal separators only when flanked by digits
_LOOSE_COMMA_RE = re.compile(r'(?<!\d),|,(?!\d)')
_LOOSE_DOT_RE = re.compile(r'(?<!\d)\.|\.(?!\d)')


def clean_text(raw: Optional[str]) -> str:
    """
    Cleans a raw OCR product string into space-separated tokens.

    Transformation pipeline:
    1. Turn word-separating punctuation into spaces
    2. Keep ',' and '.' only as decimal separators inside numbers
    3. Collapse whitespace
    """
    if not raw:
        return ""

    text = raw.replace('\u00a0', ' ')
    text = _SEPARATORS_RE.sub(' ', text)
    text = _LOOSE_COMMA_RE.sub(' ', text)
    text = _LOOSE_DOT_RE.sub(' ', text)
    return re.sub(r'\s+', ' ', text).strip()


def parse_decimal(value: str) -> Optional[float]:
    """Parses '3,6' or '3.6' into 3.6; returns None when not a number."""
    try:
        number = float(value.replace(',', '.'))
    except (ValueError, AttributeError):
        return None
    # Digit runs too long for a float overflow to inf
    return number if math.isfinite(number) else None


def format_number(value: float) -> str:
    """Renders 1.0 as '1' and 3.60 as '3.6'."""
    text = f"{round(value, 3):f}".rstrip('0').rstrip('.')
    return text or "0"


@lru_cache(maxsize=4096)
def script_skeleton(token: str) -> str:
    """
    Folds a token written in Cyrillic, Latin or ad hoc transliteration into a
    shared lowercase Latin skeleton.

    'МЛЯКО', 'mlqko' and 'mljako' all become 'mliako'.
    """
    if not token:
        return ""

    lowered = ''.join(BULGARIAN_OVERRIDES.get(ch, ch) for ch in token.lower())
    folded = unidecode(lowered).lower()
    for pattern, replacement in LATIN_FOLDS:
        folded = pattern.sub(replacement, folded)
    return folded


def has_letters(token: str) -> bool:
    """True when the token holds at least one alphabetic character."""
    return any(ch.isalpha() for ch in token)
