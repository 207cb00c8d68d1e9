"""
Similarity scoring between product names and keyword sets.

Names are reduced to canonical tokens first, so 'VEREIA MLEKO 3.6% 1L' and
'Мляко Верея 3,6% 1л' are compared as the same vocabulary. What remains
unmatched can still pair up by fuzzy similarity of transliteration skeletons.
"""

from difflib import SequenceMatcher
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Union

from product_normalizer.parsers.product_parser import ProductNameParser
from product_normalizer.utils.normalization import clean_text, script_skeleton

TOKEN_WEIGHT_CAP = 10
BRAND_TOKEN_WEIGHT = 2
NUMERIC_TOKEN_WEIGHT = 1
FAT_TOKEN_WEIGHT = 3
FUZZY_TOKEN_THRESHOLD = 0.8

Tokens = Union[Iterable[str], Mapping[str, int]]


def token_weight(token: str, kind: Optional[str] = None) -> int:
    """
    How much a token says about which product a name describes.

    Base products weigh the most. Brands and sizes are shared by unrelated
    products and weigh little. Fat percentages weigh a little more, since no
    other matcher signal compares them. Other words weigh by length, up to a cap.
    """
    if kind == 'fat' or (kind is None and token.endswith('%')):
        return FAT_TOKEN_WEIGHT
    if kind in ('size', 'number') or any(ch.isdigit() for ch in token):
        return NUMERIC_TOKEN_WEIGHT
    if kind == 'brand':
        return BRAND_TOKEN_WEIGHT
    if kind == 'base':
        return TOKEN_WEIGHT_CAP
    return min(len(token), TOKEN_WEIGHT_CAP)


def _weights(tokens: Tokens) -> Dict[str, int]:
    if isinstance(tokens, Mapping):
        return dict(tokens)
    return {token: token_weight(token) for token in tokens}


def fuzzy_ratio(x: str, y: str) -> float:
    """Symmetric fuzzy ratio of two tokens, computed on their skeletons."""
    sx, sy = script_skeleton(x), script_skeleton(y)
    if sx == sy:
        return 1.0
    return max(
        SequenceMatcher(None, sx, sy, autojunk=False).ratio(),
        SequenceMatcher(None, sy, sx, autojunk=False).ratio(),
    )


def _fuzzy_pairs(left: Sequence[str], right: Sequence[str], threshold: float):
    """
    Greedy one-to-one pairing of near-identical tokens.

    Candidates are ordered by ratio, then by the tokens themselves, so the
    pairing does not depend on which side a token came from.
    """
    candidates = []
    for x in left:
        for y in right:
            ratio = fuzzy_ratio(x, y)
            if ratio >= threshold:
                candidates.append((-ratio, min(x, y), max(x, y), x, y))
    candidates.sort()

    used_left, used_right = set(), set()
    for neg_ratio, _, _, x, y in candidates:
        if x in used_left or y in used_right:
            continue
        used_left.add(x)
        used_right.add(y)
        yield x, y, -neg_ratio


def token_set_similarity(
    tokens_a: Tokens,
    tokens_b: Tokens,
    fuzzy_threshold: float = FUZZY_TOKEN_THRESHOLD,
) -> float:
    """
    Weighted Dice coefficient of two token sets.

    Tokens are given as plain strings (weighed by `token_weight`) or as a
    {token: weight} mapping. Exact matches count in full. Leftover alphabetic
    tokens pair up when their fuzzy ratio reaches `fuzzy_threshold` and count
    in proportion to the ratio. Tokens holding digits only ever match exactly.
    """
    weights_a, weights_b = _weights(tokens_a), _weights(tokens_b)
    total = sum(weights_a.values()) + sum(weights_b.values())
    if total == 0:
        return 1.0 if weights_a.keys() == weights_b.keys() else 0.0

    common = weights_a.keys() & weights_b.keys()
    matched = sum(weights_a[t] + weights_b[t] for t in common)

    def fuzzy_pool(weights):
        return sorted(t for t in weights.keys() - common if not any(ch.isdigit() for ch in t))

    for x, y, ratio in _fuzzy_pairs(fuzzy_pool(weights_a), fuzzy_pool(weights_b), fuzzy_threshold):
        matched += ratio * (weights_a[x] + weights_b[y])

    return min(1.0, round(matched / total, 6))


def _classified_weights(parser: ProductNameParser, text: str) -> Dict[str, int]:
    return {token: token_weight(token, kind) for token, kind in parser.classified_tokens(text)}


def calculate_similarity(
    a: Optional[str],
    b: Optional[str],
    parser: ProductNameParser,
    fuzzy_threshold: float = FUZZY_TOKEN_THRESHOLD,
) -> float:
    """
    Similarity of two raw product names in [0, 1]. Symmetric.

    Identical strings (after cleanup, ignoring case) score 1.0; an empty name
    against a non-empty one scores 0.0.
    """
    clean_a, clean_b = clean_text(a).lower(), clean_text(b).lower()
    if clean_a == clean_b:
        return 1.0
    if not clean_a or not clean_b:
        return 0.0

    return token_set_similarity(
        _classified_weights(parser, clean_a),
        _classified_weights(parser, clean_b),
        fuzzy_threshold,
    )


def calculate_jaccard_similarity(keywords1: Optional[List[str]], keywords2: Optional[List[str]]) -> float:
    """Case-insensitive Jaccard index of two keyword lists; 0.0 when both are empty."""
    set1 = {k.lower() for k in keywords1 or []}
    set2 = {k.lower() for k in keywords2 or []}
    union = set1 | set2
    if not union:
        return 0.0
    return len(set1 & set2) / len(union)
