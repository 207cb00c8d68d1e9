"""
Data models for product normalization.
"""

from .product import MatchCandidate, MatchResult, NormalizedProduct, ProductComponents

__all__ = ["ProductComponents", "MatchCandidate", "MatchResult", "NormalizedProduct"]
