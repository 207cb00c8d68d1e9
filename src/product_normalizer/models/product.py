"""
Data models for product normalization and catalog matching.

This module defines the structures exchanged with callers. Every model is
frozen: operations return new instances instead of mutating their inputs.
"""

from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ProductComponents(BaseModel):
    """
    Structured view of one OCR product name.

    `size` and `unit` are always set together; `fat_content` is only ever
    filled from a percentage token.
    """
    model_config = ConfigDict(frozen=True)

    base_product: str
    brand: Optional[str] = None
    type: Optional[str] = None
    size: Optional[float] = None
    unit: Optional[str] = None
    fat_content: Optional[float] = None
    attributes: Tuple[str, ...] = ()
    barcode: Optional[str] = None

    @field_validator('base_product')
    @classmethod
    def validate_base_product(cls, v):
        """Base product is the one field that can never be empty."""
        if not v or not v.strip():
            raise ValueError('base_product must be a non-empty string')
        return v.strip()

    @model_validator(mode='after')
    def validate_unit_pairing(self):
        """A unit without a size (or the reverse) is not a measurement."""
        if (self.size is None) != (self.unit is None):
            raise ValueError('size and unit must be both set or both empty')
        return self

    @property
    def has_measurement(self) -> bool:
        return self.size is not None and self.unit is not None


class MatchCandidate(BaseModel):
    """A catalog entry supplied by the caller for matching."""
    model_config = ConfigDict(frozen=True)

    id: Union[int, str]
    normalized_name: str
    brand: Optional[str] = None
    size: Optional[float] = None
    unit: Optional[str] = None
    keywords: List[str] = Field(default_factory=list)

    @field_validator('keywords', mode='before')
    @classmethod
    def coerce_missing_keywords(cls, v):
        """Catalog rows store missing keywords as NULL."""
        return [] if v is None else v


class MatchResult(BaseModel):
    """
    The winning candidate of match_product with its explainable score.
    Only produced when the score clears the acceptance threshold.
    """
    model_config = ConfigDict(frozen=True)

    candidate: MatchCandidate
    score: float = Field(ge=0.0, le=1.0)
    name_similarity: float = Field(default=0.0, ge=0.0, le=1.0)
    keyword_similarity: float = Field(default=0.0, ge=0.0, le=1.0)
    brand_match: bool = False
    size_match: bool = False
    base_match: bool = False


class NormalizedProduct(BaseModel):
    """Full output of the normalize() pipeline."""
    model_config = ConfigDict(frozen=True)

    normalized_name: str
    display_name: str
    keywords: List[str] = Field(default_factory=list)
    confidence: float = Field(ge=0.0, le=1.0)
    components: ProductComponents
