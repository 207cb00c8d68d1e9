"""
Product-name parsing and the lookup tables behind it.
"""

from .product_parser import ProductNameParser
from .tables import DEFAULT_TABLES, FALLBACK_BASE_PRODUCT, LookupTables

__all__ = ["ProductNameParser", "LookupTables", "DEFAULT_TABLES", "FALLBACK_BASE_PRODUCT"]
