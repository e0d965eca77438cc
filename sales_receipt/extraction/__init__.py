"""
Sale extraction strategies.

- SectionAwareSaleExtractor: segment by header phrases, then extract per section
- FlatSaleExtractor: whole-document fallback with reduced pattern sets
"""
from .section_aware_extractor import SectionAwareSaleExtractor
from .flat_sale_extractor import FlatSaleExtractor

__all__ = [
    'SectionAwareSaleExtractor',
    'FlatSaleExtractor'
]
