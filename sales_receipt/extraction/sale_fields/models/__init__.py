"""
Models Package
"""
from .extraction_models import (
    ProductCategory,
    ExtractionResult,
    DateExtractionResult,
    LineItem,
    Section,
    DocumentSections,
    ExtractedSale,
    empty_sale
)

__all__ = [
    'ProductCategory',
    'ExtractionResult',
    'DateExtractionResult',
    'LineItem',
    'Section',
    'DocumentSections',
    'ExtractedSale',
    'empty_sale'
]
