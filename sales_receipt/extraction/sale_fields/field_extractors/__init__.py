"""
Field Extractors Package
"""
from .customer_extractor import CustomerExtractor
from .store_extractor import StoreExtractor
from .number_extractor import NumberExtractor
from .date_extractor import DateExtractor
from .totals_extractor import TotalsExtractor
from .line_item_extractor import LineItemExtractor

__all__ = [
    'CustomerExtractor',
    'StoreExtractor',
    'NumberExtractor',
    'DateExtractor',
    'TotalsExtractor',
    'LineItemExtractor'
]
