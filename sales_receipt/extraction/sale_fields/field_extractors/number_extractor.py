"""
Number Extractor - Extracts order / invoice / receipt identification numbers
"""
from typing import Optional, Sequence

from ..shared_utils.pattern_matcher import PatternMatcher, FieldPattern, Scope
from ..models.extraction_models import ExtractionResult

# Identifier token: stops at whitespace, comma or period
TOKEN = r'([^,\n.\s]+)'


class NumberExtractor:
    """Extracts the order number from order/invoice/receipt sections or the preamble."""

    SECTION_KEYWORDS = ('order', 'invoice', 'receipt', 'header')

    ORDER_NUMBER_PATTERNS = [
        FieldPattern(rf'order\s*(?:number|#|no|num)\s*:\s*{TOKEN}', 'Order Number:'),
        FieldPattern(rf'invoice\s*(?:number|#|no|num)\s*:\s*{TOKEN}', 'Invoice Number:'),
        FieldPattern(rf'receipt\s*(?:number|#|no|num)\s*:\s*{TOKEN}', 'Receipt Number:'),
        FieldPattern(rf'confirmation\s*(?:number|#|no|num)\s*:\s*{TOKEN}', 'Confirmation Number:'),
        FieldPattern(rf'transaction\s*(?:number|#|no|num)\s*:\s*{TOKEN}', 'Transaction Number:'),
        FieldPattern(rf'reference\s*(?:number|#|no|num)\s*:\s*{TOKEN}', 'Reference Number:'),
        FieldPattern(rf'order\s*id\s*:\s*{TOKEN}', 'Order ID:'),
        FieldPattern(rf'order\s*:\s*{TOKEN}', 'Order:'),
        FieldPattern(rf'#\s*:\s*{TOKEN}', '#:'),
    ]

    FLAT_ORDER_NUMBER_PATTERNS = [
        FieldPattern(r'order\s*#\s*:\s*(\S+)', 'Order #:'),
        FieldPattern(r'order\s*number\s*:\s*(\S+)', 'Order Number:'),
        FieldPattern(r'invoice\s*#\s*:\s*(\S+)', 'Invoice #:'),
        FieldPattern(r'receipt\s*#\s*:\s*(\S+)', 'Receipt #:'),
        FieldPattern(r'transaction\s*:\s*(\S+)', 'Transaction:'),
    ]

    def __init__(self, pattern_matcher: Optional[PatternMatcher] = None):
        self.pattern_matcher = pattern_matcher or PatternMatcher()

    def extract_order_number(self, scopes: Sequence[Scope], flat: bool = False) -> Optional[ExtractionResult]:
        patterns = self.FLAT_ORDER_NUMBER_PATTERNS if flat else self.ORDER_NUMBER_PATTERNS
        method = 'flat_order_number' if flat else 'section_order_number'
        return self.pattern_matcher.first_capture(scopes, patterns, method)
