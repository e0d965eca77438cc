"""
Customer Extractor - Extracts customer name and phone number
"""
import logging
from typing import Optional, Sequence

from ..shared_utils.pattern_matcher import PatternMatcher, FieldPattern, Scope
from ..models.extraction_models import ExtractionResult

logger = logging.getLogger(__name__)

# "Name:" labels that name someone other than the customer
OTHER_NAME_LABEL = r'(?<!store )(?<!cashier )(?<!employee )(?<!server )'

PHONE = r'(\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4})'


class CustomerExtractor:
    """Extracts customer details, preferring customer/contact/billing sections."""

    SECTION_KEYWORDS = ('customer', 'contact', 'billing')

    NAME_PATTERNS = [
        FieldPattern(r'customer\s*name\s*:\s*([^,\n.]+)', 'Customer Name:'),
        FieldPattern(rf'{OTHER_NAME_LABEL}\bname\s*:\s*([^,\n.]+)', 'Name:'),
        FieldPattern(r'bill\s*to\s*:\s*([^,\n.]+)', 'Bill To:'),
        FieldPattern(r'sold\s*to\s*:\s*([^,\n.]+)', 'Sold To:'),
        FieldPattern(r'customer\s*:\s*([^,\n.]+)', 'Customer:'),
    ]

    PHONE_PATTERNS = [
        FieldPattern(rf'phone\s*(?:number|#)?\s*:\s*{PHONE}', 'Phone Number:'),
        FieldPattern(rf'phone\s*:\s*{PHONE}', 'Phone:'),
        FieldPattern(rf'tel\s*:\s*{PHONE}', 'Tel:'),
        FieldPattern(rf'mobile\s*:\s*{PHONE}', 'Mobile:'),
        FieldPattern(rf'contact\s*:\s*{PHONE}', 'Contact:'),
        FieldPattern(rf'(?:^|\s){PHONE}(?:\s|$)', 'Standalone phone number'),
    ]

    FLAT_NAME_PATTERNS = [
        FieldPattern(r'customer\s*:\s*([^\n]+)', 'Customer:'),
        FieldPattern(r'customer\s*name\s*:\s*([^\n]+)', 'Customer Name:'),
        FieldPattern(r'bill\s*to\s*:\s*([^\n]+)', 'Bill To:'),
        FieldPattern(r'sold\s*to\s*:\s*([^\n]+)', 'Sold To:'),
        FieldPattern(rf'{OTHER_NAME_LABEL}\bname\s*:\s*([^\n]+)', 'Name:'),
    ]

    FLAT_PHONE_PATTERNS = [
        FieldPattern(r'(\(\d{3}\)[ \t]*\d{3}[- ]\d{4}|\d{3}[- ]\d{3}[- ]\d{4})', 'Phone number'),
    ]

    def __init__(self, pattern_matcher: Optional[PatternMatcher] = None):
        self.pattern_matcher = pattern_matcher or PatternMatcher()

    def extract_customer_name(self, scopes: Sequence[Scope], flat: bool = False) -> Optional[ExtractionResult]:
        patterns = self.FLAT_NAME_PATTERNS if flat else self.NAME_PATTERNS
        method = 'flat_customer_name' if flat else 'section_customer_name'
        return self.pattern_matcher.first_capture(scopes, patterns, method)

    def extract_phone_number(self, scopes: Sequence[Scope], flat: bool = False) -> Optional[ExtractionResult]:
        patterns = self.FLAT_PHONE_PATTERNS if flat else self.PHONE_PATTERNS
        method = 'flat_phone_number' if flat else 'section_phone_number'
        return self.pattern_matcher.first_capture(scopes, patterns, method)
