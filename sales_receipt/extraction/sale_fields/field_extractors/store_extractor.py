"""
Store Extractor - Extracts the store location / branch
"""
from typing import Optional, Sequence

from ..shared_utils.pattern_matcher import PatternMatcher, FieldPattern, Scope
from ..models.extraction_models import ExtractionResult


class StoreExtractor:
    """Extracts the store location. The preamble ("header" section) usually names the store."""

    SECTION_KEYWORDS = ('store', 'location', 'branch', 'header')

    STORE_PATTERNS = [
        FieldPattern(r'store\s*(?:location|name)?\s*:\s*([^,\n.]+)', 'Store Location:'),
        FieldPattern(r'location\s*:\s*([^,\n.]+)', 'Location:'),
        FieldPattern(r'branch\s*:\s*([^,\n.]+)', 'Branch:'),
        FieldPattern(r'outlet\s*:\s*([^,\n.]+)', 'Outlet:'),
        FieldPattern(r'store\s*:\s*([^,\n.]+)', 'Store:'),
    ]

    FLAT_STORE_PATTERNS = [
        FieldPattern(r'store\s*:\s*([^\n]+)', 'Store:'),
        FieldPattern(r'location\s*:\s*([^\n]+)', 'Location:'),
        FieldPattern(r'branch\s*:\s*([^\n]+)', 'Branch:'),
    ]

    def __init__(self, pattern_matcher: Optional[PatternMatcher] = None):
        self.pattern_matcher = pattern_matcher or PatternMatcher()

    def extract_store_location(self, scopes: Sequence[Scope], flat: bool = False) -> Optional[ExtractionResult]:
        patterns = self.FLAT_STORE_PATTERNS if flat else self.STORE_PATTERNS
        method = 'flat_store_location' if flat else 'section_store_location'
        return self.pattern_matcher.first_capture(scopes, patterns, method)
