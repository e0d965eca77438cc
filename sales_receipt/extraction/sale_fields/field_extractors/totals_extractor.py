"""
Totals Extractor - Extracts the explicit sale total

Totals are searched in summary/total sections first, then across the whole
document. Deriving a total from line items is the caller's job and only
happens when neither phase matched.
"""
import logging
from typing import Optional, Sequence

from ..shared_utils.pattern_matcher import PatternMatcher, FieldPattern, Scope, AMOUNT, parse_amount
from ..models.extraction_models import ExtractionResult

logger = logging.getLogger(__name__)

# "total" as a word, never the tail of "Subtotal" / "Sub Total"
TOTAL_WORD = r'(?<!sub )(?<!sub-)\btotal'

# Start of a line up to its first "total"; the prefix cannot step past one,
# so each line is scanned once however many totals it holds
UP_TO_FIRST_TOTAL = rf'(?m)^(?:(?!{TOTAL_WORD})[^\n])*{TOTAL_WORD}'


class TotalsExtractor:
    """Two-phase total extraction."""

    SECTION_KEYWORDS = ('total', 'summary', 'order_summary')

    TOTAL_PATTERNS = [
        FieldPattern(rf'{TOTAL_WORD}\s*(?:amount|price|cost)?\s*:\s*\$?\s*{AMOUNT}', 'Total:'),
        FieldPattern(rf'grand\s*total\s*:\s*\$?\s*{AMOUNT}', 'Grand Total:'),
        FieldPattern(rf'order\s*total\s*:\s*\$?\s*{AMOUNT}', 'Order Total:'),
        FieldPattern(rf'amount\s*due\s*:\s*\$?\s*{AMOUNT}', 'Amount Due:'),
        FieldPattern(rf'balance\s*(?:due)?\s*:\s*\$?\s*{AMOUNT}', 'Balance Due:'),
        FieldPattern(rf'{TOTAL_WORD}\s*\$?\s*{AMOUNT}', 'Total $X'),
        FieldPattern(rf'\$\s*{AMOUNT}\s*total\b', '$X Total'),
    ]

    FLAT_TOTAL_PATTERNS = [
        FieldPattern(rf'{TOTAL_WORD}\s*:\s*\$?\s*{AMOUNT}', 'Total:'),
        FieldPattern(rf'{TOTAL_WORD}\s*amount\s*:\s*\$?\s*{AMOUNT}', 'Total Amount:'),
        FieldPattern(rf'amount\s*due\s*:\s*\$?\s*{AMOUNT}', 'Amount Due:'),
        FieldPattern(rf'grand\s*total\s*:\s*\$?\s*{AMOUNT}', 'Grand Total:'),
        FieldPattern(rf'{UP_TO_FIRST_TOTAL}\b[^\n]*?\$\s*{AMOUNT}', 'Total ... $X'),
    ]

    def __init__(self, pattern_matcher: Optional[PatternMatcher] = None):
        self.pattern_matcher = pattern_matcher or PatternMatcher()

    def extract_total(self, scopes: Sequence[Scope], flat: bool = False) -> Optional[ExtractionResult]:
        """
        Find the explicit total.

        Args:
            scopes: Total/summary section scopes first, the whole document last
            flat: Use the reduced pattern set of the flat strategy

        Returns:
            ExtractionResult whose value is the captured amount text, or None
        """
        patterns = self.FLAT_TOTAL_PATTERNS if flat else self.TOTAL_PATTERNS
        method = 'flat_total' if flat else 'section_total'
        result = self.pattern_matcher.first_capture(scopes, patterns, method)
        if result is None:
            logger.debug("No explicit total found")
        return result

    def extract_total_amount(self, scopes: Sequence[Scope], flat: bool = False) -> Optional[float]:
        result = self.extract_total(scopes, flat=flat)
        return parse_amount(result.value) if result else None
