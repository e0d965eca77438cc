"""
Integrated Sale Date Detector

Finds sale dates in receipt text. A regex match is only a candidate: the
captured text must also parse to a real calendar date, otherwise the search
continues with the next match.
"""
import re
import logging
from datetime import datetime
from typing import List, Optional, Tuple

from ..shared_utils.pattern_matcher import FieldPattern, PatternMatcher

logger = logging.getLogger(__name__)

NUMERIC_DATE = r'\d{1,2}[/\-.]\d{1,2}[/\-.]\d{2,4}'
MONTH_DAY_YEAR = r'[A-Za-z]{3,9}\.?\s+\d{1,2},?\s*\d{4}'
DAY_MONTH_YEAR = r'\d{1,2}\s+[A-Za-z]{3,9}\.?,?\s+\d{4}'
ISO_DATE = r'\d{4}-\d{1,2}-\d{1,2}'

DATE_FORMATS = [
    '%m/%d/%Y',
    '%m/%d/%y',
    '%Y/%m/%d',
    '%B %d %Y',
    '%b %d %Y',
    '%d %B %Y',
    '%d %b %Y',
]


class IntegratedSaleDateDetector:
    """Labelled and bare sale-date detection with calendar validation."""

    DATE_PATTERNS = [
        FieldPattern(rf'date\s*:\s*({NUMERIC_DATE})(?!\d)', 'Date: M/D/YYYY'),
        FieldPattern(rf'date\s*:\s*({MONTH_DAY_YEAR})', 'Date: Month D, YYYY'),
        FieldPattern(rf'date\s*:\s*({DAY_MONTH_YEAR})', 'Date: D Month YYYY'),
        FieldPattern(rf'date\s*:\s*({ISO_DATE})(?!\d)', 'Date: YYYY-MM-DD'),
        FieldPattern(rf'invoice\s*date\s*:\s*({NUMERIC_DATE})(?!\d)', 'Invoice date'),
        FieldPattern(rf'order\s*date\s*:\s*({NUMERIC_DATE})(?!\d)', 'Order date'),
        FieldPattern(rf'receipt\s*date\s*:\s*({NUMERIC_DATE})(?!\d)', 'Receipt date'),
        FieldPattern(rf'transaction\s*date\s*:\s*({NUMERIC_DATE})(?!\d)', 'Transaction date'),
        FieldPattern(rf'purchase\s*date\s*:\s*({NUMERIC_DATE})(?!\d)', 'Purchase date'),
        FieldPattern(rf'(?<![\d/\-.])({NUMERIC_DATE})(?![\d/\-])', 'Bare M/D/YYYY'),
        FieldPattern(rf'\b({MONTH_DAY_YEAR})', 'Bare Month D, YYYY'),
        FieldPattern(rf'\b({DAY_MONTH_YEAR})', 'Bare D Month YYYY'),
        FieldPattern(rf'(?<!\d)({ISO_DATE})(?!\d)', 'Bare YYYY-MM-DD'),
    ]

    FLAT_DATE_PATTERNS = [
        FieldPattern(rf'date\s*:\s*({NUMERIC_DATE})(?!\d)', 'Date: M/D/YYYY'),
        FieldPattern(rf'(?<![\d/\-.])({NUMERIC_DATE})(?![\d/\-])', 'Bare M/D/YYYY'),
    ]

    def __init__(self, pattern_matcher: Optional[PatternMatcher] = None):
        self.pattern_matcher = pattern_matcher or PatternMatcher()

    def detect(self, text: str, flat: bool = False) -> Optional[Tuple[datetime, str, str]]:
        """
        Find the first valid date in text.

        Patterns are tried in priority order; every match of a pattern is
        checked before moving to the next one.

        Returns:
            (parsed date, matched text, pattern description) or None
        """
        if not text:
            return None

        patterns = self.FLAT_DATE_PATTERNS if flat else self.DATE_PATTERNS
        for field_pattern in patterns:
            for match in self.pattern_matcher.find_all_matches(text, field_pattern.pattern):
                parsed = self.parse_date(match.group(1))
                if parsed is not None:
                    return parsed, match.group(1), field_pattern.description
                logger.debug(f"Discarding invalid date candidate '{match.group(1)}'")
        return None

    def parse_date(self, date_str: str) -> Optional[datetime]:
        """Parse a captured date string; None when it is not a real calendar date."""
        for candidate in self._candidates(date_str):
            for date_format in DATE_FORMATS:
                try:
                    return datetime.strptime(candidate, date_format)
                except ValueError:
                    continue
        return None

    @staticmethod
    def _candidates(date_str: str) -> List[str]:
        cleaned = re.sub(r'[,.](?=\s|$)', ' ', date_str.strip())
        cleaned = re.sub(r'\s+', ' ', cleaned).strip()
        if re.fullmatch(r'[\d/\-.]+', cleaned):
            return [re.sub(r'[\-.]', '/', cleaned)]
        return [cleaned]
