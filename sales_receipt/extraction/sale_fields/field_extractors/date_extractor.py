"""
Date Extractor - Extracts the sale date
"""
import logging
from typing import Optional, Sequence

from ..shared_utils.pattern_matcher import PatternMatcher, Scope
from ..support_modules.date_detector_integrated import IntegratedSaleDateDetector
from ..models.extraction_models import DateExtractionResult

logger = logging.getLogger(__name__)


class DateExtractor:
    """Walks scopes in document order and returns the first date that parses."""

    def __init__(self, pattern_matcher: Optional[PatternMatcher] = None):
        self.pattern_matcher = pattern_matcher or PatternMatcher()
        self.integrated_date_detector = IntegratedSaleDateDetector(self.pattern_matcher)

    def extract_date(self, scopes: Sequence[Scope], flat: bool = False) -> Optional[DateExtractionResult]:
        method = 'flat_date' if flat else 'section_date'
        for scope_name, scope_text in scopes:
            detected = self.integrated_date_detector.detect(scope_text, flat=flat)
            if detected is None:
                continue
            parsed_date, raw_text, description = detected
            logger.debug(f"Date {parsed_date.date()} found in scope '{scope_name}' via '{description}'")
            return DateExtractionResult(
                value=parsed_date.date().isoformat(),
                raw_text=raw_text,
                scope=scope_name,
                extraction_method=method,
                pattern_used=description,
                parsed_date=parsed_date
            )
        return None
