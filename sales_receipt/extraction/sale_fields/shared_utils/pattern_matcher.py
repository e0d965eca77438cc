"""
Pattern Matcher - Ordered first-match regex extraction over text scopes
"""
import re
import logging
from dataclasses import dataclass
from typing import List, Optional, Match, Pattern, Sequence, Tuple

from ..models.extraction_models import ExtractionResult

logger = logging.getLogger(__name__)

# US dollar amount: "1,458.82", "19.99" or the OCR comma form "19,99"
AMOUNT = r'(\d{1,3}(?:,\d{3})+\.\d{2}|\d+[.,]\d{2})'

# (scope name, scope text)
Scope = Tuple[str, str]


@dataclass(frozen=True)
class FieldPattern:
    """One prioritized extraction rule; group 1 of the pattern is the value."""
    pattern: str
    description: str


def parse_amount(amount_str: str) -> float:
    """
    Convert a captured amount to a float.

    A string holding both separators uses the comma for thousands;
    a lone comma is treated as the decimal separator.
    """
    cleaned = amount_str.strip().lstrip('$').strip()
    if ',' in cleaned and '.' in cleaned:
        cleaned = cleaned.replace(',', '')
    else:
        cleaned = cleaned.replace(',', '.')
    return round(float(cleaned), 2)


class PatternMatcher:
    """Handles regex pattern matching operations for sale extraction."""

    def __init__(self):
        self.cache = {}  # Cache compiled patterns for performance

    def compile_pattern(self, pattern_str: str, flags: int = re.IGNORECASE) -> Pattern:
        """Compile and cache regex pattern."""
        cache_key = f"{pattern_str}_{flags}"
        if cache_key not in self.cache:
            self.cache[cache_key] = re.compile(pattern_str, flags)
        return self.cache[cache_key]

    def search_pattern(self, text: str, pattern_str: str, flags: int = re.IGNORECASE) -> Optional[Match]:
        """Search for pattern in text (first match)."""
        pattern = self.compile_pattern(pattern_str, flags)
        return pattern.search(text)

    def match_pattern(self, text: str, pattern_str: str, flags: int = re.IGNORECASE) -> Optional[Match]:
        """Match pattern at beginning of text."""
        pattern = self.compile_pattern(pattern_str, flags)
        return pattern.match(text)

    def find_all_matches(self, text: str, pattern_str: str, flags: int = re.IGNORECASE) -> List[Match]:
        """Find all matches for a pattern in text."""
        pattern = self.compile_pattern(pattern_str, flags)
        return list(pattern.finditer(text))

    def first_capture(self, scopes: Sequence[Scope], patterns: Sequence[FieldPattern],
                      extraction_method: str) -> Optional[ExtractionResult]:
        """
        Return the first non-empty capture across (scope, pattern) pairs.

        Scopes are tried in order; within a scope the patterns are tried in
        priority order. The first pattern that yields a non-blank group 1 wins.

        Args:
            scopes: Candidate text blocks, most preferred first
            patterns: Prioritized field patterns
            extraction_method: Label recorded on the result

        Returns:
            ExtractionResult or None when nothing matched
        """
        for scope_name, scope_text in scopes:
            if not scope_text:
                continue
            for field_pattern in patterns:
                match = self.search_pattern(scope_text, field_pattern.pattern)
                if not match or not match.group(1):
                    continue
                value = match.group(1).strip()
                if value:
                    logger.debug(f"{extraction_method}: '{field_pattern.description}' matched in scope '{scope_name}'")
                    return ExtractionResult(
                        value=value,
                        raw_text=match.group(0),
                        scope=scope_name,
                        extraction_method=extraction_method,
                        pattern_used=field_pattern.description
                    )
        return None

