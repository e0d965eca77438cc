"""
Line Item Extractor - Parses product lines (name, quantity, unit price, category)

Product lines, tax lines and total lines look alike once OCR has flattened
the layout. Lines are filtered by exclusion keywords both before and after
the product pattern is applied.
"""
import re
import logging
from typing import Iterable, List, Optional

from ..shared_utils.config_manager import ConfigManager, get_config_manager
from ..shared_utils.pattern_matcher import PatternMatcher, AMOUNT, parse_amount
from ..support_modules.category_classifier import CategoryClassifier
from ..models.extraction_models import LineItem

logger = logging.getLogger(__name__)


class LineItemExtractor:
    """Line-by-line product parser shared by both extraction strategies."""

    SECTION_KEYWORDS = ('product', 'item', 'order_summary')

    # name, optional separate quantity, optional $, price at end of line
    LINE_ITEM_PATTERN = rf'^(.+?)(?:[ \t]+(\d+)[ \t]+)?[ \t]*\$?[ \t]*{AMOUNT}[ \t]*$'

    # "2 x Screen Protector" then "2 Screen Protector"
    QUANTITY_PREFIX_PATTERNS = [
        r'^(\d+)\s*x\s*(.+)$',
        r'^(\d+)\s+(.+)$',
    ]

    NAME_REJECT_PATTERN = r'total|subtotal|tax'
    MIN_LINE_LENGTH = 5

    def __init__(self, config_manager: Optional[ConfigManager] = None,
                 pattern_matcher: Optional[PatternMatcher] = None,
                 category_classifier: Optional[CategoryClassifier] = None):
        self.config_manager = config_manager or get_config_manager()
        self.pattern_matcher = pattern_matcher or PatternMatcher()
        self.category_classifier = category_classifier or CategoryClassifier(self.config_manager)
        self.max_line_length = self.config_manager.get_max_item_line_length()
        self.exclusion_pattern = '|'.join(self.config_manager.get_item_exclusions())
        self.flat_exclusion_pattern = '|'.join(self.config_manager.get_item_exclusions(flat=True))

    def extract_line_items(self, lines: Iterable[str], flat: bool = False) -> List[LineItem]:
        """
        Parse every product-like line.

        Args:
            lines: Candidate lines, already narrowed to the product region by the caller
            flat: Apply the flat strategy's extended exclusions

        Returns:
            LineItems in document order
        """
        items = []
        for line in lines:
            item = self.parse_line(line, flat=flat)
            if item is not None:
                items.append(item)
        logger.debug(f"Parsed {len(items)} line items")
        return items

    def parse_line(self, line: str, flat: bool = False) -> Optional[LineItem]:
        line = (line or '').strip()
        if len(line) < self.MIN_LINE_LENGTH or len(line) > self.max_line_length:
            return None

        exclusions = self.flat_exclusion_pattern if flat else self.exclusion_pattern
        if exclusions and self.pattern_matcher.search_pattern(line, exclusions):
            return None

        match = self.pattern_matcher.match_pattern(line, self.LINE_ITEM_PATTERN)
        if not match:
            return None

        name = match.group(1).strip()
        price = parse_amount(match.group(3))

        if match.group(2):
            quantity = int(match.group(2))
        else:
            quantity, name = self._split_quantity_prefix(name)

        if not re.search(r'[A-Za-z]', name):
            return None
        if self.pattern_matcher.search_pattern(name, self.NAME_REJECT_PATTERN):
            return None

        return LineItem(
            name=name,
            quantity=max(quantity, 1),
            price=price,
            category=self.category_classifier.classify(name)
        )

    def _split_quantity_prefix(self, name: str):
        """Pull a leading count out of the name; quantity defaults to 1."""
        for prefix_pattern in self.QUANTITY_PREFIX_PATTERNS:
            prefix_match = self.pattern_matcher.match_pattern(name, prefix_pattern)
            if prefix_match:
                return int(prefix_match.group(1)), prefix_match.group(2).strip()
        return 1, name
