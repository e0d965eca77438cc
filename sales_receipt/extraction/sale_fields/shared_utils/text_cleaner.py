"""
Text Cleaner - Normalizes raw OCR/PDF text before sale field extraction
"""
import re
import logging
from typing import Iterable, Optional

from .config_manager import get_config_manager

logger = logging.getLogger(__name__)

DEFAULT_SECTION_MARKERS = [
    'CUSTOMER', 'INVOICE', 'BILL TO', 'SHIP TO', 'TOTAL', 'SUBTOTAL', 'TAX',
    'ITEMS', 'PRODUCTS', 'ACCESSORIES', 'RECEIPT', 'PHONE', 'DATE', 'PAYMENT'
]


class TextCleaner:
    """
    Cleans extracted receipt text.

    Two passes are kept apart:
    - normalize(): keeps line breaks, used for section segmentation
    - flatten(): collapses every whitespace run, used for previews and prompts

    Every step of normalize() is idempotent, so normalizing normalized text
    returns it unchanged.
    """

    def __init__(self, section_markers: Optional[Iterable[str]] = None):
        markers = list(section_markers) if section_markers else list(DEFAULT_SECTION_MARKERS)
        # Longest first so SUBTOTAL wins over TOTAL
        markers.sort(key=len, reverse=True)
        alternation = '|'.join(
            r'\s+'.join(re.escape(word) for word in marker.split()) for marker in markers
        )
        self.section_markers = markers
        self.marker_line_pattern = re.compile(rf'^(?:{alternation})\b', re.IGNORECASE)
        self.marker_label_pattern = re.compile(rf' +(?=\b(?:{alternation})\b *:)', re.IGNORECASE)
        logger.debug(f"TextCleaner initialized with {len(markers)} section markers")

    def normalize(self, text, aggressive: bool = False) -> str:
        """
        Normalize text for segmentation, preserving line structure.

        Args:
            text: Raw extracted text (anything that is not a string yields '')
            aggressive: Also collapse doubled letters (bad PDF/OCR rendering)

        Returns:
            Normalized text
        """
        if not isinstance(text, str) or not text:
            return ''

        text = text.replace('\r\n', '\n').replace('\r', '\n')
        text = self._tidy_lines(text)

        # Split decimal points: "12 . 50" -> "12.50"
        text = re.sub(r'(?<=\d)[ \t]*\.+[ \t]*(?=\d)', '.', text)

        # Currency signs: "$ 12.50" -> "$12.50"
        text = re.sub(r'\$[ \t]+', '$', text)

        if aggressive:
            text = re.sub(r'([A-Za-z])\1+', r'\1', text)

        text = re.sub(r'\${2,}', '$', text)
        text = re.sub(r'\.{2,}', '.', text)
        text = re.sub(r'-{2,}', '-', text)

        text = self._insert_section_breaks(text)
        return self._tidy_lines(text)

    def flatten(self, text) -> str:
        """Collapse all whitespace, newlines included, to single spaces."""
        if not isinstance(text, str):
            return ''
        return re.sub(r'\s+', ' ', text).strip()

    def preview(self, text, limit: int = 50) -> str:
        """Short single-line excerpt for log messages."""
        flat = self.flatten(text)
        return flat if len(flat) <= limit else flat[:limit] + '...'

    def _insert_section_breaks(self, text: str) -> str:
        """Give every section marker line its own paragraph."""
        output = []
        for line in text.split('\n'):
            for piece in self._split_labels(line):
                if self.marker_line_pattern.match(piece):
                    output.extend(['', piece, ''])
                else:
                    output.append(piece)
        return '\n'.join(output)

    def _split_labels(self, line: str):
        """Break "Customer: Jane Phone: 555" style lines before each later marker label."""
        if ':' not in line:
            return [line]
        split_line = self.marker_label_pattern.sub(
            lambda m: '\n' if ':' in m.string[:m.start()] else m.group(0),
            line
        )
        return split_line.split('\n')

    @staticmethod
    def _tidy_lines(text: str) -> str:
        lines = [re.sub(r'[^\S\n]+', ' ', line).strip() for line in text.split('\n')]
        text = '\n'.join(lines)
        text = re.sub(r'\n{3,}', '\n\n', text)
        return text.strip()


# Singleton instance
_text_cleaner_instance = None


def get_text_cleaner() -> TextCleaner:
    """Get or create singleton TextCleaner instance."""
    global _text_cleaner_instance

    if _text_cleaner_instance is None:
        _text_cleaner_instance = TextCleaner(get_config_manager().get_section_markers())

    return _text_cleaner_instance
