"""
Section Segmenter - Partitions normalized receipt text into named sections

Section boundaries are declared by header phrases ("Customer Information",
"Order Summary", ...) because the bold/visual formatting that separated them
on paper is lost by OCR and PDF text extraction.
"""
import re
import logging
from functools import reduce
from typing import List, Optional, Tuple

from ..models.extraction_models import Section, DocumentSections

logger = logging.getLogger(__name__)

HEADER_SECTION = 'header'


class SectionSegmenter:
    """Single-pass fold over document lines producing ordered sections."""

    HEADER_PATTERNS = [
        re.compile(r'customer\s*information', re.IGNORECASE),
        re.compile(r'billing\s*details', re.IGNORECASE),
        re.compile(r'product\s*information', re.IGNORECASE),
        re.compile(r'order\s*summary', re.IGNORECASE),
        re.compile(r'payment\s*details', re.IGNORECASE),
        re.compile(r'customer\s*details', re.IGNORECASE),
        re.compile(r'order\s*information', re.IGNORECASE),
        re.compile(r'invoice\s*details', re.IGNORECASE),
        re.compile(r'shipping\s*information', re.IGNORECASE),
        re.compile(r'contact\s*information', re.IGNORECASE),
    ]

    def segment(self, text: str) -> DocumentSections:
        """
        Split text into sections.

        Every line, blank ones included, lands in exactly one section. Lines
        before the first header belong to the implicit "header" section.
        """
        lines = (text or '').split('\n')
        open_sections = reduce(self._fold_line, enumerate(lines), [])

        sections = []
        for position, (key, start_line, content) in enumerate(open_sections):
            if position + 1 < len(open_sections):
                end_line = open_sections[position + 1][1] - 1
            else:
                end_line = len(lines) - 1
            sections.append(Section(key=key, start_line=start_line, end_line=end_line, content=tuple(content)))

        logger.debug(f"Segmented {len(lines)} lines into sections: {[s.key for s in sections]}")
        return DocumentSections(lines=tuple(lines), sections=tuple(sections))

    def header_key(self, line: str) -> Optional[str]:
        """Slug for a header line, or None when the line is not a header."""
        stripped = line.strip()
        if not stripped:
            return None
        for pattern in self.HEADER_PATTERNS:
            if pattern.search(stripped):
                return re.sub(r'[^a-z0-9]', '_', stripped.lower())
        return None

    def _fold_line(self, open_sections: List[Tuple[str, int, List[str]]],
                   indexed_line: Tuple[int, str]) -> List[Tuple[str, int, List[str]]]:
        index, line = indexed_line
        key = self.header_key(line)

        if key is not None:
            open_sections.append((self._unique_key(key, open_sections), index, [line]))
        elif not open_sections:
            open_sections.append((HEADER_SECTION, 0, [line]))
        else:
            open_sections[-1][2].append(line)
        return open_sections

    @staticmethod
    def _unique_key(key: str, open_sections) -> str:
        """Repeated headers get numeric suffixes so earlier content is kept."""
        taken = {existing for existing, _, _ in open_sections}
        if key not in taken:
            return key
        suffix = 2
        while f"{key}_{suffix}" in taken:
            suffix += 1
        return f"{key}_{suffix}"
