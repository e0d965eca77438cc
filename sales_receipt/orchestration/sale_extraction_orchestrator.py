#!/usr/bin/env python3
"""
Sale Extraction Orchestrator - Strategy fallback for receipt/invoice text

Strategy order:
1. Section-aware extraction (higher precision when headers are detectable)
2. Flat fallback extraction (higher recall on unstructured text)
3. Empty default record

Usage:
    from sales_receipt.orchestration import extract

    sale = extract(ocr_text)
    print(sale.to_dict())
"""

import logging
from typing import Optional

from ..extraction.section_aware_extractor import SectionAwareSaleExtractor
from ..extraction.flat_sale_extractor import FlatSaleExtractor
from ..extraction.sale_fields.shared_utils.config_manager import ConfigManager, get_config_manager
from ..extraction.sale_fields.models.extraction_models import ExtractedSale, empty_sale

logger = logging.getLogger(__name__)


class SaleExtractionOrchestrator:
    """
    Top-level extraction policy. extract() never raises.

    The section-aware result is used when it holds a customer name, any
    product or a positive total; otherwise the flat result is used; if both
    strategies failed internally the empty default record is returned.
    """

    def __init__(self, config_manager: Optional[ConfigManager] = None, aggressive: bool = False):
        self.config_manager = config_manager or get_config_manager()
        self.section_aware = SectionAwareSaleExtractor(self.config_manager)
        self.flat = FlatSaleExtractor(self.config_manager, aggressive=aggressive)
        logger.info("✅ SaleExtractionOrchestrator initialized")

    def extract(self, raw_text) -> ExtractedSale:
        """Full pipeline: structured, then flat, then empty default."""
        if not self._is_usable(raw_text):
            return empty_sale()

        structured = self.section_aware.run(raw_text)
        if structured is not None and structured.has_useful_data():
            return structured

        logger.warning("Section-aware extraction found no useful data, falling back to flat extraction")
        flat = self.flat.run(raw_text)
        if flat is not None:
            return flat

        logger.error("All extraction strategies failed, returning empty sale")
        return empty_sale()

    def extract_structured(self, raw_text) -> ExtractedSale:
        """Section-aware strategy only."""
        if not self._is_usable(raw_text):
            return empty_sale()
        return self.section_aware.run(raw_text) or empty_sale()

    def extract_flat(self, raw_text) -> ExtractedSale:
        """Flat fallback strategy only."""
        if not self._is_usable(raw_text):
            return empty_sale()
        return self.flat.run(raw_text) or empty_sale()

    @staticmethod
    def _is_usable(raw_text) -> bool:
        if not isinstance(raw_text, str) or not raw_text.strip():
            logger.warning("Empty or invalid text provided for sale extraction")
            return False
        return True


# Singleton instance
_orchestrator_instance = None


def get_sale_extraction_orchestrator() -> SaleExtractionOrchestrator:
    """Get or create singleton SaleExtractionOrchestrator instance."""
    global _orchestrator_instance

    if _orchestrator_instance is None:
        _orchestrator_instance = SaleExtractionOrchestrator()

    return _orchestrator_instance


def extract(raw_text) -> ExtractedSale:
    """Extract a sale with full strategy fallback. Never raises."""
    return get_sale_extraction_orchestrator().extract(raw_text)


def extract_structured(raw_text) -> ExtractedSale:
    """Extract a sale with the section-aware strategy only."""
    return get_sale_extraction_orchestrator().extract_structured(raw_text)


def extract_flat(raw_text) -> ExtractedSale:
    """Extract a sale with the flat fallback strategy only."""
    return get_sale_extraction_orchestrator().extract_flat(raw_text)
