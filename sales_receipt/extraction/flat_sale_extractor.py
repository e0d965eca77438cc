"""
Flat Sale Extractor
Whole-document fallback for text with no recognizable section headers
"""
import logging
from typing import Optional

from .base_strategy import BaseSaleStrategy
from .sale_fields.shared_utils.config_manager import ConfigManager
from .sale_fields.models.extraction_models import ExtractedSale

logger = logging.getLogger(__name__)


class FlatSaleExtractor(BaseSaleStrategy):
    """Reduced pattern sets over the whole normalized document, no segmentation."""

    EXTRACTION_METHOD = 'flat'

    def __init__(self, config_manager: Optional[ConfigManager] = None, aggressive: bool = False):
        super().__init__(config_manager)
        self.aggressive = aggressive
        logger.info(f"✅ FlatSaleExtractor initialized (aggressive={aggressive})")

    def _extract(self, text: str) -> ExtractedSale:
        normalized = self.text_cleaner.normalize(text, aggressive=self.aggressive)
        scopes = [('document', normalized)]
        logger.info(f"Flat extraction over {len(normalized)} characters: '{self.text_cleaner.preview(normalized)}'")

        extractors = self.field_extractors
        customer_name = extractors['customer'].extract_customer_name(scopes, flat=True)
        phone_number = extractors['customer'].extract_phone_number(scopes, flat=True)
        store_location = extractors['store'].extract_store_location(scopes, flat=True)
        order_number = extractors['numbers'].extract_order_number(scopes, flat=True)
        date_result = extractors['date'].extract_date(scopes, flat=True)
        products = extractors['line_items'].extract_line_items(normalized.split('\n'), flat=True)
        total_amount = extractors['totals'].extract_total_amount(scopes, flat=True)

        return self._build_sale(customer_name, phone_number, store_location, order_number,
                                date_result, products, total_amount)
