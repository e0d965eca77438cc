"""
Section-Aware Sale Extractor
Runs every field extractor against its preferred sections of a segmented document
"""
import logging
from typing import Optional

from .base_strategy import BaseSaleStrategy
from .sale_fields.field_extractors.customer_extractor import CustomerExtractor
from .sale_fields.field_extractors.store_extractor import StoreExtractor
from .sale_fields.field_extractors.number_extractor import NumberExtractor
from .sale_fields.field_extractors.totals_extractor import TotalsExtractor
from .sale_fields.field_extractors.line_item_extractor import LineItemExtractor
from .sale_fields.support_modules.section_segmenter import SectionSegmenter, HEADER_SECTION
from .sale_fields.shared_utils.config_manager import ConfigManager
from .sale_fields.models.extraction_models import ExtractedSale

logger = logging.getLogger(__name__)


class SectionAwareSaleExtractor(BaseSaleStrategy):
    """
    Structured strategy: normalize, segment, then extract each field from its
    preferred sections, falling back to the whole document.

    Doubled-letter collapse is never applied here; legitimate names such as
    "Jeff Little" would be damaged.
    """

    EXTRACTION_METHOD = 'section_aware'

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        super().__init__(config_manager)
        self.segmenter = SectionSegmenter()
        logger.info("✅ SectionAwareSaleExtractor initialized")

    def _extract(self, text: str) -> ExtractedSale:
        normalized = self.text_cleaner.normalize(text)
        document = self.segmenter.segment(normalized)
        logger.info(f"Section-aware extraction over {len(document.lines)} lines, sections: {document.keys()}")
        if not document.has_headers:
            preamble = document.get(HEADER_SECTION)
            logger.info(f"No section headers detected, searching {len(preamble.content)} lines as one '{preamble.key}' section")

        extractors = self.field_extractors

        # 1. Customer details
        customer_scopes = document.scopes_for(CustomerExtractor.SECTION_KEYWORDS)
        customer_name = extractors['customer'].extract_customer_name(customer_scopes)
        phone_number = extractors['customer'].extract_phone_number(customer_scopes)

        # 2. Store and order number
        store_location = extractors['store'].extract_store_location(
            document.scopes_for(StoreExtractor.SECTION_KEYWORDS))
        order_number = extractors['numbers'].extract_order_number(
            document.scopes_for(NumberExtractor.SECTION_KEYWORDS))

        # 3. Date, sections in document order
        date_result = extractors['date'].extract_date(document.section_scopes())

        # 4. Line items from the first product section minus its title line,
        #    or every line when no product section was detected
        product_section = document.first_matching(LineItemExtractor.SECTION_KEYWORDS)
        if product_section is not None:
            product_lines = product_section.content[1:]
        else:
            product_lines = document.lines
        products = extractors['line_items'].extract_line_items(product_lines)

        # 5. Explicit total: total/summary sections first, then the whole document
        total_amount = extractors['totals'].extract_total_amount(
            document.scopes_for(TotalsExtractor.SECTION_KEYWORDS))

        return self._build_sale(customer_name, phone_number, store_location, order_number,
                                date_result, products, total_amount)
