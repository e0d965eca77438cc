"""
Base Strategy - Shared wiring and failure boundary for the extraction strategies
"""
import logging
from typing import Optional, Sequence

from .sale_fields.field_extractors.customer_extractor import CustomerExtractor
from .sale_fields.field_extractors.store_extractor import StoreExtractor
from .sale_fields.field_extractors.number_extractor import NumberExtractor
from .sale_fields.field_extractors.date_extractor import DateExtractor
from .sale_fields.field_extractors.totals_extractor import TotalsExtractor
from .sale_fields.field_extractors.line_item_extractor import LineItemExtractor
from .sale_fields.shared_utils.config_manager import ConfigManager, get_config_manager
from .sale_fields.shared_utils.text_cleaner import TextCleaner
from .sale_fields.shared_utils.pattern_matcher import PatternMatcher
from .sale_fields.models.extraction_models import (
    ExtractedSale, ExtractionResult, DateExtractionResult, LineItem
)

logger = logging.getLogger(__name__)


class BaseSaleStrategy:
    """Holds the field extractors; subclasses implement _extract()."""

    EXTRACTION_METHOD = ''

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        self.config_manager = config_manager or get_config_manager()
        self.text_cleaner = TextCleaner(self.config_manager.get_section_markers())
        self.pattern_matcher = PatternMatcher()

        self.field_extractors = {
            'customer': CustomerExtractor(self.pattern_matcher),
            'store': StoreExtractor(self.pattern_matcher),
            'numbers': NumberExtractor(self.pattern_matcher),
            'date': DateExtractor(self.pattern_matcher),
            'totals': TotalsExtractor(self.pattern_matcher),
            'line_items': LineItemExtractor(self.config_manager, self.pattern_matcher),
        }

    def run(self, text: str) -> Optional[ExtractedSale]:
        """
        Extract a sale from raw text.

        Returns:
            ExtractedSale, or None when an internal error means the next
            strategy should take over
        """
        try:
            return self._extract(text)
        except Exception:
            logger.exception(f"{self.EXTRACTION_METHOD} extraction failed")
            return None

    def _extract(self, text: str) -> ExtractedSale:
        raise NotImplementedError

    def _build_sale(self, customer_name: Optional[ExtractionResult], phone_number: Optional[ExtractionResult],
                    store_location: Optional[ExtractionResult], order_number: Optional[ExtractionResult],
                    date_result: Optional[DateExtractionResult], products: Sequence[LineItem],
                    total_amount: Optional[float]) -> ExtractedSale:
        """Assemble the sale; with no explicit total the items are summed."""
        products = tuple(products)
        if total_amount is None:
            total_amount = round(sum(item.line_total for item in products), 2)
            if products:
                logger.info(f"No explicit total, using sum of {len(products)} line items: {total_amount}")

        fields = {
            'customer_name': customer_name.value if customer_name else '',
            'phone_number': phone_number.value if phone_number else '',
            'products': products,
            'total_amount': total_amount,
            'store_location': store_location.value if store_location else '',
            'order_number': order_number.value if order_number else '',
            'date_detected': date_result is not None,
            'extraction_method': self.EXTRACTION_METHOD,
        }
        if date_result is not None:
            fields['date'] = date_result.parsed_date

        sale = ExtractedSale(**fields)
        logger.info(f"{self.EXTRACTION_METHOD} extraction complete: customer={bool(sale.customer_name)}, "
                    f"products={len(sale.products)}, total={sale.total_amount}")
        return sale
