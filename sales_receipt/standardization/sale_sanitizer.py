#!/usr/bin/env python3
"""
Sale Sanitizer - Upload-boundary normalization of extracted sales

Turns an ExtractedSale into the record returned to clients:
- string fields coerced and length-capped
- quantity, price and total clamped to configured limits
- a placeholder product when nothing was found
- per-field confidence labels (high / medium / low)
"""

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

from ..extraction.sale_fields.shared_utils.config_manager import ConfigManager, get_config_manager
from ..extraction.sale_fields.models.extraction_models import ExtractedSale, ProductCategory

logger = logging.getLogger(__name__)

PLACEHOLDER_PRODUCT_NAME = 'Unknown Product'

HIGH = 'high'
MEDIUM = 'medium'
LOW = 'low'


@dataclass
class SanitizedSale:
    """Sanitized sale with confidence labels, ready for JSON."""
    customer_name: str
    phone_number: str
    products: List[Dict[str, Any]]
    total_amount: float
    date: str
    store_location: str
    order_number: str
    confidence: Dict[str, str]
    extraction_method: str

    def sale_info(self) -> Dict[str, Any]:
        """camelCase sale payload."""
        return {
            'customerName': self.customer_name,
            'phoneNumber': self.phone_number,
            'products': self.products,
            'totalAmount': self.total_amount,
            'date': self.date,
            'storeLocation': self.store_location,
            'orderNumber': self.order_number
        }

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class SaleSanitizer:
    """Applies length caps, numeric clamps and confidence labelling."""

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        self.config_manager = config_manager or get_config_manager()
        limits = self.config_manager.get_limits()
        self.max_quantity = int(limits.get('max_quantity', 1000))
        self.max_price = float(limits.get('max_price', 10000))
        self.max_total = float(limits.get('max_total', 100000))
        self.field_caps = self.config_manager.get_field_caps()

    def sanitize(self, sale: ExtractedSale) -> SanitizedSale:
        products = [self._sanitize_product(item) for item in sale.products]
        if not products:
            products = [self._placeholder_product()]

        sanitized = SanitizedSale(
            customer_name=self._cap('customer_name', sale.customer_name),
            phone_number=self._cap('phone_number', sale.phone_number),
            products=products,
            total_amount=self._clamp_float(sale.total_amount, self.max_total),
            date=sale.date.isoformat(),
            store_location=self._cap('store_location', sale.store_location),
            order_number=self._cap('order_number', sale.order_number),
            confidence={},
            extraction_method=sale.extraction_method
        )
        sanitized.confidence = self.confidence_labels(sanitized, date_detected=sale.date_detected)
        logger.info(f"Sanitized sale: confidence={sanitized.confidence['overall']}, products={len(products)}")
        return sanitized

    def confidence_labels(self, sanitized: SanitizedSale, date_detected: bool) -> Dict[str, str]:
        """Label each field high when it holds a real value, low otherwise."""
        real_products = bool(sanitized.products) and sanitized.products[0]['name'] != PLACEHOLDER_PRODUCT_NAME
        has_total = sanitized.total_amount > 0

        return {
            'overall': HIGH if sanitized.customer_name and real_products and has_total else MEDIUM,
            'customerName': HIGH if sanitized.customer_name else LOW,
            'phoneNumber': HIGH if sanitized.phone_number else LOW,
            'products': HIGH if real_products else LOW,
            'totalAmount': HIGH if has_total else LOW,
            'date': HIGH if date_detected else LOW,
            'storeLocation': HIGH if sanitized.store_location else LOW,
            'orderNumber': HIGH if sanitized.order_number else LOW
        }

    def _sanitize_product(self, item) -> Dict[str, Any]:
        name = self._cap('product_name', item.name) or PLACEHOLDER_PRODUCT_NAME
        quantity = min(max(int(item.quantity), 1), self.max_quantity)
        return {
            'name': name,
            'quantity': quantity,
            'price': self._clamp_float(item.price, self.max_price),
            'category': ProductCategory(item.category).value
        }

    @staticmethod
    def _placeholder_product() -> Dict[str, Any]:
        return {
            'name': PLACEHOLDER_PRODUCT_NAME,
            'quantity': 1,
            'price': 0.0,
            'category': ProductCategory.ACCESSORY.value
        }

    def _cap(self, field_name: str, value) -> str:
        text = value.strip() if isinstance(value, str) else ''
        cap = self.field_caps.get(field_name)
        return text[:cap].strip() if cap else text

    @staticmethod
    def _clamp_float(value, upper: float) -> float:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return 0.0
        if number != number:  # NaN
            return 0.0
        return round(min(max(number, 0.0), upper), 2)
