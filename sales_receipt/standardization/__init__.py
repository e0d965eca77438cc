"""
Sale Standardization Module - Upload-boundary sanitization

Exports:
- SaleSanitizer: Clamps, caps and confidence labels
- SanitizedSale: Sanitized sale record
- PLACEHOLDER_PRODUCT_NAME: Name used when no product was extracted
"""

from .sale_sanitizer import SaleSanitizer, SanitizedSale, PLACEHOLDER_PRODUCT_NAME

__all__ = [
    'SaleSanitizer',
    'SanitizedSale',
    'PLACEHOLDER_PRODUCT_NAME'
]
