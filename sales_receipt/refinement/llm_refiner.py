#!/usr/bin/env python3
"""
LLM Sale Refiner - Optional refinement of low-value regex extractions

When the regex pipeline finds no priced product or no total, the receipt text
is sent to an Ollama-compatible /api/generate endpoint. The model's JSON fills
the gaps in the regex result; values the regex already found are kept.
Any network or parsing failure leaves the regex result unchanged.
"""

import math
import os
import re
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import requests
from dateutil import parser as date_parser
from json_repair import repair_json

from ..extraction.sale_fields.shared_utils.config_manager import ConfigManager, get_config_manager
from ..extraction.sale_fields.shared_utils.pattern_matcher import parse_amount
from ..extraction.sale_fields.shared_utils.text_cleaner import get_text_cleaner
from ..extraction.sale_fields.support_modules.category_classifier import CategoryClassifier
from ..extraction.sale_fields.models.extraction_models import ExtractedSale, LineItem

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = """
You are a receipt and invoice parser for a mobile phone store. Extract the following information from this receipt/invoice text:
1. Customer name
2. Phone number
3. Date of purchase/sale
4. List of products with names, quantities, and prices
5. Total amount
6. Store location (if present)
7. Order or invoice number (if present)

IMPORTANT CONSTRAINTS:
- Maximum of {max_products} products
- Maximum quantity per product: {max_quantity}
- Maximum price per product: ${max_price:,}
- Maximum total amount: ${max_total:,}
- If any value exceeds these limits, cap it at the maximum

Here is the receipt/invoice text:
{text}

Return the information in valid JSON format like this:
{{
  "customerName": "...",
  "phoneNumber": "...",
  "date": "YYYY-MM-DD",
  "products": [
    {{"name": "...", "quantity": 1, "price": 0.00}}
  ],
  "totalAmount": 0.00,
  "storeLocation": "...",
  "orderNumber": "..."
}}

If some information is not found in the receipt, use null or empty arrays as appropriate.
Your JSON MUST be valid and parseable.
"""


class LLMSaleRefiner:
    """Fills gaps in a regex-extracted sale using a local LLM."""

    EXTRACTION_METHOD = 'llm_refined'

    def __init__(self, config_manager: Optional[ConfigManager] = None, ollama_url: Optional[str] = None,
                 model_name: Optional[str] = None, timeout: Optional[float] = None):
        self.config_manager = config_manager or get_config_manager()
        settings = self.config_manager.get_llm_settings()

        self.ollama_url = (ollama_url or os.getenv('SALE_LLM_URL') or settings.get('url', 'http://localhost:11434')).rstrip('/')
        self.model_name = model_name or os.getenv('SALE_LLM_MODEL') or settings.get('model', 'llama3.2')
        self.timeout = timeout or settings.get('timeout', 60)
        self.max_products = int(settings.get('max_products', 20))
        self.max_quantity = int(settings.get('max_quantity', 100))
        self.max_price = float(settings.get('max_price', 10000))
        self.max_total = float(settings.get('max_total', 100000))

        self.text_cleaner = get_text_cleaner()
        self.category_classifier = CategoryClassifier(self.config_manager)
        logger.info(f"LLMSaleRefiner initialized (Ollama: {self.ollama_url}, Model: {self.model_name})")

    @staticmethod
    def needs_refinement(sale: ExtractedSale) -> bool:
        """True when no product has a positive price or the total is zero."""
        has_priced_product = any(item.price > 0 for item in sale.products)
        return not has_priced_product or sale.total_amount <= 0

    def build_prompt(self, text: str) -> str:
        return PROMPT_TEMPLATE.format(
            max_products=self.max_products,
            max_quantity=self.max_quantity,
            max_price=int(self.max_price),
            max_total=int(self.max_total),
            text=self.text_cleaner.flatten(text)
        )

    def refine(self, text: str, sale: ExtractedSale) -> ExtractedSale:
        """
        Merge LLM output into the sale.

        Returns:
            The refined sale, or the input sale when the LLM is unreachable
            or returns nothing usable
        """
        try:
            llm_output = self._generate(self.build_prompt(text))
            llm_data = self._normalize_extracted_data(self._parse_llm_response(llm_output))
        except (requests.RequestException, ValueError, OverflowError) as e:
            logger.warning(f"LLM refinement failed, keeping regex result: {e}")
            return sale

        return self._merge(sale, llm_data)

    def _generate(self, prompt: str) -> str:
        logger.info(f"Requesting LLM refinement from Ollama ({self.model_name}), prompt length {len(prompt)}")
        response = requests.post(
            f"{self.ollama_url}/api/generate",
            json={
                "model": self.model_name,
                "prompt": prompt,
                "stream": False,
                "options": {"temperature": 0}
            },
            timeout=self.timeout
        )
        response.raise_for_status()
        return response.json().get('response', '')

    def _parse_llm_response(self, llm_response: str) -> Dict[str, Any]:
        """Pull the outermost JSON object out of the model reply."""
        match = re.search(r'\{[\s\S]*\}', llm_response or '')
        if not match:
            raise ValueError("No JSON object in LLM response")

        repaired = repair_json(match.group(0), return_objects=True)
        if isinstance(repaired, list) and repaired and isinstance(repaired[0], dict):
            repaired = repaired[0]
        if not isinstance(repaired, dict):
            raise ValueError("LLM response JSON is not an object")
        return repaired

    def _normalize_extracted_data(self, data: Dict[str, Any]) -> Dict[str, Any]:
        total = self._normalize_amount(data.get('totalAmount'))
        return {
            'customer_name': self._normalize_text(data.get('customerName')),
            'phone_number': self._normalize_text(data.get('phoneNumber')),
            'store_location': self._normalize_text(data.get('storeLocation')),
            'order_number': self._normalize_text(data.get('orderNumber')),
            'date': self._normalize_date(data.get('date')),
            'products': self._normalize_items(data.get('products')),
            'total_amount': min(total, self.max_total) if total else 0.0
        }

    def _normalize_items(self, items_raw) -> List[LineItem]:
        if not isinstance(items_raw, list):
            return []

        items = []
        for raw in items_raw[:self.max_products]:
            if not isinstance(raw, dict):
                continue
            name = self._normalize_text(raw.get('name')) or 'Unknown Product'
            try:
                quantity = int(float(raw.get('quantity') or 1))
            except (TypeError, ValueError, OverflowError):
                quantity = 1
            price = self._normalize_amount(raw.get('price')) or 0.0
            items.append(LineItem(
                name=name,
                quantity=min(max(quantity, 1), self.max_quantity),
                price=min(price, self.max_price),
                category=self.category_classifier.classify(name)
            ))
        return items

    @staticmethod
    def _normalize_text(value) -> str:
        if value is None:
            return ''
        text = str(value).strip()
        return '' if text.lower() in ('null', 'none', 'n/a') else text

    @staticmethod
    def _normalize_date(date_str: Any) -> Optional[datetime]:
        if not isinstance(date_str, str) or not date_str.strip():
            return None
        try:
            return date_parser.parse(date_str, fuzzy=True)
        except (ValueError, OverflowError) as e:
            logger.debug(f"Ignoring unparseable LLM date '{date_str}': {e}")
            return None

    @staticmethod
    def _normalize_amount(amount: Any) -> float:
        """Amount as a non-negative float; 0.0 when unreadable."""
        if isinstance(amount, bool):
            return 0.0
        try:
            if isinstance(amount, (int, float)):
                number = float(amount)
            elif isinstance(amount, str):
                cleaned = re.sub(r'[^\d.,]', '', amount)
                if re.fullmatch(r'\d{1,3}(?:,\d{3})+', cleaned):
                    cleaned = cleaned.replace(',', '')
                number = parse_amount(cleaned)
            else:
                return 0.0
        except (ValueError, OverflowError):
            return 0.0

        # inf / nan from "1e999"-style replies
        if not math.isfinite(number):
            return 0.0
        return round(max(number, 0.0), 2)

    def _merge(self, sale: ExtractedSale, llm: Dict[str, Any]) -> ExtractedSale:
        """LLM values only fill fields the regex pipeline left empty."""
        changes = {}
        for field_name in ('customer_name', 'phone_number', 'store_location', 'order_number'):
            if not getattr(sale, field_name) and llm[field_name]:
                changes[field_name] = llm[field_name]

        if sale.total_amount <= 0 and llm['total_amount'] > 0:
            changes['total_amount'] = llm['total_amount']

        if not any(item.price > 0 for item in sale.products) and llm['products']:
            changes['products'] = tuple(llm['products'])

        if not sale.date_detected and llm['date'] is not None:
            changes['date'] = llm['date']
            changes['date_detected'] = True

        if not changes:
            logger.info("LLM refinement added nothing to the regex result")
            return sale

        logger.info(f"LLM refinement filled fields: {sorted(changes)}")
        changes['extraction_method'] = self.EXTRACTION_METHOD
        return sale.with_changes(**changes)
