"""
Configuration Manager - Handles config loading and management
"""
import json
import os
import logging
from pathlib import Path
from typing import Dict, Any, List

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages sale extraction configuration."""

    def __init__(self, config_path=None):
        if config_path is None:
            config_path = os.getenv('SALE_EXTRACTION_CONFIG') or self._get_default_config_path()

        self.config_path = Path(config_path)
        self.config = self.load_configuration()

    def _get_default_config_path(self):
        """Get default config path."""
        return os.path.join(os.path.dirname(__file__), '..', '..', '..', 'config', 'sale_extraction_config.json')

    def load_configuration(self) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        try:
            with open(self.config_path, 'r') as f:
                loaded = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not load config from {self.config_path}: {e}; using built-in defaults")
            return self._get_default_config()

        # Keys missing from the file keep their defaults
        config = self._get_default_config()
        config.update(loaded)
        return config

    def _get_default_config(self) -> Dict[str, Any]:
        """Provide default configuration if config file is not available."""
        return {
            'section_markers': [
                'CUSTOMER', 'INVOICE', 'BILL TO', 'SHIP TO', 'TOTAL', 'SUBTOTAL', 'TAX',
                'ITEMS', 'PRODUCTS', 'ACCESSORIES', 'RECEIPT', 'PHONE', 'DATE', 'PAYMENT'
            ],
            'item_exclusions': ['total', 'subtotal', 'tax', 'shipping', 'discount', 'grand'],
            'flat_extra_exclusions': [r'\bdate\s*:', r'\bcustomer\s*:', r'\bphone\s*:'],
            'category_rules': [
                {'category': 'upgrade',
                 'any_of': ['phone', 'iphone', 'samsung', 'pixel', 'galaxy', 'android', 'apple'],
                 'all_of': ['upgrade']},
                {'category': 'activation',
                 'any_of': ['phone', 'iphone', 'samsung', 'pixel', 'galaxy', 'android', 'apple'],
                 'all_of': []},
                {'category': 'service', 'any_of': ['plan', 'service', 'contract'], 'all_of': []},
                {'category': 'protection',
                 'any_of': ['protection', 'insurance', 'warranty', 'coverage'], 'all_of': []}
            ],
            'limits': {'max_quantity': 1000, 'max_price': 10000, 'max_total': 100000},
            'field_caps': {
                'customer_name': 100,
                'phone_number': 30,
                'store_location': 100,
                'order_number': 50,
                'product_name': 100
            },
            'max_item_line_length': 300,
            'max_text_length': 200000,
            'llm': {
                'url': 'http://localhost:11434',
                'model': 'llama3.2',
                'timeout': 60,
                'max_products': 20,
                'max_quantity': 100,
                'max_price': 10000,
                'max_total': 100000
            }
        }

    def get_section_markers(self) -> List[str]:
        return self.config.get('section_markers', [])

    def get_item_exclusions(self, flat: bool = False) -> List[str]:
        """Line-item exclusion regex fragments; the flat strategy adds labelled lines."""
        exclusions = list(self.config.get('item_exclusions', []))
        if flat:
            exclusions.extend(self.config.get('flat_extra_exclusions', []))
        return exclusions

    def get_category_rules(self) -> List[Dict[str, Any]]:
        return self.config.get('category_rules', [])

    def get_limits(self) -> Dict[str, Any]:
        return self.config.get('limits', {})

    def get_field_caps(self) -> Dict[str, int]:
        return self.config.get('field_caps', {})

    def get_max_item_line_length(self) -> int:
        return int(self.config.get('max_item_line_length', 300))

    def get_max_text_length(self) -> int:
        return int(self.config.get('max_text_length', 200000))

    def get_llm_settings(self) -> Dict[str, Any]:
        return self.config.get('llm', {})


# Singleton instance
_config_manager_instance = None


def get_config_manager() -> ConfigManager:
    """Get or create singleton ConfigManager instance."""
    global _config_manager_instance

    if _config_manager_instance is None:
        _config_manager_instance = ConfigManager()

    return _config_manager_instance
