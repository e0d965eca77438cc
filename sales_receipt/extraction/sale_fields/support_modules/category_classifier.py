"""
Category Classifier - Maps product names onto the store's product taxonomy
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from ..models.extraction_models import ProductCategory
from ..shared_utils.config_manager import ConfigManager, get_config_manager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoryRule:
    """Matches when the name holds any `any_of` keyword and every `all_of` keyword."""
    category: ProductCategory
    any_of: Tuple[str, ...] = ()
    all_of: Tuple[str, ...] = ()

    def matches(self, name_lower: str) -> bool:
        if self.any_of and not any(keyword in name_lower for keyword in self.any_of):
            return False
        return all(keyword in name_lower for keyword in self.all_of)


class CategoryClassifier:
    """Ordered keyword rules, evaluated top-down; first match wins."""

    DEFAULT_CATEGORY = ProductCategory.ACCESSORY

    def __init__(self, config_manager: Optional[ConfigManager] = None, rules: Optional[List[CategoryRule]] = None):
        if rules is None:
            config_manager = config_manager or get_config_manager()
            rules = self._build_rules(config_manager.get_category_rules())
        self.rules = rules

    @staticmethod
    def _build_rules(rule_configs: List[Dict[str, Any]]) -> List[CategoryRule]:
        rules = []
        for rule_config in rule_configs:
            try:
                category = ProductCategory(rule_config['category'])
            except (KeyError, ValueError):
                logger.warning(f"Skipping category rule with unknown category: {rule_config}")
                continue
            rules.append(CategoryRule(
                category=category,
                any_of=tuple(k.lower() for k in rule_config.get('any_of', [])),
                all_of=tuple(k.lower() for k in rule_config.get('all_of', []))
            ))
        return rules

    def classify(self, product_name: str) -> ProductCategory:
        name_lower = (product_name or '').lower()
        for rule in self.rules:
            if rule.matches(name_lower):
                return rule.category
        return self.DEFAULT_CATEGORY
