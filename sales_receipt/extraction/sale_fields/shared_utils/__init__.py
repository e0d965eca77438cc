"""
Shared Utilities Package
"""
from .config_manager import ConfigManager, get_config_manager
from .text_cleaner import TextCleaner, get_text_cleaner
from .pattern_matcher import PatternMatcher, FieldPattern, AMOUNT, parse_amount

__all__ = [
    'ConfigManager',
    'get_config_manager',
    'TextCleaner',
    'get_text_cleaner',
    'PatternMatcher',
    'FieldPattern',
    'AMOUNT',
    'parse_amount'
]
