"""
Sale Fields Module
Per-field extractors plus the models, shared utilities and support modules they build on
"""

from . import models
from . import shared_utils
from . import support_modules
from . import field_extractors

__all__ = [
    'models',
    'shared_utils',
    'support_modules',
    'field_extractors'
]
