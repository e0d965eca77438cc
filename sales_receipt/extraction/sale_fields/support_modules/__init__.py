"""
Support Modules Package
"""
from .section_segmenter import SectionSegmenter, HEADER_SECTION
from .date_detector_integrated import IntegratedSaleDateDetector
from .category_classifier import CategoryClassifier, CategoryRule

__all__ = [
    'SectionSegmenter',
    'HEADER_SECTION',
    'IntegratedSaleDateDetector',
    'CategoryClassifier',
    'CategoryRule'
]
