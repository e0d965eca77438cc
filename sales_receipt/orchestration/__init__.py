"""
Orchestration Package
"""
from .sale_extraction_orchestrator import (
    SaleExtractionOrchestrator,
    get_sale_extraction_orchestrator,
    extract,
    extract_structured,
    extract_flat
)

__all__ = [
    'SaleExtractionOrchestrator',
    'get_sale_extraction_orchestrator',
    'extract',
    'extract_structured',
    'extract_flat'
]
