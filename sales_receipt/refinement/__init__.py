"""
Optional LLM refinement of regex extraction results.
"""
from .llm_refiner import LLMSaleRefiner

__all__ = ['LLMSaleRefiner']
