"""
Sales Receipt Extraction - Structured sale records from receipt/invoice text

Organized into 5 functional components:

📂 orchestration/ - Main entry points
   ├─ SaleExtractionOrchestrator: structured -> flat -> empty default
   ├─ extract / extract_structured / extract_flat
   └─ Singleton accessor

📂 extraction/ - Extraction strategies and field extractors
   ├─ SectionAwareSaleExtractor: header-segmented extraction
   ├─ FlatSaleExtractor: whole-document fallback
   └─ sale_fields/: models, shared utils, support modules, field extractors

📂 standardization/ - Upload-boundary sanitization
   └─ SaleSanitizer: clamps, caps, confidence labels

📂 refinement/ - Optional LLM refinement
   └─ LLMSaleRefiner: fills gaps via a local Ollama model

📂 api/ - FastAPI service (POST /extract, GET /health)

QUICK START:
    from sales_receipt import extract, SaleSanitizer

    sale = extract(ocr_text)
    record = SaleSanitizer().sanitize(sale)
    print(record.sale_info(), record.confidence)
"""

# Import main entry points
from .orchestration import (
    SaleExtractionOrchestrator,
    get_sale_extraction_orchestrator,
    extract,
    extract_structured,
    extract_flat
)

# Import strategies
from .extraction import (
    SectionAwareSaleExtractor,
    FlatSaleExtractor
)

# Import models
from .extraction.sale_fields.models import (
    ExtractedSale,
    LineItem,
    ProductCategory,
    empty_sale
)

# Import standardization and refinement
from .standardization import SaleSanitizer, SanitizedSale
from .refinement import LLMSaleRefiner

__version__ = "1.0.0"

__all__ = [
    'SaleExtractionOrchestrator',
    'get_sale_extraction_orchestrator',
    'extract',
    'extract_structured',
    'extract_flat',
    'SectionAwareSaleExtractor',
    'FlatSaleExtractor',
    'ExtractedSale',
    'LineItem',
    'ProductCategory',
    'empty_sale',
    'SaleSanitizer',
    'SanitizedSale',
    'LLMSaleRefiner'
]
