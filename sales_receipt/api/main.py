from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import Dict, Any, Literal
import logging

from ..orchestration.sale_extraction_orchestrator import (
    SaleExtractionOrchestrator, get_sale_extraction_orchestrator
)
from ..standardization.sale_sanitizer import SaleSanitizer
from ..refinement.llm_refiner import LLMSaleRefiner
from ..extraction.sale_fields.shared_utils.config_manager import get_config_manager

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Sales Receipt Extraction API",
    description="Extracts structured sale records from OCR/PDF receipt and invoice text.",
    version="1.0.0"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Adjust in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_components: Dict[str, Any] = {}


# Pydantic models
class ExtractionRequest(BaseModel):
    text: str = Field(..., description="Text extracted from the uploaded receipt or invoice")
    source: Literal['ocr', 'pdf'] = Field('ocr', description="How the text was acquired")
    use_llm: bool = Field(False, description="Refine low-value results with the local LLM")


def _get_orchestrator(source: str) -> SaleExtractionOrchestrator:
    """PDF text gets the doubled-letter collapse on the flat fallback."""
    if source != 'pdf':
        return get_sale_extraction_orchestrator()
    if 'pdf_orchestrator' not in _components:
        _components['pdf_orchestrator'] = SaleExtractionOrchestrator(aggressive=True)
    return _components['pdf_orchestrator']


def _get_sanitizer() -> SaleSanitizer:
    if 'sanitizer' not in _components:
        _components['sanitizer'] = SaleSanitizer()
    return _components['sanitizer']


def _get_refiner() -> LLMSaleRefiner:
    if 'refiner' not in _components:
        _components['refiner'] = LLMSaleRefiner()
    return _components['refiner']


@app.post("/extract", response_model=Dict[str, Any])
def extract_sale(request: ExtractionRequest):
    """
    Extract a sale record from receipt text.
    Regex extraction first; the LLM is consulted only when asked and when
    the regex result has no priced product or no total.

    A plain def, so it runs in the threadpool while requests.post blocks.
    """
    max_length = get_config_manager().get_max_text_length()
    if len(request.text) > max_length:
        raise HTTPException(status_code=413, detail=f"Text exceeds maximum length of {max_length} characters")

    try:
        sale = _get_orchestrator(request.source).extract(request.text)

        if request.use_llm:
            refiner = _get_refiner()
            if refiner.needs_refinement(sale):
                sale = refiner.refine(request.text, sale)

        sanitized = _get_sanitizer().sanitize(sale)
        logger.info(f"Extraction complete: method={sanitized.extraction_method}, "
                    f"confidence={sanitized.confidence['overall']}")

        return {
            'message': 'Text processed successfully',
            'extractedText': request.text,
            'saleInfo': sanitized.sale_info(),
            'confidence': sanitized.confidence,
            'extractionMethod': sanitized.extraction_method
        }

    except Exception as e:
        logger.error(f"Extraction failed: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/health")
async def health_check():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("sales_receipt.api.main:app", host="0.0.0.0", port=8000, reload=False)
