"""
HTTP boundary service (FastAPI). Run with:

    uvicorn sales_receipt.api.main:app
"""
