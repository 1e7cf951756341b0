"""Application workflows: one file in, items out; directory surveys."""

from invoicelines.application.analysis import PatternAnalysisRequest, run_pattern_analysis
from invoicelines.application.extract import InvoiceExtractRequest, run_invoice_extraction

__all__ = [
    "InvoiceExtractRequest",
    "run_invoice_extraction",
    "PatternAnalysisRequest",
    "run_pattern_analysis",
]
