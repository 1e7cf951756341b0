"""Core domain models for invoice line-item extraction.

This module provides the data models shared across the project:
- LineItem: one recovered row of an invoice's product/service table
- LogicalLine: a table row reassembled from wrapped physical lines
- Section: a named region of the source document
- ExtractionResult: what one extraction call returns

Usage:
    from invoicelines.domain import LineItem, Section
"""

from invoicelines.domain.invoice import ExtractionResult, LineItem, LogicalLine, Section

__all__ = [
    "ExtractionResult",
    "LineItem",
    "LogicalLine",
    "Section",
]
