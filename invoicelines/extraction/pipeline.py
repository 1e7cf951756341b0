"""Extraction pipeline: raw decoded text in, deduplicated line items out."""

from __future__ import annotations

import logging

from invoicelines.domain.invoice import ExtractionResult, LineItem

from .candidate_matcher import match_candidates
from .common import DEFAULT_SETTINGS, ExtractionSettings
from .dedup import deduplicate
from .line_reassembler import reassemble_lines
from .normalizer import normalize_text
from .section_locator import locate_table, split_sections

# Pure zone: no runtime imports. Handlers live on the "invoicelines" logger.
logger = logging.getLogger(__name__)


def extract_invoice(
    raw_text: str,
    settings: ExtractionSettings = DEFAULT_SETTINGS,
    *,
    include_sections: bool = False,
) -> ExtractionResult:
    """
    Recover line items from the text of one invoice.

    Steps: normalize text, locate the item table, rebuild wrapped rows,
    match each row against the candidate patterns, dedupe.

    A document without a recognizable table yields an empty result, and rows
    no pattern accepts are skipped; neither is an error.

    Args:
        raw_text: Text produced by the PDF decoder (may be empty)
        settings: Guard thresholds and marker patterns
        include_sections: Also report the named document regions
    """
    text = normalize_text(raw_text, settings.currency_symbol)
    span = locate_table(text, settings)
    sections = split_sections(text, span, settings) if include_sections else None

    if span is None:
        logger.debug("No item table found in %d characters of text", len(text))
        return ExtractionResult(items=[], sections=sections, text=text)

    logger.debug(
        "Item table at [%d:%d] opened by %r, closed by %s",
        span.start,
        span.end,
        span.start_marker,
        span.end_marker or "end of document",
    )
    logical_lines = reassemble_lines(text[span.start : span.end], settings)

    items: list[LineItem] = []
    for line in logical_lines:
        matched = match_candidates(line, settings)
        if matched is None:
            continue
        pattern_name, item = matched
        logger.debug("Matched %s: %s", pattern_name, item.description)
        items.append(item)

    unique = deduplicate(items)
    if len(unique) != len(items):
        logger.debug("Dropped %d duplicate items", len(items) - len(unique))

    return ExtractionResult(
        items=unique,
        sections=sections,
        text=text,
        logical_line_count=len(logical_lines),
    )


def extract_line_items(raw_text: str, settings: ExtractionSettings = DEFAULT_SETTINGS) -> list[LineItem]:
    """Return only the deduplicated line items for a document."""
    return extract_invoice(raw_text, settings).items
