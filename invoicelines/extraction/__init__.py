"""Line-item recovery engine for decoded invoice text."""

from .candidate_matcher import CANDIDATE_PATTERNS, match_candidates, match_line
from .common import DEFAULT_SETTINGS, ExtractionSettings
from .dedup import deduplicate
from .formatter import items_to_csv, items_to_json
from .line_reassembler import reassemble_lines
from .normalizer import normalize_text
from .pipeline import extract_invoice, extract_line_items
from .section_locator import TableSpan, locate_table, split_sections
from .value_normalizer import normalize_money

__all__ = [
    "CANDIDATE_PATTERNS",
    "DEFAULT_SETTINGS",
    "ExtractionSettings",
    "TableSpan",
    "deduplicate",
    "extract_invoice",
    "extract_line_items",
    "items_to_csv",
    "items_to_json",
    "locate_table",
    "match_candidates",
    "match_line",
    "normalize_money",
    "normalize_text",
    "reassemble_lines",
    "split_sections",
]
