"""Structural pattern matching for logical invoice rows.

Each candidate pattern is a pure function taking the row text and returning
a LineItem or None. Patterns are tried in a fixed priority order and the
first one that both matches and passes its guard wins. The most specific
layouts come first; generic delimiter splitting is the most permissive and
runs late.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from invoicelines.domain.invoice import LineItem, LogicalLine

from .common import (
    DEFAULT_SETTINGS,
    ExtractionSettings,
    _collapse_spaces,
    _is_header_line,
    _is_valid_description,
    _is_valid_unit,
)
from .value_normalizer import normalize_money

CandidatePattern = Callable[[str, ExtractionSettings], LineItem | None]

# NCM(8) CSOSN(4) CFOP(4)
_CODES = r"^(\d{8})\s+(\d{4})\s+(\d{4})"
_UNIT = r"([^\W\d_]{2,})"
# QUANT V.UNIT V.TOTAL
_VALUES = r"\s+(\d+(?:[.,]\d+)?)\s+([\d.,]+)\s+([\d.,]+)"
# Tax columns (BC ICMS, V.ICMS, V.IPI, ...), zero on most small-business
# invoices. The last one may run straight into the item code: "0,00001".
_TAX_FIELDS = r"(?:\s+\d+(?:\.\d{3})*[.,]\d{2}){4,}"
# Item code and description tail
_CODE_AND_DESCRIPTION = r"\s*(\d{3})\s+(.+)$"

# Example: "84283300 0400 5102METRO 6 250,00 1.500,00 0,00 0,00 0,00 0,00 0,00001 CORREAS"
CODED_ROW_JOINED_UNIT = re.compile(_CODES + _UNIT + _VALUES + _TAX_FIELDS + _CODE_AND_DESCRIPTION)
# Example: "84283300 0400 5102 UND 6 250,00 1.500,00 0,00 0,00 0,00 0,00 001 CORREAS"
CODED_ROW_SPACED_UNIT = re.compile(_CODES + r"\s+" + _UNIT + _VALUES + _TAX_FIELDS + _CODE_AND_DESCRIPTION)

MIN_DELIMITED_FIELDS = 4
_MULTI_SPACE = re.compile(r"\s{2,}")
_HAS_DIGIT = re.compile(r"\d")


def _build_item(
    description: str,
    unit: str,
    unit_price: str,
    total_price: str,
    settings: ExtractionSettings,
) -> LineItem | None:
    """Apply the shared item guards and build a normalized LineItem."""
    description = _collapse_spaces(description)
    unit = unit.strip()
    if not _is_valid_description(description, settings) or not _is_valid_unit(unit, settings):
        return None
    return LineItem(
        description=description,
        unit=unit,
        unit_price=normalize_money(unit_price, settings.currency_symbol),
        total_price=normalize_money(total_price, settings.currency_symbol),
    )


def _match_coded_row(regex: re.Pattern[str], text: str, settings: ExtractionSettings) -> LineItem | None:
    match = regex.match(text)
    if not match:
        return None
    unit = match.group(4)
    unit_price = match.group(6)
    total_price = match.group(7)
    description = match.group(9)
    return _build_item(description, unit, unit_price, total_price, settings)


def match_coded_row_joined_unit(text: str, settings: ExtractionSettings = DEFAULT_SETTINGS) -> LineItem | None:
    """Coded row with the unit glued to the CFOP code ("5102METRO")."""
    return _match_coded_row(CODED_ROW_JOINED_UNIT, text, settings)


def match_coded_row_spaced_unit(text: str, settings: ExtractionSettings = DEFAULT_SETTINGS) -> LineItem | None:
    """Coded row with whitespace between CFOP code and unit ("5102 UND")."""
    return _match_coded_row(CODED_ROW_SPACED_UNIT, text, settings)


def _split_fields(text: str) -> list[str]:
    """Split on tabs, falling back to runs of two or more spaces."""
    fields = [part.strip() for part in text.split("\t") if part.strip()]
    if len(fields) >= MIN_DELIMITED_FIELDS:
        return fields
    return [part.strip() for part in _MULTI_SPACE.split(text) if part.strip()]


def match_delimited_row(text: str, settings: ExtractionSettings = DEFAULT_SETTINGS) -> LineItem | None:
    """
    Column-delimited row: description fields, then unit, unit price, total.

    Everything before the last three fields is joined as the description.
    """
    fields = _split_fields(text)
    if len(fields) < MIN_DELIMITED_FIELDS:
        return None

    description = " ".join(fields[:-3])
    unit, unit_price, total_price = fields[-3:]
    if not unit:
        return None
    if not _HAS_DIGIT.search(unit_price) or not _HAS_DIGIT.search(total_price):
        return None
    return _build_item(description, unit, unit_price, total_price, settings)


def match_free_form_row(text: str, settings: ExtractionSettings = DEFAULT_SETTINGS) -> LineItem | None:
    """Single-spaced row: "<description> <UNIT> R$ <unit price> R$ <total>"."""
    symbol = re.escape(settings.currency_symbol)
    pattern = rf"^(.+?)\s+{_UNIT}\s+{symbol}\s*([\d.,]+)\s+{symbol}\s*([\d.,]+)$"
    match = re.match(pattern, text.strip())
    if not match:
        return None
    return _build_item(match.group(1), match.group(2), match.group(3), match.group(4), settings)


# Priority order matters: first match that passes its guard wins.
CANDIDATE_PATTERNS: tuple[tuple[str, CandidatePattern], ...] = (
    ("coded_row_joined_unit", match_coded_row_joined_unit),
    ("coded_row_spaced_unit", match_coded_row_spaced_unit),
    ("delimited_row", match_delimited_row),
    ("free_form_row", match_free_form_row),
)


def match_candidates(
    line: LogicalLine | str,
    settings: ExtractionSettings = DEFAULT_SETTINGS,
    patterns: tuple[tuple[str, CandidatePattern], ...] = CANDIDATE_PATTERNS,
) -> tuple[str, LineItem] | None:
    """
    Run the candidate patterns over one logical line.

    Returns:
        (pattern name, item) for the first accepted pattern, or None when the
        line is a header or nothing matches.
    """
    text = line.text if isinstance(line, LogicalLine) else line
    text = text.strip()
    if not text or _is_header_line(text, settings):
        return None

    for name, pattern in patterns:
        item = pattern(text, settings)
        if item is not None:
            return name, item
    return None


def match_line(line: LogicalLine | str, settings: ExtractionSettings = DEFAULT_SETTINGS) -> LineItem | None:
    """Return the LineItem recovered from one logical line, or None."""
    matched = match_candidates(line, settings)
    return matched[1] if matched else None
