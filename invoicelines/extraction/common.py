"""Shared constants, pattern catalogues and settings for line-item extraction."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

# Guard thresholds. Tuned by hand on a small set of invoices; recalibrate
# against a real corpus before trusting them.
MIN_DESCRIPTION_LENGTH = 3  # Descriptions must be strictly longer than this
MIN_UNIT_LENGTH = 2

CURRENCY_SYMBOL = "R$"

# Markers for the product/service section, in priority order
PRODUCT_SECTION_PATTERNS = (
    r"DADOS\s+DOS\s+PRODUTOS[/\s]SERVI[ÇC]OS?",
    r"PRODUTOS[/\s]SERVI[ÇC]OS?",
    r"DADOS\s+PRODUTOS",
)

# Column-header markers used when no section title is present
TABLE_HEADER_PATTERNS = (
    r"N[º°o]\s+Descri[çc][ãa]o\s+do\s+Produto",
    r"N[º°o]\s+Descri[çc][ãa]o",
    r"C[óo]digo\s+Descri[çc][ãa]o",
)

# Markers that close the item table. Order carries no priority: the
# earliest occurrence wins.
END_SECTION_PATTERNS = (
    ("additional_data", r"DADOS\s+ADICIONAIS"),
    ("additional_data", r"INFORMA[ÇC][ÕO]ES\s+COMPLEMENTARES"),
    ("totals", r"TOTAL\s+Geral"),
    ("totals", r"VALOR\s+TOTAL"),
)

# Column header / label lines. Quantity, unit and value columns come in many
# abbreviated spellings ("QTD", "QTDE", "V.UNIT", "VL. TOTAL", ...).
HEADER_KEYWORD_PATTERNS = (
    r"N[º°]",
    r"Descri",
    r"Unidade",
    r"UNID\b",
    r"UN\.?\s*$",
    r"UN\s+(?:QT|QUANT|V)",
    r"Quantidade",
    r"QUANT\b",
    r"QTDE?\b",
    r"Valor",
    r"VLR?\.?\s*(?:UNIT|TOTAL|DESC|ICMS|IPI|BC)",
    r"V\.\s*(?:UNIT|TOTAL|DESC)",
    r"C[ÓO]DIGO",
    r"C[ÓO]D\.?\s*PROD",
    r"NCM",
    r"CSOSN",
    r"CST\b",
    r"CFOP",
    r"DADOS",
    r"AL[ÍI]Q",
    r"BASE\s+(?:DE\s+)?C[ÁA]LC",
)
HEADER_LINE_REGEX = re.compile(r"^(?:" + "|".join(HEADER_KEYWORD_PATTERNS) + r")", re.IGNORECASE)

# NCM (8) + CSOSN/CST (4) + CFOP (4) at the start of a line opens a new row
ROW_START_REGEX = re.compile(r"^\d{8}\s+\d{4}\s+\d{4}")

# A bare number of two or more digits at line start is a column value, not a
# wrapped description
LEADING_NUMBER_REGEX = re.compile(r"^\d{2,}\b")

HAS_LETTER_REGEX = re.compile(r"[^\W\d_]")

# Two amounts at line end close a priced row; nothing wraps onto it
MONEY_TOKEN = r"\d[\d.]*[.,]\d{2}"


@dataclass(frozen=True)
class ExtractionSettings:
    """Tunable inputs for the extraction pipeline.

    Pattern fields hold regex source strings; extra patterns loaded from
    configuration are placed ahead of the built-in ones.
    """

    min_description_length: int = MIN_DESCRIPTION_LENGTH
    min_unit_length: int = MIN_UNIT_LENGTH
    currency_symbol: str = CURRENCY_SYMBOL
    start_patterns: tuple[str, ...] = PRODUCT_SECTION_PATTERNS
    header_patterns: tuple[str, ...] = TABLE_HEADER_PATTERNS
    end_patterns: tuple[tuple[str, str], ...] = END_SECTION_PATTERNS
    extra_header_keywords: tuple[str, ...] = field(default_factory=tuple)


DEFAULT_SETTINGS = ExtractionSettings()


def _is_header_line(line: str, settings: ExtractionSettings = DEFAULT_SETTINGS) -> bool:
    """Return True if the line is a column header or label, not data."""
    stripped = line.strip()
    if not stripped:
        return False
    if HEADER_LINE_REGEX.match(stripped):
        return True
    return any(re.match(pattern, stripped, re.IGNORECASE) for pattern in settings.extra_header_keywords)


def _is_row_start(line: str) -> bool:
    return ROW_START_REGEX.match(line) is not None


def _ends_with_two_amounts(line: str, settings: ExtractionSettings = DEFAULT_SETTINGS) -> bool:
    symbol = rf"(?:{re.escape(settings.currency_symbol)}\s*)?"
    return re.search(rf"{symbol}{MONEY_TOKEN}\s+{symbol}{MONEY_TOKEN}\s*$", line) is not None


def _is_continuation_candidate(line: str, settings: ExtractionSettings = DEFAULT_SETTINGS) -> bool:
    """
    Return True if a physical line looks like the wrapped tail of a description.

    It must carry alphabetic content and must not open a new coded row, be a
    header or start with a bare multi-digit number.
    """
    if not HAS_LETTER_REGEX.search(line):
        return False
    if _is_row_start(line) or _is_header_line(line, settings):
        return False
    return LEADING_NUMBER_REGEX.match(line) is None


def _accepts_continuation(line: str, settings: ExtractionSettings = DEFAULT_SETTINGS) -> bool:
    """Return True unless the logical line is a header or an already priced row."""
    if _is_header_line(line, settings):
        return False
    return not _ends_with_two_amounts(line, settings)


def _collapse_spaces(text: str) -> str:
    return " ".join(text.split())


def _is_valid_unit(unit: str, settings: ExtractionSettings = DEFAULT_SETTINGS) -> bool:
    return unit.isalpha() and len(unit) >= settings.min_unit_length


def _is_valid_description(description: str, settings: ExtractionSettings = DEFAULT_SETTINGS) -> bool:
    return len(description) > settings.min_description_length
