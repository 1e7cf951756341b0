"""Locale normalization for monetary values found in invoice rows."""

import re

from .common import CURRENCY_SYMBOL

# A point followed by one or two trailing digits is a fractional separator
_POINT_DECIMAL = re.compile(r"\.(\d{1,2})$")


def normalize_money(raw: str, currency_symbol: str = CURRENCY_SYMBOL) -> str:
    """
    Convert a matched numeric substring into a canonical currency string.

    Values already using a decimal comma keep their digits untouched, including
    any thousands points ("1.500,00"). A point-decimal value has its fractional
    point turned into a comma ("250.00" -> "250,00"). Any currency prefix
    already present is dropped before the canonical one is added, so the
    function is idempotent.
    """
    value = raw.strip()
    if value.startswith(currency_symbol):
        value = value[len(currency_symbol) :].strip()
    if "," not in value:
        value = _POINT_DECIMAL.sub(r",\1", value)
    return f"{currency_symbol} {value}"
