"""Canonicalize raw decoded invoice text before any structural parsing."""

import re

from .common import CURRENCY_SYMBOL

_LINE_BREAKS = re.compile(r"\r\n?")
_BLANK_RUNS = re.compile(r"\n{3,}")


def normalize_text(raw: str, currency_symbol: str = CURRENCY_SYMBOL) -> str:
    """
    Normalize line endings, blank-line runs and currency spacing.

    Column separators (tabs, runs of spaces) are left alone; later stages
    use them to split fields.
    """
    if not raw:
        return ""
    text = _LINE_BREAKS.sub("\n", raw)
    text = _BLANK_RUNS.sub("\n\n", text)
    return re.sub(re.escape(currency_symbol) + r"\s+", f"{currency_symbol} ", text)
