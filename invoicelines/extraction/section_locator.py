"""Locate the item table inside a normalized invoice text."""

from __future__ import annotations

import re
from dataclasses import dataclass

from invoicelines.domain.invoice import Section

from .common import DEFAULT_SETTINGS, ExtractionSettings


@dataclass(frozen=True)
class TableSpan:
    """Offsets of the item table within the normalized text."""

    start: int
    end: int
    start_marker: str  # Pattern that opened the table
    end_marker: str | None = None  # Section name that closed it; None means end of document


def _first_match_end(text: str, patterns: tuple[str, ...]) -> tuple[int, str] | None:
    """Return (end offset, pattern) for the first pattern in priority order that matches."""
    for pattern in patterns:
        match = re.search(pattern, text, re.IGNORECASE)
        if match:
            return match.end(), pattern
    return None


def _find_end_markers(text: str, end_patterns: tuple[tuple[str, str], ...]) -> list[tuple[int, str]]:
    """Return (offset, section name) for every end marker found, sorted by offset."""
    found: list[tuple[int, str]] = []
    for name, pattern in end_patterns:
        match = re.search(pattern, text, re.IGNORECASE)
        if match:
            found.append((match.start(), name))
    return sorted(found, key=lambda entry: entry[0])


def locate_table(text: str, settings: ExtractionSettings = DEFAULT_SETTINGS) -> TableSpan | None:
    """
    Find the slice of the document holding the product/service table.

    Section titles are tried first, then generic column-header markers. The
    table runs from the end of the first matching marker up to the earliest
    end marker after it, or to the end of the document.

    Returns:
        TableSpan, or None when no marker matches at all (no table found).
    """
    if not text:
        return None

    opened = _first_match_end(text, settings.start_patterns)
    if opened is None:
        opened = _first_match_end(text, settings.header_patterns)
    if opened is None:
        return None

    start, start_marker = opened
    remainder = text[start:]
    end_markers = _find_end_markers(remainder, settings.end_patterns)
    if not end_markers:
        return TableSpan(start=start, end=len(text), start_marker=start_marker)

    offset, name = end_markers[0]
    return TableSpan(start=start, end=start + offset, start_marker=start_marker, end_marker=name)


def _split_lines(text: str) -> tuple[str, ...]:
    return tuple(line.strip() for line in text.split("\n") if line.strip())


def split_sections(
    text: str,
    span: TableSpan | None,
    settings: ExtractionSettings = DEFAULT_SETTINGS,
) -> list[Section]:
    """
    Break the document into named regions around the item table.

    Produces "header" (everything before the table), "items" (the table
    slice) and one region per end marker found after the table, named after
    the marker; consecutive markers sharing a name form one region. Without
    a table the whole document is one "header" region. Empty regions are
    omitted.
    """
    if span is None:
        lines = _split_lines(text)
        return [Section(name="header", lines=lines)] if lines else []

    sections: list[Section] = []
    header_lines = _split_lines(text[: span.start])
    if header_lines:
        sections.append(Section(name="header", lines=header_lines))
    sections.append(Section(name="items", lines=_split_lines(text[span.start : span.end])))

    tail = text[span.end :]
    markers: list[tuple[int, str]] = []
    for offset, name in _find_end_markers(tail, settings.end_patterns):
        # DANFE trailers repeat a title ("DADOS ADICIONAIS" then "INFORMAÇÕES
        # COMPLEMENTARES"); consecutive markers of one name form one region.
        if markers and markers[-1][1] == name:
            continue
        markers.append((offset, name))
    for index, (offset, name) in enumerate(markers):
        stop = markers[index + 1][0] if index + 1 < len(markers) else len(tail)
        if stop == offset:
            # Two markers opening at the same offset; the later one holds the text.
            continue
        lines = _split_lines(tail[offset:stop])
        if lines:
            sections.append(Section(name=name, lines=lines))
    return sections
