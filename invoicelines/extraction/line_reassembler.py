"""Rebuild logical table rows from wrapped physical lines."""

from invoicelines.domain.invoice import LogicalLine

from .common import (
    DEFAULT_SETTINGS,
    ExtractionSettings,
    _accepts_continuation,
    _is_continuation_candidate,
    _is_header_line,
    _is_row_start,
)


def reassemble_lines(text: str, settings: ExtractionSettings = DEFAULT_SETTINGS) -> list[LogicalLine]:
    """
    Merge continuation lines back into the row they were wrapped from.

    Lines are classified in order: coded row-start, header/label line,
    continuation candidate. Row-start detection runs first so a new product
    row is never swallowed into the previous description. A continuation
    stands alone when there is nothing before it, or when the previous
    logical line is a header or already ends in its unit price and total.

    Args:
        text: The table slice chosen by the section locator.
    """
    raw_lines = [line.strip() for line in text.split("\n")]
    logical: list[LogicalLine] = []

    for line in raw_lines:
        if not line:
            continue
        if _is_row_start(line) or _is_header_line(line, settings):
            logical.append(LogicalLine(parts=[line]))
        elif (
            _is_continuation_candidate(line, settings)
            and logical
            and _accepts_continuation(logical[-1].text, settings)
        ):
            logical[-1].append(line)
        else:
            logical.append(LogicalLine(parts=[line]))

    return logical
