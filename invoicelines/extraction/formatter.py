"""Format extracted line items for export."""

import csv
import io
import json

from invoicelines.domain.invoice import LineItem

CSV_HEADER = ("Description", "Unit", "UnitPrice", "TotalPrice")


def items_to_csv(items: list[LineItem]) -> str:
    """
    Render items as CSV: a header row, then one row per item.

    Every field is quoted; descriptions routinely contain commas.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for item in items:
        writer.writerow([item.description, item.unit, item.unit_price, item.total_price])
    return buffer.getvalue()


def items_to_json(items: list[LineItem], indent: int | None = 2) -> str:
    """Render items as a JSON array of wire-format objects."""
    return json.dumps([item.to_dict() for item in items], indent=indent, ensure_ascii=False)
