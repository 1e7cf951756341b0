"""Remove line items captured more than once."""

from invoicelines.domain.invoice import LineItem


def deduplicate(items: list[LineItem]) -> list[LineItem]:
    """
    Drop repeated items, keeping the first occurrence in order.

    Two items are the same when description and total price match exactly.
    Distinct rows sharing both fields are merged too; that trade-off is
    accepted.
    """
    seen: set[tuple[str, str]] = set()
    unique: list[LineItem] = []
    for item in items:
        key = (item.description, item.total_price)
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return unique
