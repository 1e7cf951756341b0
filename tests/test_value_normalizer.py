import pytest
from invoicelines.extraction.value_normalizer import normalize_money


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("250,00", "R$ 250,00"),
        ("1.500,00", "R$ 1.500,00"),
        ("250.00", "R$ 250,00"),
        ("1500.5", "R$ 1500,5"),
        ("R$ 1.500,00", "R$ 1.500,00"),
        ("R$1.500,00", "R$ 1.500,00"),
        ("  12,90 ", "R$ 12,90"),
        ("1500", "R$ 1500"),
    ],
)
def test_normalize_money(raw: str, expected: str) -> None:
    assert normalize_money(raw) == expected


def test_thousands_point_without_decimals_is_left_alone() -> None:
    assert normalize_money("1.500") == "R$ 1.500"


def test_normalize_money_is_idempotent() -> None:
    once = normalize_money("250.00")
    assert normalize_money(once) == once
    assert normalize_money("R$ 1.500,00") == "R$ 1.500,00"


def test_custom_currency_symbol() -> None:
    assert normalize_money("US$ 9.99", currency_symbol="US$") == "US$ 9,99"
