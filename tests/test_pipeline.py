import pytest
from invoicelines.extraction.common import ExtractionSettings
from invoicelines.extraction.pipeline import extract_invoice, extract_line_items

CODED_ROW = "84283300 0400 5102METRO 6 250,00 1.500,00 0,00 0,00 0,00 0,00 0,00001 CORREAS PARA EQUIPAMENTO"

DELIMITED_INVOICE = "\n".join(
    [
        "Loja Papelaria Central",
        "Código Descrição\tUN\tV.Unit\tV.Total",
        "Caneta esferográfica azul\tCX\t12,90\t25,80",
        "Papel sulfite A4  RESMA  R$   22.50  R$ 45.00",
        "Serviço de entrega HR R$ 15,00 R$ 15,00",
        "TOTAL Geral R$ 85,80",
    ]
)


def test_coded_invoice_items(coded_invoice: str) -> None:
    items = extract_line_items(coded_invoice)

    assert [item.to_dict() for item in items] == [
        {
            "description": "CORREAS PARA equipamento jar test",
            "unit": "METRO",
            "unitPrice": "R$ 250,00",
            "totalPrice": "R$ 1.500,00",
        },
        {
            "description": "PARAFUSO SEXTAVADO INOX",
            "unit": "UND",
            "unitPrice": "R$ 2,50",
            "totalPrice": "R$ 25,00",
        },
    ]


def test_mixed_layouts_after_table_header() -> None:
    items = extract_line_items(DELIMITED_INVOICE)

    assert [(item.description, item.unit, item.total_price) for item in items] == [
        ("Caneta esferográfica azul", "CX", "R$ 25,80"),
        ("Papel sulfite A4", "RESMA", "R$ 45,00"),
        ("Serviço de entrega", "HR", "R$ 15,00"),
    ]


def test_windows_line_endings_give_same_items(coded_invoice: str) -> None:
    assert extract_line_items(coded_invoice.replace("\n", "\r\n")) == extract_line_items(coded_invoice)


def test_header_only_table_is_empty_not_an_error() -> None:
    text = "DADOS DOS PRODUTOS/SERVIÇOS\nCÓDIGO DESCRIÇÃO UN QUANT V.UNIT V.TOTAL\nDADOS ADICIONAIS"

    result = extract_invoice(text)

    assert result.items == []


def test_document_without_table_is_empty() -> None:
    result = extract_invoice(f"Recibo\n{CODED_ROW}")

    assert result.items == []
    assert result.logical_line_count == 0


def test_empty_text_is_empty() -> None:
    assert extract_line_items("") == []


def test_repeated_row_is_reported_once() -> None:
    text = f"PRODUTOS/SERVIÇOS\n{CODED_ROW}\n{CODED_ROW}"

    result = extract_invoice(text)

    assert result.logical_line_count == 2
    assert len(result.items) == 1
    assert result.items[0].description == "CORREAS PARA EQUIPAMENTO"


@pytest.mark.parametrize(
    "text",
    [
        "",
        "PRODUTOS/SERVIÇOS\nlinha sem valores",
        DELIMITED_INVOICE,
        f"PRODUTOS/SERVIÇOS\n{CODED_ROW}\n{CODED_ROW}\nmais descricao\nNCM CFOP",
    ],
)
def test_item_count_never_exceeds_logical_lines(text: str) -> None:
    result = extract_invoice(text)

    assert 0 <= len(result.items) <= result.logical_line_count


def test_sections_are_optional(coded_invoice: str) -> None:
    assert extract_invoice(coded_invoice).sections is None

    result = extract_invoice(coded_invoice, include_sections=True)

    assert result.sections is not None
    assert [section.name for section in result.sections][:2] == ["header", "items"]


def test_custom_start_pattern_from_settings() -> None:
    settings = ExtractionSettings(start_patterns=(r"ITENS\s+DA\s+NOTA",))
    text = f"ITENS DA NOTA\n{CODED_ROW}"

    assert len(extract_line_items(text, settings)) == 1
    assert extract_line_items(text) == []


def test_description_wrapped_above_the_priced_line() -> None:
    items = extract_line_items("PRODUTOS/SERVIÇOS\nCaneta esferográfica\nazul\tCX\t12,90\t25,80")

    assert [(item.description, item.unit, item.total_price) for item in items] == [
        ("Caneta esferográfica azul", "CX", "R$ 25,80"),
    ]
