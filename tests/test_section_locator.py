from invoicelines.extraction.common import PRODUCT_SECTION_PATTERNS, TABLE_HEADER_PATTERNS
from invoicelines.extraction.section_locator import locate_table, split_sections


def test_product_section_marker_opens_table(coded_invoice: str) -> None:
    span = locate_table(coded_invoice)

    assert span is not None
    assert span.start_marker == PRODUCT_SECTION_PATTERNS[0]
    assert coded_invoice[: span.start].endswith("DADOS DOS PRODUTOS/SERVIÇOS")
    assert coded_invoice[span.end :].startswith("DADOS ADICIONAIS")
    assert span.end_marker == "additional_data"


def test_first_pattern_in_priority_order_wins() -> None:
    text = "DADOS PRODUTOS\nlixo\nPRODUTOS/SERVIÇOS\nlinha"

    span = locate_table(text)

    assert span is not None
    assert span.start_marker == PRODUCT_SECTION_PATTERNS[1]
    assert text[span.start :] == "\nlinha"


def test_falls_back_to_table_header_markers() -> None:
    text = "Fornecedor X\nNº Descrição do Produto UN V.Unit V.Total\nCaneta  CX  1,00  2,00"

    span = locate_table(text)

    assert span is not None
    assert span.start_marker == TABLE_HEADER_PATTERNS[0]
    assert span.end == len(text)
    assert span.end_marker is None


def test_earliest_end_marker_wins() -> None:
    text = "PRODUTOS/SERVIÇOS\nitem\nVALOR TOTAL DA NOTA 10,00\nDADOS ADICIONAIS\nobs"

    span = locate_table(text)

    assert span is not None
    assert text[span.start : span.end] == "\nitem\n"
    assert span.end_marker == "totals"


def test_no_marker_means_no_table() -> None:
    assert locate_table("Recibo simples sem tabela\nObrigado") is None
    assert locate_table("") is None


def test_split_sections_names_regions(coded_invoice: str) -> None:
    span = locate_table(coded_invoice)

    sections = split_sections(coded_invoice, span)

    assert [section.name for section in sections] == ["header", "items", "additional_data"]
    assert sections[0].lines == ("DANFE", "EMITENTE: METALURGICA EXEMPLO LTDA", "DADOS DOS PRODUTOS/SERVIÇOS")
    assert len(sections[1].lines) == 4
    assert sections[2].lines == ("DADOS ADICIONAIS", "INFORMAÇÕES COMPLEMENTARES: pedido 123")


def test_split_sections_without_table_is_one_header_region() -> None:
    sections = split_sections("linha 1\n\nlinha 2", None)

    assert len(sections) == 1
    assert sections[0].name == "header"
    assert sections[0].lines == ("linha 1", "linha 2")
    assert split_sections("", None) == []


def test_split_sections_keeps_differently_named_trailers_apart() -> None:
    text = "PRODUTOS/SERVIÇOS\nitem\nDADOS ADICIONAIS\nobs\nINFORMAÇÕES COMPLEMENTARES\npedido 7\nVALOR TOTAL 10,00"

    sections = split_sections(text, locate_table(text))

    assert [section.name for section in sections] == ["header", "items", "additional_data", "totals"]
    assert sections[2].lines == ("DADOS ADICIONAIS", "obs", "INFORMAÇÕES COMPLEMENTARES", "pedido 7")
    assert sections[3].lines == ("VALOR TOTAL 10,00",)
