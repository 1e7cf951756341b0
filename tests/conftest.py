"""Shared pytest fixtures for invoicelines tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from invoicelines.runtime.paths import reset_paths

CODED_INVOICE = "\n".join(
    [
        "DANFE",
        "EMITENTE: METALURGICA EXEMPLO LTDA",
        "DADOS DOS PRODUTOS/SERVIÇOS",
        "NCM/SH CSOSN CFOP UN QUANT V.UNIT V.TOTAL BC ICMS V.ICMS V.IPI ALIQ CÓDIGO DESCRIÇÃO",
        "84283300 0400 5102METRO 6 250,00 1.500,00 0,00 0,00 0,00 0,00 0,00001 CORREAS PARA",
        "equipamento jar test",
        "73181500 0400 5102 UND 10 2,50 25,00 0,00 0,00 0,00 0,00 0,00002 PARAFUSO SEXTAVADO INOX",
        "DADOS ADICIONAIS",
        "INFORMAÇÕES COMPLEMENTARES: pedido 123",
    ]
)


@pytest.fixture
def coded_invoice() -> str:
    return CODED_INVOICE


@pytest.fixture
def project_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point project paths at a temporary root for the duration of a test."""
    monkeypatch.setenv("INVOICELINES_HOME", str(tmp_path))
    reset_paths()
    yield tmp_path
    reset_paths()
