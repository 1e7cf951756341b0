from pathlib import Path

from invoicelines.extraction.common import (
    DEFAULT_SETTINGS,
    END_SECTION_PATTERNS,
    PRODUCT_SECTION_PATTERNS,
)
from invoicelines.runtime.extraction_rules import (
    build_extraction_settings,
    load_decoder_settings,
    load_extraction_settings,
)


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    settings = load_extraction_settings(str(tmp_path / "missing.toml"))

    assert settings == DEFAULT_SETTINGS


def test_guard_and_pattern_overrides(tmp_path: Path) -> None:
    config = tmp_path / "extraction.toml"
    config.write_text(
        """
[guards]
min_description_length = 10
min_unit_length = 3

[currency]
symbol = "US$"

[sections]
start_patterns = ["ITENS\\\\s+DA\\\\s+NOTA"]
end_patterns = ["OBSERVA", { name = "signature", pattern = "ASSINATURA" }]
header_keywords = ["ITEM\\\\b"]
""",
        encoding="utf-8",
    )

    settings = load_extraction_settings(str(config))

    assert settings.min_description_length == 10
    assert settings.min_unit_length == 3
    assert settings.currency_symbol == "US$"
    assert settings.start_patterns == (r"ITENS\s+DA\s+NOTA", *PRODUCT_SECTION_PATTERNS)
    assert settings.end_patterns[:2] == (("trailer", "OBSERVA"), ("signature", "ASSINATURA"))
    assert settings.end_patterns[2:] == END_SECTION_PATTERNS
    assert settings.extra_header_keywords == (r"ITEM\b",)


def test_build_from_empty_config_matches_defaults() -> None:
    assert build_extraction_settings({}) == DEFAULT_SETTINGS


def test_decoder_settings(tmp_path: Path) -> None:
    config = tmp_path / "extraction.toml"
    config.write_text(
        """
[decoder]
layout_mode = true

[decoder.environment]
PDF_SYNC_DECODE = "1"
""",
        encoding="utf-8",
    )

    settings = load_decoder_settings(str(config))

    assert settings.layout_mode is True
    assert settings.environment == (("PDF_SYNC_DECODE", "1"),)


def test_shipped_config_is_valid() -> None:
    shipped = Path(__file__).resolve().parents[1] / "config" / "extraction.toml"

    assert load_extraction_settings(str(shipped)) == DEFAULT_SETTINGS
    assert load_decoder_settings(str(shipped)).environment == ()
