"""Runtime loader for extraction and decoder settings."""

from __future__ import annotations

import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from invoicelines.extraction.common import (
    CURRENCY_SYMBOL,
    END_SECTION_PATTERNS,
    MIN_DESCRIPTION_LENGTH,
    MIN_UNIT_LENGTH,
    PRODUCT_SECTION_PATTERNS,
    TABLE_HEADER_PATTERNS,
    ExtractionSettings,
)
from invoicelines.runtime.logging import get_logger
from invoicelines.runtime.paths import get_paths
from invoicelines.runtime.pdf_decoder import DecoderSettings

logger = get_logger(__name__)


def _load_toml(path: Path) -> dict[str, Any]:
    """Load TOML file and return parsed dict; missing files map to empty dict."""
    if not path.exists():
        logger.debug("Config file not found: %s", path)
        return {}

    with open(path, "rb") as f:
        data = tomllib.load(f)
    return data if isinstance(data, dict) else {}


def _resolve(config_path: str | None) -> Path:
    return Path(config_path) if config_path is not None else get_paths().extraction_rules


def _string_tuple(values: Any) -> tuple[str, ...]:
    if not isinstance(values, list):
        return ()
    return tuple(str(value) for value in values if str(value))


def _end_pattern_tuple(values: Any) -> tuple[tuple[str, str], ...]:
    """Accept either bare pattern strings or {name, pattern} tables."""
    if not isinstance(values, list):
        return ()
    entries: list[tuple[str, str]] = []
    for value in values:
        if isinstance(value, dict):
            pattern = str(value.get("pattern", ""))
            name = str(value.get("name", "trailer"))
        else:
            pattern = str(value)
            name = "trailer"
        if pattern:
            entries.append((name, pattern))
    return tuple(entries)


def build_extraction_settings(config: dict[str, Any]) -> ExtractionSettings:
    """Build in-memory settings from a parsed config; configured patterns take priority."""
    guards = config.get("guards", {})
    currency = config.get("currency", {})
    sections = config.get("sections", {})

    return ExtractionSettings(
        min_description_length=int(guards.get("min_description_length", MIN_DESCRIPTION_LENGTH)),
        min_unit_length=int(guards.get("min_unit_length", MIN_UNIT_LENGTH)),
        currency_symbol=str(currency.get("symbol", CURRENCY_SYMBOL)),
        start_patterns=_string_tuple(sections.get("start_patterns")) + PRODUCT_SECTION_PATTERNS,
        header_patterns=_string_tuple(sections.get("header_patterns")) + TABLE_HEADER_PATTERNS,
        end_patterns=_end_pattern_tuple(sections.get("end_patterns")) + END_SECTION_PATTERNS,
        extra_header_keywords=_string_tuple(sections.get("header_keywords")),
    )


@lru_cache(maxsize=4)
def load_extraction_settings(config_path: str | None = None) -> ExtractionSettings:
    """
    Load extraction settings from extraction.toml.

    Args:
        config_path: Optional TOML path override. If None, uses default project path.

    Returns:
        ExtractionSettings; built-in defaults when the file is missing.
    """
    path = _resolve(config_path)
    settings = build_extraction_settings(_load_toml(path))
    logger.debug(
        "Loaded extraction settings from %s (min description > %d, min unit >= %d)",
        path,
        settings.min_description_length,
        settings.min_unit_length,
    )
    return settings


@lru_cache(maxsize=4)
def load_decoder_settings(config_path: str | None = None) -> DecoderSettings:
    """Load the [decoder] table of extraction.toml."""
    decoder = _load_toml(_resolve(config_path)).get("decoder", {})
    environment = decoder.get("environment", {})
    if not isinstance(environment, dict):
        environment = {}
    return DecoderSettings(
        layout_mode=bool(decoder.get("layout_mode", False)),
        environment=tuple((str(key), str(value)) for key, value in environment.items()),
    )
