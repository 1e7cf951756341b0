"""Runtime infrastructure for invoicelines.

This package provides process/runtime services including:
- Logging setup via get_logger()
- Path resolution via get_paths(), ProjectPaths
- Settings loading via load_extraction_settings(), load_decoder_settings()
- PDF decoding via decode_pdf_bytes()

Usage:
    from invoicelines.runtime import get_logger, get_paths, load_extraction_settings

    logger = get_logger(__name__)
    settings = load_extraction_settings()
"""

from invoicelines.runtime.logging import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_FORMAT_DEBUG,
    configure_logging,
    get_logger,
    set_log_level,
)
from invoicelines.runtime.paths import ProjectPaths, get_paths, reset_paths
from invoicelines.runtime.pdf_decoder import DecoderSettings, PdfDecodeError, decode_pdf_bytes, scoped_environ
from invoicelines.runtime.extraction_rules import (
    build_extraction_settings,
    load_decoder_settings,
    load_extraction_settings,
)

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_log_level",
    "DEFAULT_LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FORMAT_DEBUG",
    # Settings
    "build_extraction_settings",
    "load_extraction_settings",
    "load_decoder_settings",
    # Decoding
    "DecoderSettings",
    "PdfDecodeError",
    "decode_pdf_bytes",
    "scoped_environ",
    # Paths
    "get_paths",
    "reset_paths",
    "ProjectPaths",
]
