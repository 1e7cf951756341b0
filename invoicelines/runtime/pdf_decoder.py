"""Decode invoice PDFs to plain text.

pypdf is the primary backend; pdfminer.six is tried when pypdf cannot read
the file. Only total failure of both is an error: a PDF without a text layer
decodes to an empty string, which the extraction pipeline treats as a valid
document with no items.
"""

from __future__ import annotations

import io
import os
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from invoicelines.runtime.logging import get_logger

logger = get_logger(__name__)

# Environment variables are process-wide; only one decode may hold overrides at a time.
_ENVIRON_LOCK = threading.Lock()


class PdfDecodeError(RuntimeError):
    """Raised when no backend can obtain any text from the PDF."""


@dataclass(frozen=True)
class DecoderSettings:
    """Decoder options loaded from the [decoder] config table."""

    layout_mode: bool = False  # pypdf layout mode keeps column spacing
    environment: tuple[tuple[str, str], ...] = ()  # Set only for the duration of a decode


@contextmanager
def scoped_environ(overrides: tuple[tuple[str, str], ...]) -> Iterator[None]:
    """
    Set environment variables for the duration of the block.

    Previous values are restored on every exit path, including exceptions,
    and variables that did not exist before are removed again.
    """
    if not overrides:
        yield
        return

    with _ENVIRON_LOCK:
        previous = {name: os.environ.get(name) for name, _ in overrides}
        try:
            for name, value in overrides:
                os.environ[name] = value
            yield
        finally:
            for name, old_value in previous.items():
                if old_value is None:
                    os.environ.pop(name, None)
                else:
                    os.environ[name] = old_value


def _decode_with_pypdf(data: bytes, layout_mode: bool) -> str:
    from pypdf import PdfReader

    reader = PdfReader(io.BytesIO(data))
    pages: list[str] = []
    for page in reader.pages:
        if layout_mode:
            text = page.extract_text(extraction_mode="layout")
        else:
            text = page.extract_text()
        pages.append(text or "")
    return "\n".join(pages)


def _decode_with_pdfminer(data: bytes) -> str:
    from pdfminer.high_level import extract_text

    # pdfminer separates pages with form feeds
    return extract_text(io.BytesIO(data)).replace("\f", "\n")


def decode_pdf_bytes(data: bytes, settings: DecoderSettings | None = None) -> str:
    """
    Return the text of every page, in order, joined by line breaks.

    Raises:
        PdfDecodeError: both backends failed.
    """
    if settings is None:
        settings = DecoderSettings()

    with scoped_environ(settings.environment):
        try:
            text = _decode_with_pypdf(data, settings.layout_mode)
            logger.info("Decoded PDF with pypdf: %d characters", len(text))
            return text
        except Exception as primary_error:
            logger.warning("pypdf failed (%s); trying pdfminer.six", primary_error)
            try:
                text = _decode_with_pdfminer(data)
            except Exception as fallback_error:
                logger.error("pdfminer.six failed as well: %s", fallback_error)
                raise PdfDecodeError(
                    f"Failed to decode PDF: {primary_error}. Fallback also failed: {fallback_error}"
                ) from fallback_error
            logger.info("Decoded PDF with pdfminer.six: %d characters", len(text))
            return text
