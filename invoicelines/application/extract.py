"""Invoice extraction workflow orchestration."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from invoicelines.domain.invoice import LineItem, Section
from invoicelines.extraction import extract_invoice, items_to_csv, items_to_json
from invoicelines.runtime import get_logger, load_decoder_settings, load_extraction_settings
from invoicelines.runtime.extraction_client import ExtractionServiceUnavailable, call_extraction_service
from invoicelines.runtime.pdf_decoder import PdfDecodeError, decode_pdf_bytes

logger = get_logger(__name__)

ExtractStatus = Literal[
    "file_not_found",
    "decode_failed",
    "service_unavailable",
    "extracted",
]

TEXT_SUFFIXES = {".txt", ".text"}

# Hint shown when nothing was recovered: long lines opening with a code
CANDIDATE_LINE_PATTERN = re.compile(r"^\d{3,}")
CANDIDATE_LINE_MIN_LENGTH = 20
MAX_CANDIDATE_LINES = 5


@dataclass(frozen=True)
class InvoiceExtractRequest:
    """Inputs for running the extraction workflow on one file."""

    path: Path
    include_sections: bool = False
    csv_path: Path | None = None
    json_path: Path | None = None
    text_input: bool = False  # Treat the file as already-decoded text
    remote_url: str | None = None
    config_path: str | None = None


@dataclass(frozen=True)
class InvoiceExtractResult:
    """Outcome from the extraction workflow."""

    status: ExtractStatus
    items: list[LineItem] = field(default_factory=list)
    sections: list[Section] | None = None
    text: str = ""
    candidate_lines: list[str] = field(default_factory=list)
    exported: list[Path] = field(default_factory=list)
    error: str | None = None


def find_candidate_lines(text: str, limit: int = MAX_CANDIDATE_LINES) -> list[str]:
    """Return lines that look like unparsed product rows, for troubleshooting."""
    candidates: list[str] = []
    for line in text.split("\n"):
        stripped = line.strip()
        if CANDIDATE_LINE_PATTERN.match(stripped) and len(stripped) > CANDIDATE_LINE_MIN_LENGTH:
            candidates.append(stripped)
            if len(candidates) >= limit:
                break
    return candidates


def _write_exports(request: InvoiceExtractRequest, items: list[LineItem]) -> list[Path]:
    exported: list[Path] = []
    if request.csv_path is not None:
        request.csv_path.parent.mkdir(parents=True, exist_ok=True)
        request.csv_path.write_text(items_to_csv(items), encoding="utf-8")
        exported.append(request.csv_path)
    if request.json_path is not None:
        request.json_path.parent.mkdir(parents=True, exist_ok=True)
        request.json_path.write_text(items_to_json(items), encoding="utf-8")
        exported.append(request.json_path)
    for path in exported:
        logger.info("Exported %d items to %s", len(items), path)
    return exported


def run_invoice_extraction(request: InvoiceExtractRequest) -> InvoiceExtractResult:
    """Run extraction flow: decode (or read text / call server) -> extract -> export."""
    if not request.path.exists():
        return InvoiceExtractResult(
            status="file_not_found",
            error=f"File not found: {request.path}",
        )

    if request.remote_url:
        try:
            items, sections = call_extraction_service(
                request.path,
                request.remote_url,
                include_sections=request.include_sections,
            )
        except ExtractionServiceUnavailable as exc:
            return InvoiceExtractResult(status="service_unavailable", error=str(exc))
        return InvoiceExtractResult(
            status="extracted",
            items=items,
            sections=sections,
            exported=_write_exports(request, items),
        )

    if request.text_input or request.path.suffix.lower() in TEXT_SUFFIXES:
        raw_text = request.path.read_text(encoding="utf-8")
    else:
        try:
            raw_text = decode_pdf_bytes(request.path.read_bytes(), load_decoder_settings(request.config_path))
        except PdfDecodeError as exc:
            return InvoiceExtractResult(status="decode_failed", error=str(exc))

    result = extract_invoice(
        raw_text,
        load_extraction_settings(request.config_path),
        include_sections=request.include_sections,
    )
    logger.info("Extracted %d items from %s", len(result.items), request.path.name)

    return InvoiceExtractResult(
        status="extracted",
        items=result.items,
        sections=result.sections,
        text=result.text,
        candidate_lines=[] if result.items else find_candidate_lines(result.text),
        exported=_write_exports(request, result.items),
    )
