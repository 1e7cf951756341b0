"""Client for a running extraction server (non-HTTP callers)."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any

import httpx

from invoicelines.domain.invoice import LineItem, Section
from invoicelines.runtime.logging import get_logger

logger = get_logger(__name__)


class ExtractionServiceUnavailable(RuntimeError):
    """Raised when the extraction server cannot be reached or returns an error."""


def _item_from_wire(data: dict[str, Any]) -> LineItem:
    return LineItem(
        description=str(data.get("description", "")),
        unit=str(data.get("unit", "")),
        unit_price=str(data.get("unitPrice", "")),
        total_price=str(data.get("totalPrice", "")),
    )


def call_extraction_service(
    pdf_path: Path,
    service_url: str,
    *,
    include_sections: bool = False,
) -> tuple[list[LineItem], list[Section] | None]:
    """
    Upload a PDF to the extraction server and return its items.

    Returns:
        Tuple of (items, sections); sections is None unless requested.
    """
    service_url = service_url.rstrip("/")
    logger.info("Sending %s to extraction service at %s...", pdf_path.name, service_url)

    try:
        start_time = time.time()
        response = httpx.post(
            f"{service_url}/extract",
            files={"file": (pdf_path.name, pdf_path.read_bytes(), "application/pdf")},
            data={"sections": "true" if include_sections else "false"},
            timeout=60.0,
        )
        elapsed_time = time.time() - start_time
        logger.info("Extraction service returned in %.2f seconds", elapsed_time)
    except httpx.RequestError as e:
        logger.error("Failed to connect to extraction service: %s", e)
        raise ExtractionServiceUnavailable(f"Failed to connect to extraction service: {e}") from e

    if response.status_code != 200:
        try:
            message = response.json().get("message", "")
        except ValueError:
            message = ""
        logger.error("Extraction service error: %s %s", response.status_code, message)
        raise ExtractionServiceUnavailable(f"Extraction service error: {response.status_code} {message}".strip())

    payload = response.json()
    items = [_item_from_wire(entry) for entry in payload.get("items", [])]
    sections = None
    if "sections" in payload:
        sections = [
            Section(name=str(entry.get("name", "")), lines=tuple(entry.get("lines", [])))
            for entry in payload["sections"]
        ]
    return items, sections
