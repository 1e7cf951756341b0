"""FastAPI server extracting line items from uploaded invoice PDFs."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from invoicelines.extraction import extract_invoice
from invoicelines.runtime import get_logger, get_paths, load_decoder_settings, load_extraction_settings
from invoicelines.runtime.pdf_decoder import PdfDecodeError, decode_pdf_bytes

logger = get_logger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _error(error: str, message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": error, "message": message}, status_code=status_code)


def _flag(value: Any) -> bool:
    return isinstance(value, str) and value.strip().lower() in _TRUE_VALUES


def _resolve_server_path(raw_path: str) -> Path | None:
    """Resolve a client-supplied path inside the PDF directory; None if it escapes it."""
    base = get_paths().pdfs.resolve()
    candidate = (base / raw_path).resolve()
    if not candidate.is_relative_to(base):
        return None
    return candidate


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create the PDF directory on startup."""
    get_paths().pdfs.mkdir(parents=True, exist_ok=True)
    yield


app = FastAPI(title="Invoice Line Items", lifespan=lifespan)


@app.post("/extract")
@app.post("/api/extract-products")
async def extract_products(request: Request) -> JSONResponse:
    """Decode an uploaded (or server-side) PDF and return its line items."""
    form = await request.form()

    upload = None
    for key, value in form.items():
        logger.debug(f"Form field: key={repr(key)}, type={type(value)}")
        if hasattr(value, "read"):
            upload = value
            break
    file_path = form.get("file_path") or form.get("filePath")

    if upload is not None:
        contents = await upload.read()
        source = getattr(upload, "filename", None) or "upload"
    elif isinstance(file_path, str) and file_path:
        resolved = _resolve_server_path(file_path)
        if resolved is None or not resolved.is_file():
            return _error("File not found", f"No such file: {file_path}", 404)
        contents = resolved.read_bytes()
        source = resolved.name
    else:
        return _error("No file provided", "Send a 'file' upload or a 'file_path' field", 400)

    try:
        text = await run_in_threadpool(decode_pdf_bytes, contents, load_decoder_settings())
    except PdfDecodeError as e:
        logger.error(f"Failed to decode {source}: {e}")
        return _error("PDF processing failed", str(e), 500)

    include_sections = _flag(form.get("sections"))
    result = extract_invoice(text, load_extraction_settings(), include_sections=include_sections)
    logger.info(f"Extracted {len(result.items)} items from {source}")

    payload: dict[str, Any] = {
        "success": True,
        "items": [item.to_dict() for item in result.items],
    }
    if include_sections and result.sections is not None:
        payload["sections"] = [section.to_dict() for section in result.sections]
    if _flag(form.get("include_text")):
        payload["text"] = text
    return JSONResponse(payload)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
