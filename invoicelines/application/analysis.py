"""Column-header survey across a directory of invoice PDFs.

Used to discover new header spellings and row layouts before extending the
extraction patterns.
"""

from __future__ import annotations

import json
import re
from collections import Counter
from dataclasses import asdict, dataclass, field
from pathlib import Path

from invoicelines.runtime import get_logger, load_decoder_settings
from invoicelines.runtime.pdf_decoder import PdfDecodeError, decode_pdf_bytes

logger = get_logger(__name__)

HEADER_KEYWORDS = ("QUANT", "QTD", "VLR", "VALOR", "UNIT", "TOTAL")
# A header line must name at least one of these columns
HEADER_COLUMN_KEYWORDS = ("UNIT", "TOTAL", "QUANT", "QTD")

PRODUCT_WINDOW = 50  # Lines after the header searched for product rows
MAX_PRODUCT_LINES = 5
MAX_SAMPLE_LINES = 10
MIN_PRODUCT_LINE_LENGTH = 10


@dataclass
class PatternAnalysis:
    """What one document's text looks like around its item table."""

    file_name: str
    headers: list[str] = field(default_factory=list)
    product_lines: list[str] = field(default_factory=list)
    sample_lines: list[str] = field(default_factory=list)
    total_lines: int = 0


@dataclass(frozen=True)
class PatternAnalysisRequest:
    """Inputs for the header survey."""

    directory: Path
    output_path: Path | None = None


@dataclass(frozen=True)
class PatternAnalysisResult:
    """Outcome of the header survey."""

    analyses: list[PatternAnalysis]
    header_patterns: list[tuple[str, int]]
    failures: dict[str, str] = field(default_factory=dict)
    total_files: int = 0
    output_path: Path | None = None


def _is_column_header(upper_line: str) -> bool:
    return any(keyword in upper_line for keyword in HEADER_KEYWORDS) and any(
        keyword in upper_line for keyword in HEADER_COLUMN_KEYWORDS
    )


def _looks_like_product_line(line: str) -> bool:
    if len(line) <= MIN_PRODUCT_LINE_LENGTH:
        return False
    return re.search(r"\d+[.,]\d{2}", line) is not None or re.search(r"\d{8}", line) is not None


def analyze_text(file_name: str, text: str) -> PatternAnalysis:
    """
    Find the first column-header line and the product-looking rows after it.

    Only the first header counts; rows are collected from the following
    PRODUCT_WINDOW lines.
    """
    lines = [line.strip() for line in text.split("\n") if line.strip()]
    analysis = PatternAnalysis(file_name=file_name, total_lines=len(lines))
    analysis.sample_lines = lines[:MAX_SAMPLE_LINES]

    header_index: int | None = None
    for index, line in enumerate(lines):
        if _is_column_header(line.upper()):
            analysis.headers.append(line)
            header_index = index
            break

    if header_index is None:
        return analysis

    for line in lines[header_index + 1 : header_index + PRODUCT_WINDOW]:
        if _looks_like_product_line(line):
            analysis.product_lines.append(line)
            if len(analysis.product_lines) >= MAX_PRODUCT_LINES:
                break
    return analysis


def rank_header_patterns(analyses: list[PatternAnalysis]) -> list[tuple[str, int]]:
    """Count normalized header spellings across documents, most frequent first."""
    counts: Counter[str] = Counter()
    for analysis in analyses:
        for header in set(analysis.headers):
            counts[re.sub(r"\s+", " ", header.upper()).strip()] += 1
    return counts.most_common()


def run_pattern_analysis(request: PatternAnalysisRequest) -> PatternAnalysisResult:
    """Decode every PDF in the directory, survey headers, optionally save the report."""
    files = sorted(path for path in request.directory.glob("*.pdf") if path.is_file())
    logger.info("Found %d PDF files to analyze in %s", len(files), request.directory)

    decoder_settings = load_decoder_settings()
    analyses: list[PatternAnalysis] = []
    failures: dict[str, str] = {}
    for path in files:
        try:
            text = decode_pdf_bytes(path.read_bytes(), decoder_settings)
        except PdfDecodeError as exc:
            logger.warning("Skipping %s: %s", path.name, exc)
            failures[path.name] = str(exc)
            continue
        analyses.append(analyze_text(path.name, text))

    header_patterns = rank_header_patterns(analyses)

    if request.output_path is not None:
        report = {
            "totalFiles": len(files),
            "analyzedFiles": len(analyses),
            "headerPatterns": [{"header": header, "count": count} for header, count in header_patterns],
            "analyses": [asdict(analysis) for analysis in analyses],
            "failures": failures,
        }
        request.output_path.parent.mkdir(parents=True, exist_ok=True)
        request.output_path.write_text(json.dumps(report, indent=2, ensure_ascii=False), encoding="utf-8")
        logger.info("Saved header analysis to %s", request.output_path)

    return PatternAnalysisResult(
        analyses=analyses,
        header_patterns=header_patterns,
        failures=failures,
        total_files=len(files),
        output_path=request.output_path,
    )
