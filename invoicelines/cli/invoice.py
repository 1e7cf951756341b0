"""Invoice command handlers used by the unified CLI."""

import argparse
import sys
from pathlib import Path

from invoicelines.runtime import get_logger, get_paths

logger = get_logger(__name__)

TEXT_PREVIEW_CHARS = 500


def _export_paths(args: argparse.Namespace) -> tuple[Path | None, Path | None]:
    """Explicit --csv/--json paths win; --export fills the gaps under exports/."""
    csv_path = Path(args.csv_path) if args.csv_path else None
    json_path = Path(args.json_path) if args.json_path else None
    if args.export:
        stem = Path(args.file).stem
        exports = get_paths().exports
        csv_path = csv_path or exports / f"{stem}.csv"
        json_path = json_path or exports / f"{stem}.json"
    return csv_path, json_path


def cmd_extract(args: argparse.Namespace) -> None:
    """Extract line items from one invoice and print them."""
    from invoicelines.application.extract import InvoiceExtractRequest, run_invoice_extraction

    csv_path, json_path = _export_paths(args)
    result = run_invoice_extraction(
        InvoiceExtractRequest(
            path=Path(args.file),
            include_sections=args.sections,
            csv_path=csv_path,
            json_path=json_path,
            text_input=args.text_input,
            remote_url=args.remote,
            config_path=args.config,
        )
    )

    if result.status == "file_not_found":
        logger.error("%s", result.error)
        print(f"Error: {result.error}")
        sys.exit(1)

    if result.status == "decode_failed":
        logger.error("%s", result.error)
        print(f"Error processing PDF: {result.error}")
        sys.exit(1)

    if result.status == "service_unavailable":
        logger.error("%s", result.error)
        print(f"Extraction server unavailable: {result.error}")
        sys.exit(1)

    if result.sections:
        print("=" * 60)
        print("SECTIONS")
        print("=" * 60)
        for section in result.sections:
            print(f"[{section.name}] {len(section.lines)} lines")
            for line in section.lines:
                print(f"  {line}")
        print()

    if not result.items:
        print("No line items found.")
        if result.text:
            print(f"\nExtracted text (first {TEXT_PREVIEW_CHARS} characters):")
            print(result.text[:TEXT_PREVIEW_CHARS])
        if result.candidate_lines:
            print("\nLines that may hold products:")
            for i, line in enumerate(result.candidate_lines, 1):
                print(f"  {i}. {line[:100]}")
        return

    print(f"{len(result.items)} line item(s):\n")
    for i, item in enumerate(result.items, 1):
        print(f"{i}. {item.description}")
        print(f"   UN: {item.unit} | V.UNIT.: {item.unit_price} | V.TOTAL: {item.total_price}")

    for path in result.exported:
        print(f"\nExported to: {path}")


def cmd_analyze(args: argparse.Namespace) -> None:
    """Survey column headers across a directory of invoice PDFs."""
    from invoicelines.application.analysis import PatternAnalysisRequest, run_pattern_analysis

    directory = Path(args.directory) if args.directory else get_paths().pdfs
    if not directory.is_dir():
        print(f"Error: directory not found: {directory}")
        sys.exit(1)

    result = run_pattern_analysis(
        PatternAnalysisRequest(
            directory=directory,
            output_path=Path(args.output) if args.output else None,
        )
    )

    print(f"Analyzed {len(result.analyses)} of {result.total_files} PDF files\n")
    print("=== HEADER PATTERNS ===\n")
    for header, count in result.header_patterns:
        print(f"[{count}x] {header}")

    print("\n=== DETAILS ===")
    for analysis in result.analyses:
        if not analysis.headers:
            continue
        print(f"\n{analysis.file_name}")
        print(f"   Headers: {' | '.join(analysis.headers)}")
        if analysis.product_lines:
            print(f"   Sample product line: {analysis.product_lines[0][:100]}")

    for name, error in result.failures.items():
        print(f"\nSkipped {name}: {error}")

    if result.output_path is not None:
        print(f"\nReport saved to: {result.output_path}")


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the FastAPI server for invoice uploads."""
    import uvicorn

    from invoicelines.runtime import invoice_server as server

    print(f"Starting extraction server on {args.host}:{args.port}")
    print(f"Upload endpoints: http://{args.host}:{args.port}/extract | /api/extract-products")
    print("Press Ctrl+C to stop")

    uvicorn.run(server.app, host=args.host, port=args.port)
