#!/usr/bin/env python3

import argparse
from collections.abc import Callable, Sequence


def _coerce_exit_code(code: object) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    return 1


def _run_command(command: Callable[[argparse.Namespace], None], args: argparse.Namespace) -> int:
    """
    Run a command handler that signals failure with sys.exit().

    This keeps process termination centralized in this module's entrypoint.
    """
    try:
        command(args)
    except SystemExit as exc:
        return _coerce_exit_code(exc.code)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Invoice line-item extraction CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  extract <file>             Extract line items from an invoice PDF (or text file)
  analyze [directory]        Survey column headers across a directory of PDFs
  serve [--host] [--port]    Start the extraction HTTP server

Notes:
  config/extraction.toml     = guard thresholds and extra section markers
  pdfs/                      = default directory for analyze and server file paths
  exports/                   = where extract --export writes CSV and JSON
""",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # extract command
    extract_parser = subparsers.add_parser("extract", help="Extract line items from an invoice")
    extract_parser.add_argument("file", help="Path to invoice PDF or extracted text")
    extract_parser.add_argument("--sections", action="store_true", help="Also print the document sections")
    extract_parser.add_argument("--csv", dest="csv_path", default=None, help="Write items as CSV to this path")
    extract_parser.add_argument("--json", dest="json_path", default=None, help="Write items as JSON to this path")
    extract_parser.add_argument(
        "--export",
        action="store_true",
        help="Write <name>.csv and <name>.json into exports/ unless --csv/--json say otherwise",
    )
    extract_parser.add_argument(
        "--text-input", action="store_true", help="Treat the file as already-extracted text, not a PDF"
    )
    extract_parser.add_argument(
        "--remote", default=None, help="Send the PDF to a running extraction server at this URL instead"
    )
    extract_parser.add_argument("--config", default=None, help="Path to extraction.toml")

    # analyze command
    analyze_parser = subparsers.add_parser("analyze", help="Survey column headers across PDFs")
    analyze_parser.add_argument("directory", nargs="?", default=None, help="Directory of PDFs (default: pdfs/)")
    analyze_parser.add_argument("--output", default=None, help="Write the JSON report to this path")

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Start extraction server")
    serve_parser.add_argument("--host", default="0.0.0.0", help="Host to bind to (default: 0.0.0.0)")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to bind to (default: 8000)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "extract":
        from invoicelines.cli.invoice import cmd_extract

        return _run_command(cmd_extract, args)
    elif args.command == "analyze":
        from invoicelines.cli.invoice import cmd_analyze

        return _run_command(cmd_analyze, args)
    elif args.command == "serve":
        from invoicelines.cli.invoice import cmd_serve

        return _run_command(cmd_serve, args)

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
