"""Unified command-line interface for invoicelines.

Usage:
    invoicelines extract <invoice.pdf> [--sections] [--csv PATH] [--json PATH]
    invoicelines extract <invoice.txt> --text-input
    invoicelines extract <invoice.pdf> --remote http://localhost:8000
    invoicelines analyze [directory] [--output PATH]
    invoicelines serve [--host] [--port]
"""
