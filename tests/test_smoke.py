"""Public smoke tests for basic module wiring.

Keep these minimal and free of any real-world data.
"""

from __future__ import annotations


def test_imports() -> None:
    import invoicelines
    import invoicelines.application
    import invoicelines.cli.main
    import invoicelines.domain
    import invoicelines.extraction
    import invoicelines.runtime
    import invoicelines.runtime.invoice_server

    assert invoicelines is not None
    assert invoicelines.application is not None
    assert invoicelines.cli.main is not None
    assert invoicelines.domain is not None
    assert invoicelines.extraction is not None
    assert invoicelines.runtime is not None
    assert invoicelines.runtime.invoice_server is not None
