"""Architecture boundary checks: the extraction core stays free of I/O layers."""

from __future__ import annotations

import ast
from pathlib import Path

import pytest

_PACKAGE = Path(__file__).resolve().parents[1] / "invoicelines"
_FORBIDDEN = ("invoicelines.runtime", "invoicelines.application", "invoicelines.cli")


def _imports(path: Path) -> list[str]:
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    result: list[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                result.append(alias.name)
        elif isinstance(node, ast.ImportFrom):
            base = "." * node.level + (node.module or "")
            result.append(base)
    return result


@pytest.mark.parametrize("package", ["domain", "extraction"])
def test_pure_packages_do_not_import_io_layers(package: str) -> None:
    package_dir = _PACKAGE / package
    assert package_dir.exists(), f"Missing package directory: {package_dir}"

    violations: list[str] = []
    for path in sorted(package_dir.rglob("*.py")):
        for mod in _imports(path):
            if any(mod == name or mod.startswith(f"{name}.") for name in _FORBIDDEN):
                violations.append(f"{path}: {mod}")
            if mod.startswith(".."):
                violations.append(f"{path}: relative import {mod} escapes {package}")
    assert not violations, "Pure-zone import violations:\n" + "\n".join(violations)


def test_runtime_does_not_import_application_or_cli() -> None:
    violations: list[str] = []
    for path in sorted((_PACKAGE / "runtime").rglob("*.py")):
        for mod in _imports(path):
            if mod.startswith(("invoicelines.application", "invoicelines.cli")):
                violations.append(f"{path}: {mod}")
    assert not violations, "Runtime import violations:\n" + "\n".join(violations)
