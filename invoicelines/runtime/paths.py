"""Centralized path management for invoicelines.

This module provides a single source of truth for project paths: the
configuration file, the directory of PDFs the server may read by name, and
the export directory used by the CLI.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _get_project_root() -> Path:
    """Determine the project root directory."""
    configured = os.environ.get("INVOICELINES_HOME")
    if configured:
        return Path(configured).expanduser()
    return Path.cwd()


@dataclass
class ProjectPaths:
    """Container for all project-related paths.

    All paths are computed relative to the project root, ensuring consistency
    across all modules regardless of which entry point resolved them.
    """

    root: Path = field(default_factory=_get_project_root)

    def __post_init__(self) -> None:
        # Ensure root is resolved to absolute path
        self.root = self.root.resolve()

    # --- Configuration paths ---
    @property
    def config(self) -> Path:
        """Configuration directory (config/)."""
        return self.root / "config"

    @property
    def extraction_rules(self) -> Path:
        """Extraction settings TOML file."""
        return self.config / "extraction.toml"

    # --- Document paths ---
    @property
    def pdfs(self) -> Path:
        """Invoice PDFs addressable by relative path through the server."""
        return self.root / "pdfs"

    @property
    def exports(self) -> Path:
        """Destination of `extract --export`: <stem>.csv and <stem>.json."""
        return self.root / "exports"


# Module-level singleton
_paths: ProjectPaths | None = None


def get_paths() -> ProjectPaths:
    """Get the singleton ProjectPaths instance.

    Returns:
        The global ProjectPaths instance.
    """
    global _paths
    if _paths is None:
        _paths = ProjectPaths()
    return _paths


def reset_paths() -> None:
    """Forget the cached ProjectPaths so the next lookup re-reads the environment."""
    global _paths
    _paths = None
