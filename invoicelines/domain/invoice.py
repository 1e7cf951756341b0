"""Data models for invoice line-item extraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class LineItem:
    """A single product/service row recovered from an invoice."""

    description: str
    unit: str
    unit_price: str  # Currency-formatted, e.g. "R$ 250,00"
    total_price: str

    def to_dict(self) -> dict[str, str]:
        """Wire representation used by the HTTP API and JSON export."""
        return {
            "description": self.description,
            "unit": self.unit,
            "unitPrice": self.unit_price,
            "totalPrice": self.total_price,
        }


@dataclass
class LogicalLine:
    """One table row rebuilt from one or more physical lines."""

    parts: list[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return " ".join(self.parts)

    def append(self, continuation: str) -> None:
        self.parts.append(continuation)


@dataclass(frozen=True)
class Section:
    """Named contiguous region of the source document."""

    name: str
    lines: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "lines": list(self.lines)}


@dataclass(frozen=True)
class ExtractionResult:
    """Outcome of one extraction call."""

    items: list[LineItem] = field(default_factory=list)
    sections: list[Section] | None = None
    text: str = ""  # Normalized document text for reference
    logical_line_count: int = 0
