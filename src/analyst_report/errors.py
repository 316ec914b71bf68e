from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


class AnalystReportError(Exception):
    """Base exception for profiling, loading and query failures."""


class InputShapeError(AnalystReportError, ValueError):
    """Raised when a dataset cannot be profiled because of its shape."""


class QueryError(AnalystReportError, ValueError):
    """Raised when a table query names an unsupported operation."""


@dataclass
class DatasetLoadError(AnalystReportError):
    """Raised when a source file cannot be turned into a dataset."""

    path: Path
    detail: str

    def __str__(self) -> str:
        return f"failed to load '{self.path}': {self.detail}"
