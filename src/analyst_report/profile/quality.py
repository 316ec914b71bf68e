from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from ..models import TabularDataset
from .cells import is_empty


@dataclass(frozen=True)
class DatasetQuality:
    total_cells: int
    empty_cells: int
    duplicate_rows: int
    row_count: int

    @property
    def populated_cells(self) -> int:
        return self.total_cells - self.empty_cells

    @property
    def completeness(self) -> float:
        """Percent of populated cells; 100 for a table without cells."""

        if self.total_cells == 0:
            return 100.0
        return 100.0 * self.populated_cells / self.total_cells

    @property
    def duplicate_percent(self) -> float:
        return 100.0 * self.duplicate_rows / self.row_count if self.row_count else 0.0

    @property
    def label(self) -> str:
        c = self.completeness
        if c >= 95:
            return "excellent"
        if c >= 80:
            return "good"
        if c >= 60:
            return "moderate"
        return "poor"


def count_empty_cells(dataset: TabularDataset) -> int:
    return sum(1 for row in dataset.rows for cell in row if is_empty(cell))


def count_duplicate_rows(dataset: TabularDataset) -> int:
    """Rows equal, cell for cell as strings, to an earlier row."""

    if dataset.row_count == 0:
        return 0
    frame = pd.DataFrame(list(dataset.rows), columns=list(dataset.columns), dtype=str)
    return int(frame.duplicated(keep="first").sum())


def assess_quality(dataset: TabularDataset) -> DatasetQuality:
    return DatasetQuality(
        total_cells=dataset.row_count * dataset.column_count,
        empty_cells=count_empty_cells(dataset),
        duplicate_rows=count_duplicate_rows(dataset),
        row_count=dataset.row_count,
    )
