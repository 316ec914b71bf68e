from __future__ import annotations

import logging
from dataclasses import dataclass

from ..errors import InputShapeError
from ..models import TabularDataset
from .quality import DatasetQuality, assess_quality
from .report import Report, build_report
from .stats import ColumnKind, ColumnProfile, profile_column

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProfileResult:
    """Result of profiling one dataset."""

    report: Report
    column_count: int
    row_count: int
    columns: tuple[ColumnProfile, ...]
    quality: DatasetQuality

    def column(self, name: str) -> ColumnProfile:
        for c in self.columns:
            if c.name == name:
                return c
        raise KeyError(name)

    def kinds(self) -> dict[str, ColumnKind]:
        return {c.name: c.kind for c in self.columns}


def profile_dataset(dataset: TabularDataset) -> ProfileResult:
    """Profile a dataset and build its text report.

    Pure given the input: every call recomputes from the cells and nothing is
    cached or persisted. Raises InputShapeError for a dataset without
    columns; a dataset without rows is profiled as all-empty columns.
    """

    if dataset.column_count == 0:
        raise InputShapeError("dataset has no columns; at least one column is required to profile")

    columns = tuple(
        profile_column(name, dataset.column_values(i)) for i, name in enumerate(dataset.columns)
    )
    quality = assess_quality(dataset)
    report = build_report(columns, quality)

    LOGGER.debug(
        "profiled %d rows x %d columns (numeric=%d, categorical=%d, empty=%d, duplicates=%d)",
        dataset.row_count,
        dataset.column_count,
        sum(1 for c in columns if c.kind is ColumnKind.NUMERIC),
        sum(1 for c in columns if c.kind is ColumnKind.CATEGORICAL),
        sum(1 for c in columns if c.kind is ColumnKind.EMPTY),
        quality.duplicate_rows,
    )

    return ProfileResult(
        report=report,
        column_count=dataset.column_count,
        row_count=dataset.row_count,
        columns=columns,
        quality=quality,
    )
