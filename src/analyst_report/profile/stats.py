from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

import pandas as pd

from .cells import Numeric, classify_cell, non_empty


# Added to denominators that may be exactly zero.
EPSILON = 1e-4

NUMERIC_MAJORITY = 0.5
OUTLIER_FENCE = 1.5
SKEW_TOLERANCE = 0.1
TOP_VALUES = 5
SEVERE_IMBALANCE = 0.9
MODERATE_IMBALANCE = 0.5
FEATURE_CARDINALITY_RATIO = 0.5


class ColumnKind(str, Enum):
    NUMERIC = "numeric"
    CATEGORICAL = "categorical"
    EMPTY = "empty"


class Skew(str, Enum):
    SYMMETRIC = "symmetric"
    RIGHT = "right-skewed"
    LEFT = "left-skewed"


class Imbalance(str, Enum):
    BALANCED = "balanced"
    MODERATE = "moderate"
    SEVERE = "severe"


@dataclass(frozen=True)
class NumericSummary:
    """Descriptive statistics over the parseable cells of a column.

    Quartiles use the truncating index floor(n * p) into the sorted values
    (no interpolation). `std` is the population standard deviation.
    """

    count: int
    mean: float
    median: float
    std: float
    min: float
    max: float
    q1: float
    q3: float
    outliers: tuple[float, ...]
    skew: Skew
    skew_score: float

    @property
    def range(self) -> float:
        return self.max - self.min

    @property
    def iqr(self) -> float:
        return self.q3 - self.q1

    @property
    def lower_fence(self) -> float:
        return self.q1 - OUTLIER_FENCE * self.iqr

    @property
    def upper_fence(self) -> float:
        return self.q3 + OUTLIER_FENCE * self.iqr

    @property
    def outlier_percent(self) -> float:
        return 100.0 * len(self.outliers) / self.count if self.count else 0.0

    @property
    def variability(self) -> str:
        cv = self.std / (abs(self.mean) + EPSILON)
        if cv > 0.5:
            return "high"
        if cv > 0.2:
            return "moderate"
        return "low"


@dataclass(frozen=True)
class CategoricalSummary:
    frequencies: tuple[tuple[str, int], ...]
    total: int
    is_identifier: bool

    @property
    def cardinality(self) -> int:
        return len(self.frequencies)

    @property
    def cardinality_ratio(self) -> float:
        return self.cardinality / self.total if self.total else 0.0

    @property
    def top_values(self) -> tuple[tuple[str, int], ...]:
        # sorted() is stable, so ties keep first-encountered order.
        ranked = sorted(self.frequencies, key=lambda kv: -kv[1])
        return tuple(ranked[:TOP_VALUES])

    @property
    def dominant_share(self) -> float:
        top = self.top_values
        return top[0][1] / self.total if top and self.total else 0.0

    @property
    def imbalance(self) -> Imbalance:
        share = self.dominant_share
        if share > SEVERE_IMBALANCE:
            return Imbalance.SEVERE
        if share > MODERATE_IMBALANCE:
            return Imbalance.MODERATE
        return Imbalance.BALANCED

    def frequency(self) -> dict[str, int]:
        return dict(self.frequencies)


@dataclass(frozen=True)
class ColumnProfile:
    name: str
    kind: ColumnKind
    row_count: int
    non_empty_count: int
    cardinality: int
    missing_count: int
    numeric: Optional[NumericSummary] = None
    categorical: Optional[CategoricalSummary] = None

    @property
    def missing_percent(self) -> float:
        return 100.0 * self.missing_count / self.row_count if self.row_count else 0.0

    @property
    def is_feature_categorical(self) -> bool:
        """Categorical with a cardinality low enough to encode as a feature."""

        if self.kind is not ColumnKind.CATEGORICAL:
            return False
        return 1 < self.cardinality < self.non_empty_count * FEATURE_CARDINALITY_RATIO

    @property
    def is_identifier(self) -> bool:
        return self.categorical is not None and self.categorical.is_identifier

    @property
    def is_skewed(self) -> bool:
        return self.numeric is not None and self.numeric.skew is not Skew.SYMMETRIC

    @property
    def has_outliers(self) -> bool:
        return self.numeric is not None and bool(self.numeric.outliers)


def classify_skew(mean: float, median: float, std: float) -> Skew:
    delta = mean - median
    if delta == 0 or abs(delta) < SKEW_TOLERANCE * std:
        return Skew.SYMMETRIC
    return Skew.RIGHT if delta > 0 else Skew.LEFT


def summarize_numeric(values: Sequence[float]) -> NumericSummary:
    """Compute the numeric summary for a non-empty list of floats."""

    if not values:
        raise ValueError("summarize_numeric() needs at least one value")

    s = pd.Series(list(values), dtype="float64")
    ordered = sorted(values)
    n = len(ordered)

    mean = float(s.mean())
    median = float(s.median())
    std = float(s.std(ddof=0))
    q1 = ordered[math.floor(n * 0.25)]
    q3 = ordered[math.floor(n * 0.75)]
    iqr = q3 - q1
    lower, upper = q1 - OUTLIER_FENCE * iqr, q3 + OUTLIER_FENCE * iqr

    return NumericSummary(
        count=n,
        mean=mean,
        median=median,
        std=std,
        min=ordered[0],
        max=ordered[-1],
        q1=q1,
        q3=q3,
        outliers=tuple(v for v in values if v < lower or v > upper),
        skew=classify_skew(mean, median, std),
        skew_score=(mean - median) / (std + EPSILON),
    )


def summarize_categorical(values: Sequence[str], *, row_count: int) -> CategoricalSummary:
    counts = Counter(values)
    return CategoricalSummary(
        frequencies=tuple(counts.items()),
        total=len(values),
        is_identifier=len(counts) == row_count,
    )


def profile_column(name: str, raw_values: Sequence[str]) -> ColumnProfile:
    """Profile one column of raw string cells."""

    row_count = len(raw_values)
    present = non_empty(raw_values)
    typed = [classify_cell(v) for v in present]
    cardinality = len(set(present))

    if not typed:
        return ColumnProfile(
            name=name,
            kind=ColumnKind.EMPTY,
            row_count=row_count,
            non_empty_count=0,
            cardinality=0,
            missing_count=row_count,
        )

    numbers = [c.value for c in typed if isinstance(c, Numeric)]
    if len(numbers) > len(typed) * NUMERIC_MAJORITY:
        return ColumnProfile(
            name=name,
            kind=ColumnKind.NUMERIC,
            row_count=row_count,
            non_empty_count=len(typed),
            cardinality=cardinality,
            missing_count=row_count - len(numbers),
            numeric=summarize_numeric(numbers),
        )

    return ColumnProfile(
        name=name,
        kind=ColumnKind.CATEGORICAL,
        row_count=row_count,
        non_empty_count=len(typed),
        cardinality=cardinality,
        missing_count=row_count - len(typed),
        categorical=summarize_categorical(present, row_count=row_count),
    )
