from __future__ import annotations

import pytest

from analyst_report.profile.stats import (
    ColumnKind,
    Imbalance,
    Skew,
    classify_skew,
    profile_column,
    summarize_numeric,
)


def test_quartiles_use_truncating_index_and_flag_outlier() -> None:
    s = summarize_numeric([1, 2, 3, 4, 100])
    assert s.q1 == 2
    assert s.q3 == 4
    assert s.iqr == 2
    assert s.upper_fence == 7
    assert s.lower_fence == -1
    assert s.outliers == (100,)
    assert s.median == 3
    assert s.mean == 22
    assert s.skew is Skew.RIGHT


def test_std_is_population_std() -> None:
    s = summarize_numeric([2, 4, 4, 4, 5, 5, 7, 9])
    assert s.std == pytest.approx(2.0)
    assert s.median == 4.5


def test_even_count_median_averages_central_values() -> None:
    assert summarize_numeric([4, 1, 3, 2]).median == 2.5


def test_constant_column_is_symmetric_without_division_error() -> None:
    s = summarize_numeric([5, 5, 5])
    assert s.std == 0
    assert s.skew is Skew.SYMMETRIC
    assert s.skew_score == 0
    assert s.outliers == ()


def test_skew_classification_thresholds() -> None:
    assert classify_skew(10.05, 10.0, 1.0) is Skew.SYMMETRIC
    assert classify_skew(10.5, 10.0, 1.0) is Skew.RIGHT
    assert classify_skew(9.5, 10.0, 1.0) is Skew.LEFT


def test_summarize_numeric_requires_values() -> None:
    with pytest.raises(ValueError):
        summarize_numeric([])


def test_numeric_column_counts_unparseable_cells_as_missing() -> None:
    col = profile_column("units", ["1", "2", "n/a", "", "3"])
    assert col.kind is ColumnKind.NUMERIC
    assert col.non_empty_count == 4
    assert col.missing_count == 2
    assert col.numeric is not None
    assert col.numeric.count == 3
    assert col.cardinality == 4


def test_half_numeric_column_is_categorical() -> None:
    col = profile_column("mixed", ["1", "2", "a", "b"])
    assert col.kind is ColumnKind.CATEGORICAL
    assert col.categorical is not None
    assert col.missing_count == 0


def test_empty_column() -> None:
    col = profile_column("notes", ["", " ", ""])
    assert col.kind is ColumnKind.EMPTY
    assert col.missing_count == 3
    assert col.cardinality == 0
    assert col.numeric is None and col.categorical is None


def test_top_values_rank_by_count_then_first_seen() -> None:
    values = ["b", "a", "c", "a", "d", "e", "f", "g", "c"]
    col = profile_column("letters", values)
    s = col.categorical
    assert s is not None
    assert s.top_values == (("a", 2), ("c", 2), ("b", 1), ("d", 1), ("e", 1))
    assert s.frequency()["g"] == 1
    assert s.cardinality_ratio == pytest.approx(7 / 9)


def test_identifier_and_imbalance_flags() -> None:
    ids = profile_column("id", ["a1", "a2", "a3"])
    assert ids.is_identifier

    skewed = profile_column("flag", ["yes"] * 19 + ["no"])
    assert skewed.categorical is not None
    assert skewed.categorical.imbalance is Imbalance.SEVERE
    assert not skewed.is_identifier

    moderate = profile_column("flag", ["yes"] * 6 + ["no"] * 4)
    assert moderate.categorical is not None
    assert moderate.categorical.imbalance is Imbalance.MODERATE


def test_feature_categorical_needs_low_cardinality() -> None:
    assert profile_column("region", ["E", "W", "E", "W", "E"]).is_feature_categorical
    assert not profile_column("city", ["NYC", "LA", "NYC"]).is_feature_categorical
    assert not profile_column("const", ["x", "x", "x"]).is_feature_categorical
