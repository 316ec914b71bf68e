from __future__ import annotations

import pytest

from analyst_report.errors import QueryError
from analyst_report.models import TabularDataset
from analyst_report.query import (
    aggregate_column,
    filter_rows,
    filter_rows_advanced,
    find_column_index,
    group_by,
    preview,
    search_table,
    unique_values,
)


@pytest.fixture()
def sales() -> TabularDataset:
    return TabularDataset.from_rows(
        ["Region", "Units Sold", "Price"],
        [
            ["East", "10", "2.5"],
            ["West", "4", "3"],
            ["East", "6", "n/a"],
            ["North", "", "1"],
        ],
    )


def test_find_column_index_match_order() -> None:
    cols = ["Region", "Units Sold", "Price"]
    assert find_column_index(cols, "region") == 0
    assert find_column_index(cols, "units") == 1
    assert find_column_index(cols, "unit price") == 2
    assert find_column_index(cols, "missing") == -1
    assert find_column_index(cols, "  ") == -1


def test_filter_rows_loose_match(sales: TabularDataset) -> None:
    assert [r[0] for r in filter_rows(sales, "region", "east")] == ["East", "East"]
    assert filter_rows(sales, "nope", "east") == []


@pytest.mark.parametrize(
    "op, value, expected",
    [
        ("equals", "4", ["West"]),
        (">", "5", ["East", "East"]),
        ("<=", "6", ["West", "East"]),
        ("!=", "10", ["West", "East", "North"]),
        ("contains", "ort", []),
        ("bogus", "1", ["East"]),
    ],
)
def test_filter_rows_advanced(sales: TabularDataset, op: str, value: str, expected: list[str]) -> None:
    assert [r[0] for r in filter_rows_advanced(sales, "units", value, op)] == expected


def test_aggregate_column(sales: TabularDataset) -> None:
    assert aggregate_column(sales, "units", "sum") == 20.0
    assert aggregate_column(sales, "units", "avg") == pytest.approx(20 / 3)
    assert aggregate_column(sales, "price", "count") == 3.0
    assert aggregate_column(sales, "price", "max") == 3.0
    assert aggregate_column(sales, "nope", "sum") == 0.0
    assert aggregate_column(sales, "region", "min") == 0.0


def test_aggregate_rejects_unknown_operation(sales: TabularDataset) -> None:
    with pytest.raises(QueryError):
        aggregate_column(sales, "units", "median")


def test_group_by(sales: TabularDataset) -> None:
    assert group_by(sales, "region", "units", "sum") == {"East": 16.0, "West": 4.0, "North": 0.0}
    assert group_by(sales, "region", "", "count") == {"East": 2.0, "West": 1.0, "North": 1.0}
    assert group_by(sales, "nope", "units", "sum") == {}
    with pytest.raises(QueryError):
        group_by(sales, "region", "units", "max")


def test_unique_and_search(sales: TabularDataset) -> None:
    assert unique_values(sales, "region") == ["East", "North", "West"]
    assert unique_values(sales, "nope") == []
    assert [r[0] for r in search_table(sales, "N/A")] == ["East"]


def test_preview(sales: TabularDataset) -> None:
    text = preview(sales, "total units?", limit=2)
    assert text.splitlines()[:4] == [
        "Table Data (4 rows):",
        "Headers: Region, Units Sold, Price",
        "",
        "First 2 rows:",
    ]
    assert "Row 2: West | 4 | 3" in text
    assert "Row 3" not in text
    assert text.endswith("Query: total units?")
