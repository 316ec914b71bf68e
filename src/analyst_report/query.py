"""Deterministic table lookups used to answer simple questions about a dataset.

Column names are resolved loosely (see find_column_index). An unknown column
yields an empty result rather than an error, so callers can probe freely.
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from .errors import QueryError
from .models import TabularDataset
from .profile.cells import is_empty, parse_number

Row = tuple[str, ...]

AGGREGATIONS = ("sum", "avg", "count", "min", "max")
GROUP_AGGREGATIONS = ("sum", "avg", "count")


def find_column_index(columns: Sequence[str], name: str) -> int:
    """Exact (case-insensitive), then partial, then reverse-partial match."""

    wanted = name.lower().strip()
    if not wanted:
        return -1
    normalized = [c.lower().strip() for c in columns]
    for i, c in enumerate(normalized):
        if c == wanted:
            return i
    for i, c in enumerate(normalized):
        if wanted in c:
            return i
    for i, c in enumerate(normalized):
        if c and c in wanted:
            return i
    return -1


def filter_rows(dataset: TabularDataset, column: str, value: str) -> list[Row]:
    idx = find_column_index(dataset.columns, column)
    if idx == -1:
        return []
    wanted = value.lower().strip()
    out = []
    for row in dataset.rows:
        cell = row[idx].lower().strip()
        if wanted in cell or cell in wanted:
            out.append(row)
    return out


def _numeric_compare(op: Callable[[float, float], bool]) -> Callable[[str, str], bool]:
    def check(cell: str, value: str) -> bool:
        a, b = parse_number(cell), parse_number(value)
        return a is not None and b is not None and op(a, b)

    return check


def _contains(cell: str, value: str) -> bool:
    return value.lower().strip() in cell.lower()


_OPERATORS: dict[str, Callable[[str, str], bool]] = {
    "equals": lambda cell, value: cell.lower() == value.lower().strip(),
    "contains": _contains,
    "greater": _numeric_compare(lambda a, b: a > b),
    "less": _numeric_compare(lambda a, b: a < b),
    ">=": _numeric_compare(lambda a, b: a >= b),
    "<=": _numeric_compare(lambda a, b: a <= b),
    "not": lambda cell, value: cell.lower() != value.lower().strip(),
}
_ALIASES = {"=": "equals", "==": "equals", ">": "greater", "<": "less", "!=": "not"}


def filter_rows_advanced(
    dataset: TabularDataset, column: str, value: str, operator: str = "equals"
) -> list[Row]:
    """Filter with an operator; unknown operators fall back to `contains`."""

    idx = find_column_index(dataset.columns, column)
    if idx == -1:
        return []
    op = operator.lower()
    check = _OPERATORS.get(_ALIASES.get(op, op), _contains)
    return [row for row in dataset.rows if check(row[idx].strip(), value)]


def _numbers(dataset: TabularDataset, idx: int) -> list[float]:
    return [v for v in (parse_number(row[idx]) for row in dataset.rows) if v is not None]


def _reduce(values: Sequence[float], operation: str) -> float:
    if operation == "sum":
        return float(sum(values))
    if operation == "avg":
        return float(sum(values)) / len(values) if values else 0.0
    if operation == "count":
        return float(len(values))
    if operation == "min":
        return min(values)
    if operation == "max":
        return max(values)
    raise QueryError(f"unsupported aggregation '{operation}'; expected one of {list(AGGREGATIONS)}")


def aggregate_column(dataset: TabularDataset, column: str, operation: str) -> float:
    """Aggregate the numeric cells of a column; 0.0 when there are none."""

    if operation not in AGGREGATIONS:
        raise QueryError(f"unsupported aggregation '{operation}'; expected one of {list(AGGREGATIONS)}")
    idx = find_column_index(dataset.columns, column)
    if idx == -1:
        return 0.0
    values = _numbers(dataset, idx)
    if not values:
        return 0.0
    return _reduce(values, operation)


def unique_values(dataset: TabularDataset, column: str) -> list[str]:
    idx = find_column_index(dataset.columns, column)
    if idx == -1:
        return []
    return sorted({row[idx].strip() for row in dataset.rows if not is_empty(row[idx])})


def group_by(
    dataset: TabularDataset, group_column: str, value_column: str, operation: str
) -> dict[str, float]:
    """
    Aggregate `value_column` per distinct value of `group_column`.

    When `value_column` cannot be resolved every row counts as 1, which makes
    `count` a plain group size.
    """
    if operation not in GROUP_AGGREGATIONS:
        raise QueryError(
            f"unsupported group aggregation '{operation}'; expected one of {list(GROUP_AGGREGATIONS)}"
        )
    gidx = find_column_index(dataset.columns, group_column)
    if gidx == -1:
        return {}
    vidx = find_column_index(dataset.columns, value_column)

    groups: dict[str, list[float]] = {}
    for row in dataset.rows:
        key = row[gidx].strip()
        if not key:
            continue
        bucket = groups.setdefault(key, [])
        if vidx == -1:
            bucket.append(1.0)
            continue
        v = parse_number(row[vidx])
        if v is not None:
            bucket.append(v)

    return {k: _reduce(vs, operation) for k, vs in groups.items()}


def search_table(dataset: TabularDataset, term: str) -> list[Row]:
    wanted = term.lower().strip()
    return [row for row in dataset.rows if any(wanted in cell.lower() for cell in row)]


def preview(dataset: TabularDataset, query: Optional[str] = None, *, limit: int = 10) -> str:
    """Plain-text preview of the first rows, suitable as question context."""

    lines = [
        f"Table Data ({dataset.row_count} rows):",
        f"Headers: {', '.join(dataset.columns)}",
        "",
        f"First {min(limit, dataset.row_count)} rows:",
    ]
    for i, row in enumerate(dataset.rows[:limit], start=1):
        lines.append(f"Row {i}: {' | '.join(row)}")
    if query:
        lines += ["", f"Query: {query}"]
    return "\n".join(lines)
