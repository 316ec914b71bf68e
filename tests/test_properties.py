from __future__ import annotations

import re

import pytest
from hypothesis import given
from hypothesis import strategies as st

from analyst_report.models import TabularDataset
from analyst_report.profile.quality import assess_quality, count_duplicate_rows
from analyst_report.profile.stats import summarize_numeric
from analyst_report.synth import render

pytestmark = pytest.mark.fuzz

cells = st.sampled_from(["", "a", "b", "1", "2.5", " "])
tables = st.integers(min_value=1, max_value=4).flatmap(
    lambda n: st.lists(st.lists(cells, min_size=n, max_size=n), max_size=12).map(
        lambda rows: TabularDataset.from_rows([f"c{i}" for i in range(n)], rows)
    )
)


@given(tables)
def test_completeness_is_a_percentage(ds: TabularDataset) -> None:
    q = assess_quality(ds)
    assert 0.0 <= q.completeness <= 100.0
    assert 0 <= q.duplicate_rows < max(ds.row_count, 1)


@given(tables, st.randoms(use_true_random=False))
def test_duplicates_ignore_row_order(ds: TabularDataset, rnd) -> None:
    rows = list(ds.rows)
    rnd.shuffle(rows)
    shuffled = TabularDataset.from_rows(ds.columns, rows)
    assert count_duplicate_rows(shuffled) == count_duplicate_rows(ds)


@given(st.lists(st.floats(min_value=-1e6, max_value=1e6, allow_nan=False), min_size=1, max_size=50))
def test_quartiles_bracket_the_median(values: list[float]) -> None:
    s = summarize_numeric(values)
    assert s.min <= s.q1 <= s.q3 <= s.max
    assert s.q1 <= s.median <= s.q3
    assert s.iqr >= 0
    assert s.min <= s.median <= s.max
    assert all(v < s.lower_fence or v > s.upper_fence for v in s.outliers)


@given(st.text(max_size=400), st.text(max_size=40))
def test_xref_offsets_point_at_objects(body: str, title: str) -> None:
    pdf = render(title, body, generated_at="2024-01-01 00:00:00")
    start = int(re.search(rb"startxref\n(\d+)\n%%EOF\n$", pdf).group(1))
    header = re.match(rb"xref\n0 (\d+)\n", pdf[start:])
    assert header is not None
    entries = pdf[start + header.end() :]
    for num in range(1, int(header.group(1))):
        off = int(entries[num * 20 : num * 20 + 10])
        assert pdf[off:].startswith(f"{num} 0 obj\n".encode())
