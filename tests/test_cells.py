from __future__ import annotations

import pytest

from analyst_report.profile.cells import NonNumeric, Numeric, classify_cell, is_empty, parse_number


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("34", 34.0),
        (" -2.5 ", -2.5),
        ("+.5", 0.5),
        ("1e3", 1000.0),
        ("7.", 7.0),
    ],
)
def test_parse_number_accepts_decimal_literals(raw: str, expected: float) -> None:
    assert parse_number(raw) == expected


@pytest.mark.parametrize("raw", ["", "abc", "12abc", "1_000", "nan", "inf", "-Infinity", "1e999", "1,000"])
def test_parse_number_rejects_everything_else(raw: str) -> None:
    assert parse_number(raw) is None


def test_classify_cell_gives_typed_view() -> None:
    assert classify_cell("   ") is None
    assert classify_cell("") is None
    assert classify_cell("4.0") == Numeric(4.0)
    assert classify_cell(" NYC ") == NonNumeric("NYC")


def test_is_empty_treats_whitespace_as_empty() -> None:
    assert is_empty("")
    assert is_empty(" \t")
    assert not is_empty("0")


@pytest.mark.parametrize("raw", ["٣", "١٢.٥", "１２", "1٠"])
def test_non_ascii_digits_are_not_numbers(raw: str) -> None:
    assert parse_number(raw) is None
    assert classify_cell(raw) == NonNumeric(raw)
