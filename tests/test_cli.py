from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from analyst_report.cli import app

runner = CliRunner()


@pytest.fixture()
def data_file(tmp_path: Path) -> Path:
    path = tmp_path / "orders.csv"
    path.write_text("region,units\nEast,10\nWest,4\nEast,6\n", encoding="utf-8")
    return path


def test_profile_prints_report(data_file: Path) -> None:
    result = runner.invoke(app, ["profile", "--data", str(data_file)])
    assert result.exit_code == 0, result.output
    assert result.output.startswith("DATA SCIENCE ANALYSIS REPORT")
    assert "Variable: units (Numeric)" in result.output


def test_profile_writes_text_and_pdf(data_file: Path, tmp_path: Path) -> None:
    out_txt = tmp_path / "out" / "report.txt"
    out_pdf = tmp_path / "out" / "report.pdf"
    result = runner.invoke(
        app, ["profile", "--data", str(data_file), "--text", str(out_txt), "--pdf", str(out_pdf)]
    )
    assert result.exit_code == 0, result.output
    assert "Profiled 3 rows x 2 columns." in result.output
    assert out_txt.read_text(encoding="utf-8").startswith("DATA SCIENCE ANALYSIS REPORT")
    pdf = out_pdf.read_bytes()
    assert pdf.startswith(b"%PDF-1.4")
    assert b"(Data Science Analysis Report - orders.csv) Tj" in pdf


def test_profile_missing_file_exits_2(tmp_path: Path) -> None:
    result = runner.invoke(app, ["profile", "--data", str(tmp_path / "nope.csv")])
    assert result.exit_code == 2
    assert "ERROR" in result.output


def test_profile_load_error_exits_1(tmp_path: Path) -> None:
    path = tmp_path / "empty.csv"
    path.write_text("a,b\n", encoding="utf-8")
    result = runner.invoke(app, ["profile", "--data", str(path)])
    assert result.exit_code == 1
    assert "no data rows" in result.output


def test_render_command(tmp_path: Path) -> None:
    source = tmp_path / "notes.txt"
    source.write_text("first line\nsecond line\n", encoding="utf-8")
    out = tmp_path / "notes.pdf"
    result = runner.invoke(app, ["render", "--input", str(source), "--out", str(out), "--title", "Notes"])
    assert result.exit_code == 0, result.output
    assert b"(Notes) Tj" in out.read_bytes()


def test_table_commands(data_file: Path) -> None:
    result = runner.invoke(app, ["table", "filter", "--data", str(data_file), "--column", "region", "--value", "east"])
    assert result.exit_code == 0, result.output
    assert "(2 rows)" in result.output

    result = runner.invoke(app, ["table", "aggregate", "--data", str(data_file), "--column", "units", "--op", "sum"])
    assert result.output.strip() == "20.0"

    result = runner.invoke(app, ["table", "group-by", "--data", str(data_file), "--by", "region"])
    assert json.loads(result.output) == {"East": 2.0, "West": 1.0}

    result = runner.invoke(app, ["table", "unique", "--data", str(data_file), "--column", "region"])
    assert result.output.split() == ["East", "West"]

    result = runner.invoke(app, ["table", "preview", "--data", str(data_file), "--limit", "1"])
    assert "Row 1: East | 10" in result.output


def test_table_aggregate_unknown_op_exits_1(data_file: Path) -> None:
    result = runner.invoke(app, ["table", "aggregate", "--data", str(data_file), "--column", "units", "--op", "median"])
    assert result.exit_code == 1


def test_render_rejects_non_utf8_input(tmp_path: Path) -> None:
    source = tmp_path / "latin1.txt"
    source.write_bytes(b"caf\xe9\n")
    out = tmp_path / "latin1.pdf"
    result = runner.invoke(app, ["render", "--input", str(source), "--out", str(out)])
    assert result.exit_code == 1
    assert "ERROR: cannot read" in result.output
    assert not isinstance(result.exception, UnicodeDecodeError)
    assert not out.exists()
