from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer

from .errors import AnalystReportError
from .ingest import load_table
from .profile import profile_dataset
from .query import (
    aggregate_column,
    filter_rows_advanced,
    group_by,
    preview,
    search_table,
    unique_values,
)
from .synth import LayoutConfig, render
from .utils import write_bytes, write_text

app = typer.Typer(add_completion=False, help="Analyst Report (dataset profiling and PDF reports)")

# ---- Table commands ----
table_app = typer.Typer(help="Deterministic lookups against a data file.")
app.add_typer(table_app, name="table")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def default_title(data: Path) -> str:
    return f"Data Science Analysis Report - {data.name}"


@app.command()
def profile(
    data: Path = typer.Option(..., "--data", help="Path to a CSV or Excel file"),
    pdf: Optional[Path] = typer.Option(None, "--pdf", help="Write the report as PDF to this path"),
    text: Optional[Path] = typer.Option(None, "--text", help="Write the plain-text report to this path"),
    title: Optional[str] = typer.Option(None, "--title", help="PDF title (default: derived from file name)"),
):
    """
    Profile a dataset and print the report.

    With --pdf and/or --text the report is written to disk instead of printed.
    """
    try:
        dataset = load_table(data)
        result = profile_dataset(dataset)
        body = result.report.text()

        if text is None and pdf is None:
            typer.echo(body.rstrip())
            return

        if text is not None:
            write_text(text, body)
            typer.echo(f"Report: {text}")
        if pdf is not None:
            write_bytes(pdf, render(title or default_title(data), body, layout=LayoutConfig.from_env()))
            typer.echo(f"PDF: {pdf}")
        typer.echo(f"Profiled {result.row_count} rows x {result.column_count} columns.")
    except FileNotFoundError as e:
        typer.echo(f"ERROR: {e}")
        raise typer.Exit(code=2)
    except AnalystReportError as e:
        typer.echo(f"ERROR: {e}")
        raise typer.Exit(code=1)


@app.command("render")
def render_text(
    source: Path = typer.Option(..., "--input", help="Plain-text file to render"),
    out: Path = typer.Option(..., "--out", help="Output PDF path"),
    title: Optional[str] = typer.Option(None, "--title", help="Document title (default: file name)"),
):
    """
    Render any plain-text file to a paginated PDF.
    """
    if not source.exists():
        typer.echo(f"ERROR: Input file not found: {source}")
        raise typer.Exit(code=2)
    try:
        body = source.read_text(encoding="utf-8")
    except (UnicodeDecodeError, OSError) as e:
        typer.echo(f"ERROR: cannot read {source}: {e}")
        raise typer.Exit(code=1)
    write_bytes(out, render(title or source.name, body, layout=LayoutConfig.from_env()))
    typer.echo(f"PDF: {out}")


def _load_or_exit(data: Path):
    try:
        return load_table(data)
    except FileNotFoundError as e:
        typer.echo(f"ERROR: {e}")
        raise typer.Exit(code=2)
    except AnalystReportError as e:
        typer.echo(f"ERROR: {e}")
        raise typer.Exit(code=1)


def _echo_rows(rows: list[tuple[str, ...]]) -> None:
    for row in rows:
        typer.echo(" | ".join(row))
    typer.echo(f"({len(rows)} rows)")


@table_app.command("preview")
def table_preview(
    data: Path = typer.Option(..., "--data", help="Path to a CSV or Excel file"),
    limit: int = typer.Option(10, "--limit", help="Number of rows to show"),
) -> None:
    """Show headers and the first rows."""
    typer.echo(preview(_load_or_exit(data), limit=limit))


@table_app.command("filter")
def table_filter(
    data: Path = typer.Option(..., "--data", help="Path to a CSV or Excel file"),
    column: str = typer.Option(..., "--column", help="Column name (loose match)"),
    value: str = typer.Option(..., "--value", help="Value to compare against"),
    operator: str = typer.Option("equals", "--op", help="equals|contains|>|<|>=|<=|!="),
) -> None:
    """Print rows matching a column condition."""
    _echo_rows(filter_rows_advanced(_load_or_exit(data), column, value, operator))


@table_app.command("aggregate")
def table_aggregate(
    data: Path = typer.Option(..., "--data", help="Path to a CSV or Excel file"),
    column: str = typer.Option(..., "--column", help="Numeric column"),
    operation: str = typer.Option(..., "--op", help="sum|avg|count|min|max"),
) -> None:
    """Aggregate the numeric cells of a column."""
    dataset = _load_or_exit(data)
    try:
        typer.echo(aggregate_column(dataset, column, operation))
    except AnalystReportError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(code=1)


@table_app.command("group-by")
def table_group_by(
    data: Path = typer.Option(..., "--data", help="Path to a CSV or Excel file"),
    by: str = typer.Option(..., "--by", help="Grouping column"),
    column: str = typer.Option("", "--column", help="Value column (omit to count rows)"),
    operation: str = typer.Option("count", "--op", help="sum|avg|count"),
) -> None:
    """Aggregate a value column per group, printed as JSON."""
    dataset = _load_or_exit(data)
    try:
        result = group_by(dataset, by, column, operation)
    except AnalystReportError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(json.dumps(result, indent=2, sort_keys=True))


@table_app.command("search")
def table_search(
    data: Path = typer.Option(..., "--data", help="Path to a CSV or Excel file"),
    term: str = typer.Option(..., "--term", help="Case-insensitive substring"),
) -> None:
    """Print rows where any cell contains the term."""
    _echo_rows(search_table(_load_or_exit(data), term))


@table_app.command("unique")
def table_unique(
    data: Path = typer.Option(..., "--data", help="Path to a CSV or Excel file"),
    column: str = typer.Option(..., "--column", help="Column name (loose match)"),
) -> None:
    """Print the sorted distinct non-empty values of a column."""
    for value in unique_values(_load_or_exit(data), column):
        typer.echo(value)
