from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
from pydantic import ValidationError

from .errors import DatasetLoadError
from .models import TabularDataset

LOGGER = logging.getLogger(__name__)

CSV_SUFFIXES = {".csv", ".txt"}
EXCEL_SUFFIXES = {".xlsx"}


def _strip_frame(df: pd.DataFrame) -> pd.DataFrame:
    """
    Normalize a string frame: NaN -> "", headers and cells stripped.
    """
    df = df.fillna("").astype(str)
    df.columns = [str(c).strip() for c in df.columns]
    return df.apply(lambda s: s.str.strip())


def dataset_from_frame(df: pd.DataFrame) -> TabularDataset:
    """Convert any DataFrame into a TabularDataset of stripped strings."""
    df = _strip_frame(df)
    return TabularDataset.from_rows(list(df.columns), df.itertuples(index=False, name=None))


def load_csv(path: Path) -> TabularDataset:
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False, skip_blank_lines=True)
    except Exception as e:  # noqa: BLE001
        raise DatasetLoadError(path, f"{type(e).__name__}: {e}") from e
    if df.shape[0] == 0:
        raise DatasetLoadError(path, "no data rows found in CSV file")
    return dataset_from_frame(df)


def load_excel(path: Path) -> TabularDataset:
    try:
        df = pd.read_excel(path, sheet_name=0, dtype=object)
    except Exception as e:  # noqa: BLE001
        raise DatasetLoadError(path, f"{type(e).__name__}: {e}") from e

    df = _strip_frame(df)
    # Spreadsheets often carry formatted but empty rows.
    df = df[(df != "").any(axis=1)]
    if df.shape[0] == 0:
        raise DatasetLoadError(path, "no data rows found in Excel file")
    return dataset_from_frame(df)


def load_table(path: Path) -> TabularDataset:
    """
    Load a CSV or Excel file into a TabularDataset.

    All cells come back as strings; typing happens later in the profiler.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    suffix = path.suffix.lower()
    if suffix not in CSV_SUFFIXES | EXCEL_SUFFIXES:
        raise DatasetLoadError(path, f"unsupported file type '{suffix or path.name}'")

    try:
        dataset = load_csv(path) if suffix in CSV_SUFFIXES else load_excel(path)
    except ValidationError as e:
        raise DatasetLoadError(path, f"invalid table shape: {e}") from e

    LOGGER.debug("loaded %s: %d rows x %d columns", path, dataset.row_count, dataset.column_count)
    return dataset
