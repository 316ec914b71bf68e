from __future__ import annotations

from typing import Any, Sequence

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class TabularDataset(BaseModel):
    """
    A flat table of string cells handed over by a loader.

    columns: ordered, unique column names
    rows: row-major cells, positionally aligned to `columns`

    Short rows are padded with empty strings and cells past the last column
    are dropped, so every row has exactly len(columns) cells. The model is
    frozen: a dataset is read-only once constructed.
    """

    model_config = ConfigDict(frozen=True)

    columns: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...] = ()

    @field_validator("columns")
    @classmethod
    def _unique_columns(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        seen: set[str] = set()
        dupes: list[str] = []
        for name in value:
            if name in seen and name not in dupes:
                dupes.append(name)
            seen.add(name)
        if dupes:
            raise ValueError(f"duplicate column names: {dupes}")
        return value

    @model_validator(mode="before")
    @classmethod
    def _align_rows(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        columns = tuple(str(c) for c in data.get("columns") or ())
        width = len(columns)
        aligned = []
        for row in data.get("rows") or ():
            cells = tuple("" if c is None else str(c) for c in row)[:width]
            if len(cells) < width:
                cells = cells + ("",) * (width - len(cells))
            aligned.append(cells)
        return {**data, "columns": columns, "rows": tuple(aligned)}

    @classmethod
    def from_rows(cls, columns: Sequence[str], rows: Sequence[Sequence[Any]]) -> "TabularDataset":
        return cls(columns=tuple(columns), rows=tuple(tuple(r) for r in rows))

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.columns)

    def column_values(self, index: int) -> list[str]:
        return [row[index] for row in self.rows]
