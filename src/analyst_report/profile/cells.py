from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Iterable, Optional, Union


# Plain decimal literals only: no underscores, nan/inf spellings or suffixes.
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


@dataclass(frozen=True)
class Numeric:
    value: float


@dataclass(frozen=True)
class NonNumeric:
    text: str


Cell = Union[Numeric, NonNumeric]


def is_empty(raw: str) -> bool:
    return not raw or not raw.strip()


def parse_number(raw: str) -> Optional[float]:
    """Parse a cell as a finite float, or return None."""

    text = raw.strip()
    if _FLOAT_RE.fullmatch(text) is None:
        return None
    value = float(text)
    if not math.isfinite(value):
        return None
    return value


def classify_cell(raw: str) -> Optional[Cell]:
    """Typed view of a raw cell; None for empty cells."""

    if is_empty(raw):
        return None
    value = parse_number(raw)
    if value is None:
        return NonNumeric(raw.strip())
    return Numeric(value)


def non_empty(values: Iterable[str]) -> list[str]:
    return [v.strip() for v in values if not is_empty(v)]
