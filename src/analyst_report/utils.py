from __future__ import annotations

from datetime import datetime
from pathlib import Path


TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def now_local() -> str:
    return datetime.now().strftime(TIMESTAMP_FORMAT)


def format_number(x: float) -> str:
    """Thousands separators and at most two decimals, trailing zeros dropped."""
    s = f"{x:,.2f}".rstrip("0").rstrip(".")
    return "0" if s in ("-0", "") else s


def format_count(n: int) -> str:
    return f"{n:,}"


def format_percent(x: float) -> str:
    return f"{x:.1f}"


def plural(n: int, word: str, many: str | None = None) -> str:
    return word if n == 1 else (many or f"{word}s")


def write_bytes(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
