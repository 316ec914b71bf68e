from __future__ import annotations

import math
import os
import textwrap
from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field


class LayoutConfig(BaseModel):
    """
    Page geometry and text metrics for rendered reports, in PDF points.

    Defaults describe US Letter with 50pt margins and a monospace body at
    10pt, so `wrap_width` characters fit the usable width.
    """

    model_config = ConfigDict(frozen=True)

    page_width: int = Field(default=612, gt=0)
    page_height: int = Field(default=792, gt=0)
    margin_top: int = Field(default=50, ge=0)
    margin_bottom: int = Field(default=50, ge=0)
    margin_left: int = Field(default=50, ge=0)
    margin_right: int = Field(default=50, ge=0)
    line_height: int = Field(default=15, gt=0)
    wrap_width: int = Field(default=85, gt=0)
    header_lines: int = 4
    title_size: int = 16
    meta_size: int = 10
    body_size: int = 10
    footer_size: int = 8
    title_gap: int = 30
    meta_gap: int = 40

    @property
    def max_lines_per_page(self) -> int:
        usable = self.page_height - self.margin_top - self.margin_bottom
        return usable // self.line_height

    @property
    def lines_per_page_with_header(self) -> int:
        return max(1, self.max_lines_per_page - self.header_lines)

    @property
    def top(self) -> int:
        return self.page_height - self.margin_top

    @classmethod
    def from_env(cls) -> "LayoutConfig":
        return cls(wrap_width=_get_wrap_width())


def _get_wrap_width(default: int = 85) -> int:
    raw = os.environ.get("REPORT_WRAP_WIDTH")
    if raw is None or raw.strip() == "":
        return default
    try:
        v = int(raw)
        return v if v > 0 else default
    except ValueError:
        return default


def wrap_body(body: str, width: int) -> list[str]:
    """Word-wrap every logical line; blank lines are kept as empty strings.

    Tokens longer than `width` are hard split, which is the only way a
    narrow width degrades output.
    """

    wrapped: list[str] = []
    for line in body.replace("\r\n", "\n").replace("\r", "\n").split("\n"):
        pieces = textwrap.wrap(line, width=width, break_long_words=True, break_on_hyphens=False)
        wrapped.extend(pieces or [""])
    return wrapped


def paginate(lines: Sequence[str], per_page: int) -> list[list[str]]:
    """Chunk wrapped lines into pages; always at least one page."""

    if not lines:
        return [[]]
    return [list(lines[i : i + per_page]) for i in range(0, len(lines), per_page)]


def page_count(line_count: int, per_page: int) -> int:
    return max(1, math.ceil(line_count / per_page))
