"""Minimal PDF 1.4 writer for monospace text reports.

Objects are rendered to immutable byte buffers first. Cross-reference
offsets are then a running sum over the buffer lengths, taken in the same
order the buffers are concatenated, so an offset can never disagree with
where its object starts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import accumulate
from typing import Optional, Sequence

from ..utils import now_local
from .layout import LayoutConfig, paginate, wrap_body

LOGGER = logging.getLogger(__name__)

HEADER = b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n"
TEXT_ENCODING = "cp1252"
FONT_NAME = "Courier"

CATALOG_OBJ = 1
PAGES_OBJ = 2
FIRST_PAGE_OBJ = 3


def escape_text(text: str) -> str:
    """Escape the characters that delimit PDF literal strings."""

    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def encode_text(text: str) -> bytes:
    return text.encode(TEXT_ENCODING, errors="replace")


def _show(text: str) -> str:
    return f"({escape_text(text)}) Tj\n"


@dataclass(frozen=True)
class ObjectLayout:
    """Object numbers for a document with `pages` pages."""

    pages: int

    def page(self, i: int) -> int:
        return FIRST_PAGE_OBJ + i

    @property
    def font(self) -> int:
        return FIRST_PAGE_OBJ + self.pages

    def content(self, i: int) -> int:
        return self.font + 1 + i


def content_stream(
    lines: Sequence[str],
    *,
    index: int,
    pages: int,
    title: str,
    timestamp: str,
    layout: LayoutConfig,
) -> bytes:
    parts = ["BT\n"]
    if index == 0:
        parts.append(f"/F1 {layout.title_size} Tf\n{layout.margin_left} {layout.top} Td\n")
        parts.append(_show(title))
        parts.append(f"0 {-layout.title_gap} Td\n/F1 {layout.meta_size} Tf\n")
        parts.append(_show(f"Generated: {timestamp}"))
        parts.append(f"0 {-layout.meta_gap} Td\n/F1 {layout.body_size} Tf\n")
    else:
        parts.append(f"/F1 {layout.body_size} Tf\n{layout.margin_left} {layout.top} Td\n")
    for line in lines:
        parts.append(_show(line))
        parts.append(f"0 {-layout.line_height} Td\n")
    parts.append("ET\n")

    footer_y = max(layout.margin_bottom - 20, 10)
    parts.append(f"BT\n/F1 {layout.footer_size} Tf\n{layout.margin_left} {footer_y} Td\n")
    parts.append(_show(f"Page {index + 1} of {pages}"))
    parts.append("ET\n")
    return encode_text("".join(parts))


def _obj(num: int, body: bytes) -> bytes:
    return f"{num} 0 obj\n".encode("ascii") + body + b"\nendobj\n"


def _dict_obj(num: int, body: str) -> bytes:
    return _obj(num, body.encode("ascii"))


def _stream_obj(num: int, data: bytes) -> bytes:
    return _obj(num, f"<< /Length {len(data)} >>\nstream\n".encode("ascii") + data + b"\nendstream")


def build_objects(streams: Sequence[bytes], layout: LayoutConfig) -> list[bytes]:
    """Render all objects in ascending object-number order."""

    nums = ObjectLayout(len(streams))
    kids = " ".join(f"{nums.page(i)} 0 R" for i in range(len(streams)))
    objects = [
        _dict_obj(CATALOG_OBJ, f"<< /Type /Catalog /Pages {PAGES_OBJ} 0 R >>"),
        _dict_obj(PAGES_OBJ, f"<< /Type /Pages /Kids [{kids}] /Count {len(streams)} >>"),
    ]
    for i in range(len(streams)):
        objects.append(
            _dict_obj(
                nums.page(i),
                f"<< /Type /Page /Parent {PAGES_OBJ} 0 R /Resources {nums.font} 0 R "
                f"/MediaBox [0 0 {layout.page_width} {layout.page_height}] "
                f"/Contents {nums.content(i)} 0 R >>",
            )
        )
    objects.append(
        _dict_obj(
            nums.font,
            f"<< /Font << /F1 << /Type /Font /Subtype /Type1 /BaseFont /{FONT_NAME} "
            "/Encoding /WinAnsiEncoding >> >> >>",
        )
    )
    for i, data in enumerate(streams):
        objects.append(_stream_obj(nums.content(i), data))
    return objects


def xref_table(offsets: Sequence[int]) -> bytes:
    """Cross-reference section for objects 1..len(offsets), plus free object 0."""

    entries = ["0000000000 65535 f \n"]
    entries.extend(f"{off:010d} 00000 n \n" for off in offsets)
    return f"xref\n0 {len(entries)}\n{''.join(entries)}".encode("ascii")


def assemble(objects: Sequence[bytes]) -> bytes:
    """Concatenate header, objects, xref and trailer."""

    # positions[i] is where objects[i] starts; the last value is where xref starts.
    positions = list(accumulate((len(o) for o in objects), initial=len(HEADER)))
    offsets, xref_start = positions[:-1], positions[-1]
    trailer = (
        f"trailer\n<< /Size {len(objects) + 1} /Root {CATALOG_OBJ} 0 R >>\n"
        f"startxref\n{xref_start}\n%%EOF\n"
    ).encode("ascii")
    return b"".join([HEADER, *objects, xref_table(offsets), trailer])


def render(
    title: str,
    body: str,
    *,
    generated_at: Optional[str] = None,
    layout: Optional[LayoutConfig] = None,
) -> bytes:
    """Render a title and plain-text body to PDF bytes.

    Output is byte-identical for identical inputs apart from the timestamp,
    which can be pinned with `generated_at`.
    """

    cfg = layout or LayoutConfig()
    timestamp = generated_at if generated_at is not None else now_local()

    lines = wrap_body(body, cfg.wrap_width)
    pages = paginate(lines, cfg.lines_per_page_with_header)
    streams = [
        content_stream(
            page_lines,
            index=i,
            pages=len(pages),
            title=title,
            timestamp=timestamp,
            layout=cfg,
        )
        for i, page_lines in enumerate(pages)
    ]
    data = assemble(build_objects(streams, cfg))

    LOGGER.debug("rendered %d wrapped lines into %d pages (%d bytes)", len(lines), len(pages), len(data))
    return data
