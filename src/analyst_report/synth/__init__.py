"""Document synthesis layer.

Renders any plain-text report (typically Report.text()) into a paginated
PDF byte string. The synthesizer knows nothing about report content.
"""

from .layout import LayoutConfig, paginate, wrap_body
from .pdf_writer import escape_text, render

__all__ = ["LayoutConfig", "escape_text", "paginate", "render", "wrap_body"]
