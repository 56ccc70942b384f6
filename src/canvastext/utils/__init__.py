"""Style resolution, font metrics, layout and compositing."""

from canvastext.utils.compositor import render_decoration, render_word_wrap_rows
from canvastext.utils.layout import calculate_row_width, make_word_wrap_rows
from canvastext.utils.metrics import FontMetrics, FontMetricsCache, FontMetricsEngine
from canvastext.utils.style import (
    Padding,
    ResolvedStyle,
    resolve_color,
    resolve_font,
    resolve_padding,
    resolve_shadow_offset,
    resolve_style,
)

__all__ = [
    "FontMetrics",
    "FontMetricsCache",
    "FontMetricsEngine",
    "Padding",
    "ResolvedStyle",
    "calculate_row_width",
    "make_word_wrap_rows",
    "render_decoration",
    "render_word_wrap_rows",
    "resolve_color",
    "resolve_font",
    "resolve_padding",
    "resolve_shadow_offset",
    "resolve_style",
]
