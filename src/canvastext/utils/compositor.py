"""Row positioning and painting."""

from __future__ import annotations

from canvastext.render.surface import DrawingSurface
from canvastext.utils.layout import calculate_row_width
from canvastext.utils.metrics import FontMetrics
from canvastext.utils.style import ResolvedStyle


def row_anchor_x(style: ResolvedStyle, surface_width: float) -> float:
    """
    Horizontal text anchor for every row.

    Left-aligned rows anchor at the left padding, right-aligned rows at the
    surface width minus the right padding, centered rows at the middle.
    """
    if style.align == "right":
        return surface_width - style.padding.right
    if style.align == "center":
        return surface_width / 2
    return style.padding.left


def first_row_y(
    style: ResolvedStyle,
    surface_height: float,
    row_count: int,
    row_height: float,
    descender_height: float,
) -> float:
    """
    Top of the first row's line box.

    Bottom alignment reserves the descender height so descenders on the last
    row stay on the surface.
    """
    block_height = row_count * row_height
    if style.valign == "bottom":
        return surface_height - block_height - descender_height - style.padding.bottom
    if style.valign == "middle":
        return (surface_height - block_height) / 2
    return style.padding.top


def render_word_wrap_rows(
    surface: DrawingSurface,
    style: ResolvedStyle,
    rows: list[str],
    metrics: FontMetrics,
) -> float:
    """
    Paint rows onto the surface.

    Each row is drawn with a "top" baseline, shifted up by the font's baseline
    offset and centered in its line box, then optionally decorated.

    Args:
        surface: Target surface.
        style: Resolved style.
        rows: Rows from the word-wrap layout.
        metrics: Metrics for the style's font.

    Returns:
        Total covered area: sum of font height × row width (padding included).
    """
    font_height = metrics.height
    row_height = font_height * style.line_height

    row_x = row_anchor_x(style, surface.width)
    row_y = first_row_y(style, surface.height, len(rows), row_height, metrics.descender_height)

    total_area = 0.0
    for row in rows:
        width = calculate_row_width(surface, style.font, row, style.padding)
        surface.fill_text(
            row,
            row_x,
            row_y - metrics.baseline_offset + (row_height - font_height) / 2,
            font=style.font,
            color=style.color,
            align=style.align,
            baseline="top",
            shadow=style.shadow,
        )
        render_decoration(surface, style, row_x, row_y, font_height, row_height, width)
        total_area += font_height * width
        row_y += row_height

    return total_area


def render_decoration(
    surface: DrawingSurface,
    style: ResolvedStyle,
    x: float,
    y: float,
    font_height: float,
    row_height: float,
    width: float,
) -> None:
    """
    Stroke an underline or strikethrough for one row.

    Args:
        surface: Target surface.
        style: Resolved style (decoration, alignment, color, padding).
        x: Row anchor X.
        y: Top of the row's line box.
        font_height: Measured font height.
        row_height: Line box height.
        width: Row width including horizontal padding.
    """
    if style.decoration == "none":
        return

    stroke_width = max(1.0, font_height / 10)
    line_width = width - style.padding.horizontal

    line_x = x
    if style.align == "right":
        line_x = x - line_width
    elif style.align == "center":
        line_x = x - line_width / 2

    if style.decoration == "underline":
        line_y = y + font_height + min(20.0, font_height / 2)
    else:
        line_y = y + row_height / 2 + min(8.0, stroke_width * 2)

    surface.stroke_line(
        (line_x, line_y),
        (line_x + line_width, line_y),
        color=style.color,
        width=stroke_width,
        cap="round",
    )
