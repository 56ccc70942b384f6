"""Resolution of loosely-specified text styles into fully-populated values."""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal

from canvastext.config import EngineConfig, TextBlockStyle
from canvastext.fonts import parse_font_size
from canvastext.render.surface import Shadow
from canvastext.types import Align, Color, Decoration, VAlign

_HEX_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


@dataclass(frozen=True)
class Padding:
    """Resolved padding, one value per side."""

    left: float = 0.0
    right: float = 0.0
    top: float = 0.0
    bottom: float = 0.0

    @property
    def horizontal(self) -> float:
        """Left plus right padding."""
        return self.left + self.right


@dataclass(frozen=True)
class ShadowOffset:
    """Shadow displacement; None means no displacement on that axis."""

    x: float | None
    y: float | None


@dataclass(frozen=True)
class ResolvedStyle:
    """
    Fully-resolved style consumed by layout and compositing.

    Attributes:
        text: Text to lay out.
        align: Horizontal alignment.
        valign: Vertical alignment.
        font: Font identity, also the metrics cache key.
        font_size: Nominal font size, used to size measurement probes.
        padding: Per-side padding.
        color: Fill color (also used for decoration strokes).
        line_height: Row height multiplier.
        shadow: Text shadow, or None.
        decoration: Line decoration.
    """

    text: str
    align: Align
    valign: VAlign
    font: str
    font_size: float
    padding: Padding
    color: Color
    line_height: float
    shadow: Shadow | None
    decoration: Decoration


def resolve_font(style: TextBlockStyle, config: EngineConfig | None = None) -> str:
    """
    Build the font identity for a style.

    Returns ``style.font`` verbatim when set; otherwise ``"<size>pt '<family>'"``.
    Equal inputs always produce identical strings.

    Args:
        style: Text style.
        config: Engine config supplying the default size and family.

    Returns:
        Font identity string.
    """
    if style.font:
        return style.font

    config = config or EngineConfig()
    font_size = style.font_size or config.default_font_size
    font_family = style.font_family or config.default_font_family
    return f"{_format_size(font_size)}pt '{font_family}'"


def _format_size(size: float) -> str:
    """Format a size as a plain decimal that round-trips: 12 → "12", 1e16 → "10000000000000000"."""
    return format(Decimal(repr(float(size))), "f").removesuffix(".0")


def resolve_padding(style: TextBlockStyle) -> Padding:
    """
    Resolve per-side padding: explicit side value, else shorthand, else 0.

    Example:
        padding=5, padding_left=20 → Padding(left=20, right=5, top=5, bottom=5)
    """
    default = style.padding if style.padding is not None else 0.0

    def side(value: float | None) -> float:
        return value if value is not None else default

    return Padding(
        left=side(style.padding_left),
        right=side(style.padding_right),
        top=side(style.padding_top),
        bottom=side(style.padding_bottom),
    )


def resolve_color(color: Color, alpha: float | None) -> Color:
    """
    Apply an alpha to a hex color.

    Args:
        color: Fill color. Must be a 6-digit hex string (``#`` optional) when alpha is given.
        alpha: Opacity in 0-1 range, or None to leave the color untouched.

    Returns:
        ``"rgba(r, g, b, alpha)"`` when alpha is given, otherwise ``color`` unchanged.

    Raises:
        ValueError: If alpha is given and color is not a 6-digit hex string.
    """
    if alpha is None:
        return color

    match = _HEX_RE.match(color) if isinstance(color, str) else None
    if not match:
        raise ValueError(f"Alpha requires a 6-digit hex color, got: {color!r}")

    r, g, b = (int(component, 16) for component in match.groups())
    return f"rgba({r}, {g}, {b}, {alpha:g})"


def resolve_shadow_offset(style: TextBlockStyle) -> ShadowOffset:
    """
    Resolve the shadow displacement.

    A non-zero ``shadow_offset`` applies to both axes; otherwise the
    per-axis values are used as-is (either may be None).
    """
    if style.shadow_offset:
        return ShadowOffset(x=style.shadow_offset, y=style.shadow_offset)
    return ShadowOffset(x=style.shadow_offset_x, y=style.shadow_offset_y)


def resolve_shadow(style: TextBlockStyle) -> Shadow | None:
    """Build the text shadow for a style, or None if it has no shadow color."""
    if style.shadow_color is None:
        return None

    offset = resolve_shadow_offset(style)
    return Shadow(
        color=style.shadow_color,
        blur=style.shadow_blur,
        offset_x=offset.x or 0.0,
        offset_y=offset.y or 0.0,
    )


def resolve_style(style: TextBlockStyle, config: EngineConfig | None = None) -> ResolvedStyle:
    """
    Resolve every optional and substitutable style field.

    Args:
        style: Text style as supplied by the caller.
        config: Engine config supplying defaults.

    Returns:
        ResolvedStyle with no optional fields left to interpret.

    Raises:
        ValueError: If alpha is combined with a non-hex color.
    """
    config = config or EngineConfig()
    font = resolve_font(style, config)

    if style.font:
        font_size = parse_font_size(style.font, config.default_font_size)
    else:
        font_size = style.font_size or config.default_font_size

    line_height = style.line_height if style.line_height is not None else config.default_line_height

    return ResolvedStyle(
        text=style.text,
        align=style.align,
        valign=style.valign,
        font=font,
        font_size=font_size,
        padding=resolve_padding(style),
        color=resolve_color(style.color or config.default_color, style.alpha),
        line_height=line_height,
        shadow=resolve_shadow(style),
        decoration=style.decoration,
    )
