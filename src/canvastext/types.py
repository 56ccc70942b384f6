"""Type aliases used across the canvastext package."""

from typing import Literal, Tuple, Union

# Colors: CSS-style strings or surface-native RGB/RGBA tuples (0-255)
RGBColor = Tuple[int, int, int]
RGBAColor = Tuple[int, int, int, int]
Color = Union[str, RGBColor, RGBAColor]

# Measurements (drawing-surface units, i.e. pixels for PillowSurface)
Point = Tuple[float, float]

# Alignment options
Align = Literal["left", "center", "right"]
VAlign = Literal["top", "middle", "bottom"]
TextBaseline = Literal["top", "hanging", "middle", "alphabetic", "bottom"]

# Line decoration options
Decoration = Literal["none", "underline", "strikethrough"]
LineCap = Literal["butt", "round", "square"]

# Font height measurement strategies
HeightMethod = Literal["canvas", "font_size", "measure_m", "glyph"]
