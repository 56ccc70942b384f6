"""Pillow-backed drawing surface and image helpers."""

from __future__ import annotations

import math
import re
from io import BytesIO

from PIL import Image, ImageColor, ImageDraw, ImageFilter

from canvastext.fonts import load_font
from canvastext.render.surface import DrawingSurface, Shadow
from canvastext.types import Align, Color, LineCap, Point, RGBAColor, TextBaseline

# Pillow anchor letters for canvas-style alignment and baselines
_HORIZONTAL_ANCHORS = {"left": "l", "center": "m", "right": "r"}
_VERTICAL_ANCHORS = {"top": "a", "hanging": "a", "middle": "m", "alphabetic": "s", "bottom": "d"}

# CSS rgba() with a fractional alpha, which ImageColor does not accept
_RGBA_RE = re.compile(
    r"^rgba\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d*\.?\d+)\s*\)$", re.IGNORECASE
)


def to_rgba(color: Color) -> RGBAColor:
    """
    Convert a color to an RGBA tuple.

    Args:
        color: Hex string, CSS color name, ``rgb()``/``rgba()`` string (alpha 0-1),
               or an RGB/RGBA tuple of 0-255 ints.

    Returns:
        Tuple of (r, g, b, a) in 0-255 range.

    Raises:
        ValueError: If the color string is not understood.
    """
    if isinstance(color, tuple):
        if len(color) == 3:
            return (color[0], color[1], color[2], 255)
        if len(color) == 4:
            return (color[0], color[1], color[2], color[3])
        raise ValueError(f"Color tuple must have 3 or 4 components, got: {color}")

    if match := _RGBA_RE.match(color.strip()):
        r, g, b, alpha = match.groups()
        return (int(r), int(g), int(b), round(min(1.0, float(alpha)) * 255))

    rgb = ImageColor.getrgb(color)
    if len(rgb) == 3:
        return (rgb[0], rgb[1], rgb[2], 255)
    return rgb  # type: ignore[return-value]


class PillowSurface(DrawingSurface):
    """Drawing surface over a Pillow RGBA image."""

    def __init__(self, image: Image.Image, download_fonts: bool = False) -> None:
        """
        Wrap an image for drawing.

        Args:
            image: Target image; converted to RGBA if necessary.
            download_fonts: Allow fetching unknown font families from Google Fonts.
        """
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        self._image = image
        self.download_fonts = download_fonts

    @classmethod
    def new(
        cls,
        width: int,
        height: int,
        background: Color = (0, 0, 0, 0),
        download_fonts: bool = False,
    ) -> PillowSurface:
        """
        Create a surface on a fresh image.

        Args:
            width: Image width in pixels.
            height: Image height in pixels.
            background: Fill color (default: transparent).
            download_fonts: Allow fetching unknown font families from Google Fonts.

        Returns:
            New PillowSurface.
        """
        image = Image.new("RGBA", (max(0, width), max(0, height)), to_rgba(background))
        return cls(image, download_fonts=download_fonts)

    @property
    def image(self) -> Image.Image:
        """Get the underlying RGBA image."""
        return self._image

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    def _font(self, font: str):
        return load_font(font, self.download_fonts)

    def _new_layer(self) -> tuple[Image.Image, ImageDraw.ImageDraw]:
        layer = Image.new("RGBA", self._image.size, (0, 0, 0, 0))
        return layer, ImageDraw.Draw(layer)

    def measure_text(self, font: str, text: str) -> float:
        return self._font(font).getlength(text)

    def fill_text(
        self,
        text: str,
        x: float,
        y: float,
        *,
        font: str,
        color: Color,
        align: Align = "left",
        baseline: TextBaseline = "top",
        shadow: Shadow | None = None,
    ) -> None:
        pil_font = self._font(font)
        anchor = _HORIZONTAL_ANCHORS[align] + _VERTICAL_ANCHORS[baseline]

        if shadow is not None and shadow.visible:
            shadow_rgba = to_rgba(shadow.color)  # type: ignore[arg-type]
            if shadow_rgba[3] > 0:
                layer, draw = self._new_layer()
                draw.text(
                    (x + shadow.offset_x, y + shadow.offset_y),
                    text,
                    font=pil_font,
                    fill=shadow_rgba,
                    anchor=anchor,
                )
                if shadow.blur > 0:
                    # Canvas shadowBlur is twice the Gaussian standard deviation
                    layer = layer.filter(ImageFilter.GaussianBlur(shadow.blur / 2))
                self._image.alpha_composite(layer)

        layer, draw = self._new_layer()
        draw.text((x, y), text, font=pil_font, fill=to_rgba(color), anchor=anchor)
        self._image.alpha_composite(layer)

    def stroke_line(
        self,
        start: Point,
        end: Point,
        *,
        color: Color,
        width: float,
        cap: LineCap = "round",
    ) -> None:
        rgba = to_rgba(color)
        half = width / 2
        (x1, y1), (x2, y2) = start, end

        if cap == "square":
            length = math.hypot(x2 - x1, y2 - y1) or 1.0
            dx, dy = (x2 - x1) / length * half, (y2 - y1) / length * half
            x1, y1, x2, y2 = x1 - dx, y1 - dy, x2 + dx, y2 + dy

        layer, draw = self._new_layer()
        draw.line([(x1, y1), (x2, y2)], fill=rgba, width=max(1, round(width)))

        if cap == "round" and width > 1:
            for cx, cy in ((x1, y1), (x2, y2)):
                draw.ellipse((cx - half, cy - half, cx + half, cy + half), fill=rgba)

        self._image.alpha_composite(layer)

    def create_probe(self, width: int, height: int) -> PillowSurface:
        return PillowSurface.new(width, height, download_fonts=self.download_fonts)

    def pixel_data(self) -> bytes:
        return self._image.tobytes()


def save_image_to_bytes(img: Image.Image, format: str = "PNG") -> bytes:
    """
    Save PIL Image to bytes.

    Args:
        img: PIL Image object.
        format: Image format (PNG, JPEG, etc.).

    Returns:
        Image as bytes.
    """
    if format.upper() in ("JPEG", "JPG") and img.mode == "RGBA":
        img = img.convert("RGB")
    buffer = BytesIO()
    img.save(buffer, format=format)
    return buffer.getvalue()
