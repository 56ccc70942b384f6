"""Drawing surface abstraction used by layout, metrics and compositing."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from canvastext.types import Align, Color, LineCap, Point, TextBaseline


@dataclass(frozen=True)
class Shadow:
    """
    Text shadow parameters.

    Attributes:
        color: Shadow color (None disables the shadow).
        blur: Blur amount in surface units (canvas ``shadowBlur`` semantics).
        offset_x: Horizontal displacement.
        offset_y: Vertical displacement.
    """

    color: Color | None
    blur: float = 0.0
    offset_x: float = 0.0
    offset_y: float = 0.0

    @property
    def visible(self) -> bool:
        """A shadow paints only with a color and some blur or displacement."""
        if self.color is None:
            return False
        return bool(self.blur or self.offset_x or self.offset_y)


class DrawingSurface(ABC):
    """
    Pixel drawing surface with the primitives text layout needs.

    Font arguments are font identity strings (see ``canvastext.fonts.parse_font``).
    """

    @property
    @abstractmethod
    def width(self) -> int:
        """Surface width in surface units."""

    @property
    @abstractmethod
    def height(self) -> int:
        """Surface height in surface units."""

    @abstractmethod
    def measure_text(self, font: str, text: str) -> float:
        """
        Measure the advance width of text.

        Args:
            font: Font identity.
            text: Text to measure.

        Returns:
            Rendered width in surface units.
        """

    @abstractmethod
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
        """
        Paint text at an anchor point.

        Args:
            text: Text to paint.
            x: Anchor X; left edge, center or right edge depending on ``align``.
            y: Anchor Y; interpreted according to ``baseline``.
            font: Font identity.
            color: Fill color.
            align: Horizontal meaning of the anchor.
            baseline: Vertical meaning of the anchor.
            shadow: Optional shadow painted beneath the glyphs.
        """

    @abstractmethod
    def stroke_line(
        self,
        start: Point,
        end: Point,
        *,
        color: Color,
        width: float,
        cap: LineCap = "round",
    ) -> None:
        """
        Stroke a straight line. Lines never cast a shadow.

        Args:
            start: Start point.
            end: End point.
            color: Stroke color.
            width: Stroke width.
            cap: Line cap style.
        """

    @abstractmethod
    def create_probe(self, width: int, height: int) -> DrawingSurface:
        """
        Allocate an off-screen, fully transparent surface of the same kind.

        Args:
            width: Probe width.
            height: Probe height.

        Returns:
            New surface; discarded by the caller after use.
        """

    @abstractmethod
    def pixel_data(self) -> bytes:
        """
        Read back the raw pixels.

        Returns:
            Row-major RGBA bytes, ``width * height * 4`` long.
        """
