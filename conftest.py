"""Shared fixtures: a deterministic drawing surface with synthetic glyph ink."""

import pytest

from canvastext.config import EngineConfig
from canvastext.render.surface import DrawingSurface
from canvastext.utils.metrics import FontMetricsEngine

DESCENDER_CHARS = set("gjpqy")


class FakeSurface(DrawingSurface):
    """
    Surface where every character advances ``advance`` units and probe glyphs
    ink a fixed band of rows.

    Drawing ``M`` at y inks rows ``y + ink_top`` through ``y + ink_top + cap_height``;
    text containing descender letters inks ``descender`` rows further down.
    """

    def __init__(
        self,
        width=100,
        height=100,
        advance=10,
        ink_top=3,
        cap_height=8,
        descender=2,
        has_ink=True,
        _root=None,
    ):
        self._width = width
        self._height = height
        self.advance = advance
        self.ink_top = ink_top
        self.cap_height = cap_height
        self.descender = descender
        self.has_ink = has_ink
        self.calls = []
        self.probes_created = 0
        self._root = _root
        self._pixels = bytearray(max(0, width) * max(0, height) * 4)

    @property
    def width(self):
        return self._width

    @property
    def height(self):
        return self._height

    def measure_text(self, font, text):
        return len(text) * self.advance

    def fill_text(self, text, x, y, *, font, color, align="left", baseline="top", shadow=None):
        self.calls.append(
            {"op": "fill_text", "text": text, "x": x, "y": y, "font": font,
             "color": color, "align": align, "baseline": baseline, "shadow": shadow}
        )
        if self.has_ink and text.strip():
            self._ink(text, int(x), int(y))

    def stroke_line(self, start, end, *, color, width, cap="round"):
        self.calls.append(
            {"op": "stroke_line", "start": start, "end": end, "color": color, "width": width, "cap": cap}
        )

    def create_probe(self, width, height):
        root = self._root or self
        root.probes_created += 1
        return FakeSurface(
            width, height, self.advance, self.ink_top, self.cap_height,
            self.descender, self.has_ink, _root=root,
        )

    def pixel_data(self):
        return bytes(self._pixels)

    def _ink(self, text, x, y):
        first = y + self.ink_top
        last = first + self.cap_height
        if DESCENDER_CHARS & set(text):
            last += self.descender
        x_end = min(self._width, x + int(self.measure_text("", text)))
        for row in range(max(0, first), min(self._height, last + 1)):
            for col in range(max(0, x), x_end):
                self._pixels[(row * self._width + col) * 4 + 3] = 255

    @property
    def fills(self):
        return [call for call in self.calls if call["op"] == "fill_text"]

    @property
    def strokes(self):
        return [call for call in self.calls if call["op"] == "stroke_line"]


@pytest.fixture
def surface():
    """100x100 fake surface, 10 units per character."""
    return FakeSurface()


@pytest.fixture
def engine():
    """Fresh metrics engine with default settings and its own cache."""
    return FontMetricsEngine(EngineConfig())
