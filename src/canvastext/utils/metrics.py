"""Font metrics the drawing surface does not expose: height, baseline offset, descender."""

from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

import freetype
import uharfbuzz as hb

from canvastext.config import EngineConfig
from canvastext.fonts import font_file_for, parse_font
from canvastext.render.surface import DrawingSurface

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FontMetrics:
    """
    Measured vertical metrics for one font identity.

    Attributes:
        height: Vertical ink extent of the probe glyph ("M").
        baseline_offset: Distance from a "top"-anchored draw position to the first ink row.
        descender_height: Extra ink extent below the probe glyph, from glyphs like "g", "j", "y".
    """

    height: float
    baseline_offset: float = 0.0
    descender_height: float = 0.0


@dataclass(frozen=True)
class InkExtent:
    """First and last pixel rows containing ink."""

    first: int
    last: int

    @property
    def height(self) -> int:
        return self.last - self.first


def scan_ink_rows(data: bytes, width: int, height: int) -> InkExtent | None:
    """
    Find the vertical extent of ink in an RGBA pixel buffer.

    Args:
        data: Row-major RGBA bytes.
        width: Buffer width in pixels.
        height: Buffer height in pixels.

    Returns:
        InkExtent of rows with any non-zero alpha, or None if the buffer is empty.
    """
    stride = width * 4
    first: int | None = None
    last = 0

    for y in range(height):
        row_start = y * stride
        # Alpha is every fourth byte
        if any(data[row_start + 3:row_start + stride:4]):
            if first is None:
                first = y
            last = y

    return InkExtent(first, last) if first is not None else None


class FontMetricsCache:
    """
    Process-wide store of font metrics keyed by font identity.

    Entries are written once and never invalidated. Measurement for a given
    key runs under that key's lock, so concurrent callers measure at most once.
    """

    def __init__(self) -> None:
        self._entries: dict[str, FontMetrics] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def __contains__(self, font: str) -> bool:
        return font in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, font: str) -> FontMetrics | None:
        """Get cached metrics, or None if the font has not been measured."""
        return self._entries.get(font)

    def get_or_measure(self, font: str, measure: Callable[[], FontMetrics]) -> FontMetrics:
        """
        Return cached metrics, measuring and storing them on first use.

        Args:
            font: Font identity (cache key).
            measure: Called at most once per key to produce the metrics.

        Returns:
            Metrics for the font.
        """
        if (metrics := self._entries.get(font)) is not None:
            return metrics

        with self._guard:
            lock = self._locks.setdefault(font, threading.Lock())

        with lock:
            if (metrics := self._entries.get(font)) is None:
                metrics = measure()
                self._entries[font] = metrics
            return metrics


class FontMetricsEngine:
    """Measures and memoizes font metrics."""

    def __init__(self, config: EngineConfig | None = None, cache: FontMetricsCache | None = None) -> None:
        """
        Initialize the engine.

        Args:
            config: Engine settings (height method, probe strings, descender tracking).
            cache: Metrics cache to use; pass one to share metrics between engines.
        """
        self.config = config or EngineConfig()
        self.cache = cache if cache is not None else FontMetricsCache()

    def metrics(self, surface: DrawingSurface, font: str, font_size: float) -> FontMetrics:
        """
        Get metrics for a font, measuring on first use.

        Cached metrics are returned even if the font's glyphs have changed since
        (e.g. a font file registered after the first measurement).

        Args:
            surface: Surface providing text measurement and probe surfaces.
            font: Font identity.
            font_size: Nominal font size, used to size the probe surface.

        Returns:
            FontMetrics for the font.
        """
        if (cached := self.cache.get(font)) is not None:
            logger.debug(f"Font metrics cache hit for {font}")
            return cached
        return self.cache.get_or_measure(font, lambda: self._measure(surface, font, font_size))

    def font_height(self, surface: DrawingSurface, font: str, font_size: float) -> float:
        """Get the line height of a font (see ``metrics``)."""
        return self.metrics(surface, font, font_size).height

    def _measure(self, surface: DrawingSurface, font: str, font_size: float) -> FontMetrics:
        method = self.config.height_method

        if method == "font_size":
            metrics = FontMetrics(height=font_size * self.config.m_height_factor)
        elif method == "measure_m":
            metrics = FontMetrics(height=surface.measure_text(font, "M") * self.config.m_height_factor)
        elif method == "glyph" and (font_path := font_file_for(font)) is not None:
            metrics = self._measure_glyphs(font_path, font)
        else:
            if method == "glyph":
                logger.warning(f"No font file for {font}, measuring glyphs by pixel scan")
            metrics = self._measure_pixels(surface, font, font_size)

        logger.info(
            f"Measured {font}: height={metrics.height}, "
            f"baseline_offset={metrics.baseline_offset}, descender={metrics.descender_height}"
        )
        return metrics

    def _probe(self, surface: DrawingSurface, font: str, font_size: float, text: str) -> InkExtent | None:
        """Render probe text off-screen and scan it for ink."""
        inset = self.config.probe_inset
        width = max(1, math.ceil(surface.measure_text(font, text) * 2))
        height = max(1, math.ceil(font_size * 5))

        probe = surface.create_probe(width, height)
        probe.fill_text(text, inset, inset, font=font, color=(0, 0, 0, 255), align="left", baseline="top")
        return scan_ink_rows(probe.pixel_data(), probe.width, probe.height)

    def _measure_pixels(self, surface: DrawingSurface, font: str, font_size: float) -> FontMetrics:
        extent = self._probe(surface, font, font_size, self.config.probe_text)
        if extent is None:
            logger.warning(f"Probe for {font} rendered no ink, using zero metrics")
            return FontMetrics(height=0.0)

        descender = 0.0
        if self.config.track_descenders:
            descender_extent = self._probe(surface, font, font_size, self.config.descender_probe_text)
            if descender_extent is not None:
                descender = float(descender_extent.height - extent.height)

        return FontMetrics(
            height=float(extent.height),
            baseline_offset=float(extent.first - self.config.probe_inset),
            descender_height=descender,
        )

    def _measure_glyphs(self, font_path: Path, font: str) -> FontMetrics:
        """Measure probe extents from glyph outlines with FreeType and HarfBuzz."""
        pixel_size = parse_font(font).pixel_size
        face = freetype.Face(str(font_path))
        face.set_char_size(int(pixel_size * 64))  # 26.6 fixed-point format
        ascender = face.size.ascender / 64

        hb_font = hb.Font(hb.Face(font_path.read_bytes()))
        # Scale so HarfBuzz extents come back in pixels
        hb_font.scale = (face.size.x_ppem, face.size.y_ppem)
        hb.ot_font_set_funcs(hb_font)

        extent = _glyph_extent(hb_font, self.config.probe_text)
        if extent is None:
            return FontMetrics(height=0.0)
        top, bottom = extent

        descender = 0.0
        if self.config.track_descenders:
            if (descender_extent := _glyph_extent(hb_font, self.config.descender_probe_text)) is not None:
                descender = (descender_extent[0] - descender_extent[1]) - (top - bottom)

        return FontMetrics(
            height=top - bottom,
            baseline_offset=ascender - top,
            descender_height=descender,
        )


def _glyph_extent(hb_font: hb.Font, text: str) -> tuple[float, float] | None:
    """
    Shape text and return (top, bottom) of its ink relative to the baseline.

    In HarfBuzz coordinates the baseline is y=0, y_bearing is the distance
    from the baseline to the glyph top and height is negative.
    """
    buf = hb.Buffer()
    buf.add_str(text)
    buf.guess_segment_properties()
    hb.shape(hb_font, buf)

    top = float("-inf")
    bottom = float("inf")
    for info in buf.glyph_infos:
        ext = hb_font.get_glyph_extents(info.codepoint)
        if ext and (ext.width != 0 or ext.height != 0):  # Skip zero-size glyphs like spaces
            top = max(top, ext.y_bearing)
            bottom = min(bottom, ext.y_bearing + ext.height)

    if top == float("-inf"):
        return None
    return top, bottom
