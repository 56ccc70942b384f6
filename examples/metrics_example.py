#!/usr/bin/env python3
"""
Metrics Example: compare font height measurement methods

The pixel-scanning probe ("canvas") is the default; "glyph" reads the
same extents from the font outlines with FreeType and HarfBuzz.
"""

from canvastext import EngineConfig, FontMetricsEngine, PillowSurface

surface = PillowSurface.new(1, 1)
font = "16pt 'DejaVu Sans'"

for method in ("canvas", "glyph", "font_size", "measure_m"):
    engine = FontMetricsEngine(EngineConfig(height_method=method))
    metrics = engine.metrics(surface, font, 16)
    print(
        f"{method:>10}: height={metrics.height:g} "
        f"baseline_offset={metrics.baseline_offset:g} descender={metrics.descender_height:g}"
    )
