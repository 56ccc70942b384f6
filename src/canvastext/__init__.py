"""Word-wrapped text layout and font metrics for pixel drawing surfaces."""

__version__ = "0.1.0"

# High-level Python API
from canvastext.config import Config, EngineConfig, TextBlockStyle, load_config
from canvastext.drawing import configure_default_engine, draw_text, get_default_engine
from canvastext.fonts import register_font, register_fonts
from canvastext.render import DrawingSurface, PillowSurface, Shadow
from canvastext.utils import FontMetrics, FontMetricsCache, FontMetricsEngine

__all__ = [
    "Config",
    "DrawingSurface",
    "EngineConfig",
    "FontMetrics",
    "FontMetricsCache",
    "FontMetricsEngine",
    "PillowSurface",
    "Shadow",
    "TextBlockStyle",
    "configure_default_engine",
    "draw_text",
    "get_default_engine",
    "load_config",
    "register_font",
    "register_fonts",
]
