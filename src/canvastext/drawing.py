"""High-level API: draw a block of word-wrapped text onto a surface."""

import logging
import threading
from typing import Any, Mapping

from canvastext.config import EngineConfig, TextBlockStyle
from canvastext.render.surface import DrawingSurface
from canvastext.utils.compositor import render_word_wrap_rows
from canvastext.utils.layout import make_word_wrap_rows
from canvastext.utils.metrics import FontMetricsEngine
from canvastext.utils.style import resolve_style

logger = logging.getLogger(__name__)

_default_engine: FontMetricsEngine | None = None
_default_engine_lock = threading.Lock()


def get_default_engine() -> FontMetricsEngine:
    """
    Get the process-wide metrics engine.

    Its cache lives for the rest of the process, so each font is measured once.
    """
    global _default_engine
    with _default_engine_lock:
        if _default_engine is None:
            _default_engine = FontMetricsEngine()
        return _default_engine


def draw_text(
    surface: DrawingSurface,
    style: TextBlockStyle | Mapping[str, Any],
    engine: FontMetricsEngine | None = None,
) -> float:
    """
    Draw word-wrapped text on a surface.

    Takes font size, per-side padding, line height, horizontal and vertical
    alignment, color, shadow and decoration into account:

        draw_text(surface, {
            "text": "Buy Our Stuff! $49.95!",
            "align": "right",
            "valign": "bottom",
            "paddingLeft": 150,
            "paddingRight": 10,
            "paddingBottom": 5,
            "color": "#FF0000",
            "fontSize": 20,
        })

    Args:
        surface: Surface to draw on; its width is the wrap budget.
        style: TextBlockStyle, or a dict validated into one (snake_case or camelCase keys).
        engine: Metrics engine; defaults to the process-wide engine.

    Returns:
        Covered area: sum over rows of font height × row width.

    Raises:
        pydantic.ValidationError: If a style dict is invalid.
        ValueError: If alpha is combined with a non-hex color.
    """
    if not isinstance(style, TextBlockStyle):
        style = TextBlockStyle.model_validate(style)

    engine = engine or get_default_engine()
    resolved = resolve_style(style, engine.config)

    rows = make_word_wrap_rows(surface, resolved.font, resolved.text, resolved.padding)
    metrics = engine.metrics(surface, resolved.font, resolved.font_size)

    area = render_word_wrap_rows(surface, resolved, rows, metrics)
    logger.debug(f"Drew {len(rows)} row(s) in {resolved.font}, area {area}")
    return area


def configure_default_engine(config: EngineConfig) -> FontMetricsEngine:
    """
    Replace the process-wide engine with one using ``config``.

    Metrics measured by the previous engine are discarded.

    Args:
        config: Engine settings.

    Returns:
        The new default engine.
    """
    global _default_engine
    with _default_engine_lock:
        _default_engine = FontMetricsEngine(config)
        return _default_engine
