"""Greedy word-wrap layout against a surface width."""

import logging

from canvastext.render.surface import DrawingSurface
from canvastext.utils.style import Padding

logger = logging.getLogger(__name__)


def calculate_row_width(surface: DrawingSurface, font: str, text: str, padding: Padding) -> float:
    """
    Measure a row including its horizontal padding.

    Args:
        surface: Surface providing text measurement.
        font: Font identity.
        text: Row text.
        padding: Resolved padding.

    Returns:
        Text width plus left and right padding.
    """
    return surface.measure_text(font, text) + padding.left + padding.right


def split_words(text: str) -> list[str]:
    """Split text into words; any run of whitespace is one separator."""
    return text.split()


def make_word_wrap_rows(
    surface: DrawingSurface,
    font: str,
    text: str,
    padding: Padding,
    max_width: float | None = None,
) -> list[str]:
    """
    Break text into rows that fit the surface width.

    Greedy, single pass: a word joins the current row unless the widened row
    would reach ``max_width``, in which case the current row is closed first.
    A word wider than the surface on its own gets a row to itself and is never
    split. Whitespace-only text produces no rows.

    Args:
        surface: Surface providing text measurement (and the default width).
        font: Font identity.
        text: Text to wrap.
        padding: Resolved padding; left and right count against the width.
        max_width: Width budget (default: the surface width).

    Returns:
        Rows in order, words joined by single spaces.
    """
    if max_width is None:
        max_width = surface.width

    words = split_words(text)
    rows: list[str] = []
    row_words: list[str] = []

    for word in words:
        row_width = calculate_row_width(surface, font, " ".join([*row_words, word]), padding)
        if row_width >= max_width and row_words:
            rows.append(" ".join(row_words))
            row_words = []
        row_words.append(word)

    if row_words:
        rows.append(" ".join(row_words))

    logger.debug(f"Wrapped {len(words)} word(s) into {len(rows)} row(s) at width {max_width}")
    return rows
