#!/usr/bin/env python3
"""Tests for row positioning, decoration and covered area."""

import pytest

from conftest import FakeSurface
from canvastext.config import EngineConfig, TextBlockStyle
from canvastext.utils.compositor import first_row_y, render_word_wrap_rows, row_anchor_x
from canvastext.utils.metrics import FontMetrics
from canvastext.utils.style import resolve_style

METRICS = FontMetrics(height=20, baseline_offset=3, descender_height=4)


def _style(**fields):
    fields.setdefault("line_height", 1)
    return resolve_style(TextBlockStyle(**fields), EngineConfig())


def test_bottom_alignment_reserves_descender_and_padding():
    style = _style(valign="bottom", padding_bottom=5)
    assert first_row_y(style, 100, 2, 20, 4) == 51


def test_middle_alignment_centers_block():
    assert first_row_y(_style(valign="middle", padding=7), 100, 2, 20, 4) == 30


def test_top_alignment_uses_top_padding():
    assert first_row_y(_style(padding_top=6), 100, 3, 20, 4) == 6


@pytest.mark.parametrize(
    "align, expected",
    [("left", 12), ("right", 92), ("center", 50)],
)
def test_row_anchor(align, expected):
    style = _style(align=align, padding_left=12, padding_right=8)
    assert row_anchor_x(style, 100) == expected


def test_rows_drawn_top_down_with_baseline_correction():
    surface = FakeSurface()
    render_word_wrap_rows(surface, _style(), ["one", "two"], METRICS)
    assert [(call["text"], call["y"]) for call in surface.fills] == [("one", -3), ("two", 17)]
    assert all(call["baseline"] == "top" for call in surface.fills)


def test_line_height_centers_glyphs_in_line_box():
    surface = FakeSurface()
    render_word_wrap_rows(surface, _style(line_height=1.5), ["one", "two"], METRICS)
    # row height 30, glyphs shifted down by (30 - 20) / 2
    assert [call["y"] for call in surface.fills] == [2, 32]


def test_bottom_scenario_first_row_y():
    surface = FakeSurface()
    style = _style(valign="bottom", padding_bottom=5)
    render_word_wrap_rows(surface, style, ["one", "two"], METRICS)
    assert [call["y"] for call in surface.fills] == [51 - 3, 71 - 3]


@pytest.mark.parametrize("align", ["left", "center", "right"])
def test_alignment_passed_to_surface(align):
    surface = FakeSurface()
    render_word_wrap_rows(surface, _style(align=align), ["row"], METRICS)
    assert surface.fills[0]["align"] == align


def test_area_sums_font_height_times_row_width():
    surface = FakeSurface()
    style = _style(padding_left=5, padding_right=5)
    area = render_word_wrap_rows(surface, style, ["abc", "de"], METRICS)
    assert area == 20 * (30 + 10) + 20 * (20 + 10)


def test_no_rows_paint_nothing():
    surface = FakeSurface()
    assert render_word_wrap_rows(surface, _style(), [], METRICS) == 0
    assert surface.calls == []


def test_zero_height_font_collapses_rows():
    surface = FakeSurface()
    area = render_word_wrap_rows(surface, _style(), ["a", "b"], FontMetrics(height=0))
    assert area == 0
    assert [call["y"] for call in surface.fills] == [0, 0]


def test_fill_uses_resolved_color_and_shadow():
    surface = FakeSurface()
    style = _style(color="#102030", alpha=0.5, shadow_color="black", shadow_offset=2)
    render_word_wrap_rows(surface, style, ["hi"], METRICS)
    call = surface.fills[0]
    assert call["color"] == "rgba(16, 32, 48, 0.5)"
    assert call["shadow"].offset_x == 2
    assert call["shadow"].offset_y == 2


def test_no_decoration_strokes_nothing():
    surface = FakeSurface()
    render_word_wrap_rows(surface, _style(), ["hi"], METRICS)
    assert surface.strokes == []


def test_underline_position_and_extent():
    surface = FakeSurface()
    style = _style(decoration="underline", padding_left=10, padding_right=4, color="#FF0000")
    render_word_wrap_rows(surface, style, ["abcd", "ef"], METRICS)

    first, second = surface.strokes
    # y + font height + min(20, height / 2), spanning the text only
    assert first["start"] == (10, 30)
    assert first["end"] == (50, 30)
    assert second["start"] == (10, 50)
    assert second["end"] == (30, 50)
    assert first["width"] == 2
    assert first["color"] == "#FF0000"
    assert first["cap"] == "round"


def test_strikethrough_position():
    surface = FakeSurface()
    render_word_wrap_rows(surface, _style(decoration="strikethrough", line_height=2), ["abcd"], METRICS)
    stroke = surface.strokes[0]
    # row height 40: y + 40 / 2 + min(8, 2 * stroke width)
    assert stroke["start"][1] == 24


@pytest.mark.parametrize(
    "align, start_x",
    [("left", 0), ("right", 100 - 40), ("center", 50 - 20)],
)
def test_decoration_start_follows_alignment(align, start_x):
    surface = FakeSurface()
    render_word_wrap_rows(surface, _style(decoration="underline", align=align), ["abcd"], METRICS)
    stroke = surface.strokes[0]
    assert stroke["start"][0] == start_x
    assert stroke["end"][0] == start_x + 40


def test_thin_fonts_keep_minimum_stroke_width():
    surface = FakeSurface()
    render_word_wrap_rows(surface, _style(decoration="underline"), ["a"], FontMetrics(height=4))
    assert surface.strokes[0]["width"] == 1
