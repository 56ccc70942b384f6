#!/usr/bin/env python3
"""Tests for font identity parsing, registration and Google Fonts caching."""

import pytest
import requests

from canvastext import fonts
from canvastext.fonts import google
from canvastext.fonts import get_font_path, load_font, parse_font, parse_font_size, register_font, register_fonts


@pytest.fixture(autouse=True)
def isolated_registry(monkeypatch):
    monkeypatch.setattr(fonts, "_FONT_PATHS", {})
    load_font.cache_clear()
    yield
    load_font.cache_clear()


def test_parse_point_identity():
    spec = parse_font("12pt 'Comic Sans MS'")
    assert spec.size == 12
    assert spec.unit == "pt"
    assert spec.family == "Comic Sans MS"
    assert spec.pixel_size == 16


def test_parse_css_shorthand():
    spec = parse_font("italic bold 20px Helvetica, \"Open Sans\", sans-serif")
    assert spec.size == 20
    assert spec.pixel_size == 20
    assert spec.modifiers == ("italic", "bold")
    assert spec.families == ("Helvetica", "Open Sans", "sans-serif")


def test_parse_numeric_weight_and_line_height():
    spec = parse_font("700 14.5px/1.2 Arial")
    assert spec.size == 14.5
    assert spec.modifiers == ("700",)
    assert spec.family == "Arial"


@pytest.mark.parametrize("identity", ["Helvetica", "12 Arial", "12pt", "", "12em Arial"])
def test_parse_rejects_identities_without_size_and_family(identity):
    with pytest.raises(ValueError):
        parse_font(identity)


def test_parse_font_size_fallback():
    assert parse_font_size("18px Arial", 12) == 18
    assert parse_font_size("Arial", 12) == 12


def test_register_and_lookup_is_case_insensitive(tmp_path):
    font_file = tmp_path / "custom.ttf"
    register_font("My Custom Font", font_file)
    assert get_font_path("my custom font") == font_file
    assert get_font_path("'My-Custom-Font'") == font_file
    assert get_font_path("Other") is None


def test_register_fonts_from_directory(tmp_path):
    (tmp_path / "Comic-Sans-MS.ttf").write_bytes(b"")
    (tmp_path / "Display.otf").write_bytes(b"")
    (tmp_path / "notes.txt").write_text("not a font")

    assert register_fonts(tmp_path) == 2
    assert get_font_path("Comic Sans MS") == tmp_path / "Comic-Sans-MS.ttf"
    assert get_font_path("display") == tmp_path / "Display.otf"


def test_register_fonts_empty_directory(tmp_path):
    assert register_fonts(tmp_path) == 0


def test_unknown_family_falls_back_to_builtin_font():
    font = load_font("12pt 'NoSuchFamilyXyz'")
    assert font.getlength("MM") > font.getlength("M") > 0


def test_load_font_is_memoized():
    assert load_font("10px 'NoSuchFamilyXyz'") is load_font("10px 'NoSuchFamilyXyz'")


def test_load_font_tries_download_when_enabled(monkeypatch):
    requested = []

    def fake_download(family, weight=400):
        requested.append((family, weight))
        return None

    monkeypatch.setattr(fonts, "get_google_font", fake_download)
    load_font("bold 12px 'NoSuchFamilyXyz', sans-serif", download=True)
    assert requested == [("NoSuchFamilyXyz", 700)]


@pytest.mark.parametrize("family", ["sans-serif", "serif", "monospace", "'Sans-Serif'"])
def test_generic_families_use_known_system_files(family):
    expected = fonts.GENERIC_FAMILIES[family.strip("'").lower()]
    assert fonts._family_candidates(family) == expected


def test_extract_font_url_from_css():
    css = "@font-face { font-family: 'Orbitron'; src: url(https://fonts.gstatic.com/s/orbitron/v1/abc.ttf) format('truetype'); }"
    assert google.extract_font_url(css) == "https://fonts.gstatic.com/s/orbitron/v1/abc.ttf"
    assert google.extract_font_url("@font-face { src: local('x'); }") is None


def test_google_font_served_from_cache(tmp_path, monkeypatch):
    cached = tmp_path / "OpenSans-400.ttf"
    cached.write_bytes(b"font")

    def no_network(*args, **kwargs):
        raise AssertionError("network should not be used")

    monkeypatch.setattr(google.requests, "get", no_network)
    assert google.get_google_font("Open Sans", 400, cache_dir=tmp_path) == cached


class _Response:
    def __init__(self, text="", content=b""):
        self.text = text
        self.content = content

    def raise_for_status(self):
        pass


def test_google_font_downloaded_and_cached(tmp_path, monkeypatch):
    css = "src: url(https://fonts.gstatic.com/s/orbitron/v1/abc.ttf)"

    def fake_get(url, params=None, timeout=None):
        if params is not None:
            assert params["family"] == "Orbitron:700"
            return _Response(text=css)
        return _Response(content=b"ttf-bytes")

    monkeypatch.setattr(google.requests, "get", fake_get)
    path = google.get_google_font("Orbitron", 700, cache_dir=tmp_path)
    assert path == tmp_path / "Orbitron-700.ttf"
    assert path.read_bytes() == b"ttf-bytes"


def test_google_font_network_failure_returns_none(tmp_path, monkeypatch):
    def failing_get(*args, **kwargs):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(google.requests, "get", failing_get)
    assert google.get_google_font("Orbitron", 400, cache_dir=tmp_path) is None
