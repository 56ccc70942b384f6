"""Configuration loading and validation."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from canvastext.types import Align, Decoration, HeightMethod, VAlign


class TextBlockStyle(BaseModel):
    """
    Loosely-specified style for one block of text.

    Many fields substitute for each other (``font`` vs ``font_size`` +
    ``font_family``, ``shadow_offset`` vs ``shadow_offset_x``/``shadow_offset_y``,
    ``padding`` vs the per-side values). They are reconciled once by
    ``canvastext.utils.style.resolve_style`` before any layout happens.

    Field names are snake_case; the camelCase spelling (``paddingLeft``,
    ``fontSize``, ``shadowOffsetX``...) is accepted too:

        TextBlockStyle(text="Buy Our Stuff! $49.95!", align="right", paddingLeft=150)
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    text: str = ""
    """Text to lay out. Runs of whitespace act as a single word separator."""

    align: Align = "left"
    """Horizontal alignment of each row."""

    valign: VAlign = "top"
    """Vertical alignment of the whole block."""

    # ========================================================================
    # Padding
    # ========================================================================
    padding: float | None = Field(default=None, ge=0)
    """Shorthand padding applied to every side without an explicit value."""

    padding_left: float | None = Field(default=None, ge=0)
    padding_right: float | None = Field(default=None, ge=0)
    padding_top: float | None = Field(default=None, ge=0)
    padding_bottom: float | None = Field(default=None, ge=0)

    # ========================================================================
    # Font
    # ========================================================================
    font: str | None = None
    """Full font identity (e.g. "bold 20px 'DejaVu Sans'"). Wins over font_size/font_family."""

    font_size: float | None = Field(default=None, gt=0)
    """Font size in points. Default comes from EngineConfig.default_font_size."""

    font_family: str | None = None
    """Font family name. Default comes from EngineConfig.default_font_family."""

    # ========================================================================
    # Color
    # ========================================================================
    color: str | tuple[int, ...] | None = None
    """Fill color: hex string, CSS color, or RGB(A) tuple."""

    alpha: float | None = Field(default=None, ge=0, le=1)
    """Opacity. Only valid together with a 6-digit hex color."""

    line_height: float | None = Field(default=None, gt=0)
    """Row height as a multiple of the measured font height."""

    # ========================================================================
    # Shadow
    # ========================================================================
    shadow_color: str | tuple[int, ...] | None = None
    shadow_blur: float = Field(default=0, ge=0)
    shadow_offset: float | None = None
    """Applies to both axes; overrides shadow_offset_x/shadow_offset_y when non-zero."""

    shadow_offset_x: float | None = None
    shadow_offset_y: float | None = None

    decoration: Decoration = "none"
    """Line decoration stroked under or through each row."""


class EngineConfig(BaseModel):
    """
    Engine-wide settings for font metrics and style defaults.

    All parameters have sensible defaults. Override only what you need:

        EngineConfig(height_method="glyph", default_line_height=1.2)
    """

    model_config = ConfigDict(extra="forbid")

    default_line_height: float = Field(default=1.5, gt=0)
    """Line height multiplier used when a style leaves line_height unset."""

    track_descenders: bool = True
    """Measure descender height so bottom-aligned blocks keep their descenders on the surface."""

    height_method: HeightMethod = "canvas"
    """How font heights are measured: pixel-scanning probe ("canvas"), nominal size
    ("font_size"), width of "M" ("measure_m") or FreeType/HarfBuzz glyph extents ("glyph")."""

    m_height_factor: float = Field(default=1.2, gt=0)
    """Multiplier used by the "font_size" and "measure_m" height methods."""

    default_font_size: float = Field(default=12, gt=0)
    """Font size in points when a style sets neither font nor font_size."""

    default_font_family: str = "sans-serif"
    """Font family when a style sets neither font nor font_family."""

    default_color: str = "#000000"
    """Fill color when a style leaves color unset."""

    probe_text: str = "M"
    """Probe string whose ink extent defines the font height."""

    descender_probe_text: str = "Mqypgj"
    """Probe string with descenders; its extent minus the height is the descender height."""

    probe_inset: int = Field(default=10, ge=0)
    """Distance from the probe surface's top-left corner at which probes are drawn."""

    download_fonts: bool = False
    """Allow fetching unknown font families from Google Fonts."""


class Config(BaseModel):
    """Root configuration: engine settings plus an optional default style."""

    engine: EngineConfig = Field(default_factory=EngineConfig)
    style: TextBlockStyle | None = None


def load_config(config_path: Path | None = None) -> Config:
    """
    Load configuration from TOML file.

    The file may contain an ``[engine]`` table (EngineConfig fields) and a
    ``[style]`` table (TextBlockStyle fields, snake_case or camelCase).

    Args:
        config_path: Path to config file. If None, looks for canvastext.toml in current directory.

    Returns:
        Validated Config object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config is invalid.
    """
    if config_path is None:
        config_path = Path.cwd() / "canvastext.toml"

    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create one with [engine] and/or [style] tables, or omit --config."
        )

    with open(config_path, "rb") as f:
        config_dict = tomllib.load(f)

    return Config(**config_dict)
