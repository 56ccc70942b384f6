"""Font identity parsing, registration and loading."""

import functools
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from PIL import ImageFont

from canvastext.fonts.google import get_google_font

logger = logging.getLogger(__name__)

FONTS_DIR = Path(__file__).parent

# CSS pixels per point
PX_PER_PT = 96 / 72

# Font path registry: maps normalized family names to font files.
# Needed for Pillow rendering and for FreeType/HarfBuzz glyph measurement.
_FONT_PATHS: dict[str, Path] = {}

# Candidate files for CSS generic families, tried in order via Pillow's system font lookup
GENERIC_FAMILIES: dict[str, tuple[str, ...]] = {
    "sans-serif": ("DejaVuSans.ttf", "LiberationSans-Regular.ttf", "Arial.ttf", "Helvetica.ttc", "arial.ttf"),
    "serif": ("DejaVuSerif.ttf", "LiberationSerif-Regular.ttf", "Times New Roman.ttf", "Times.ttc", "times.ttf"),
    "monospace": ("DejaVuSansMono.ttf", "LiberationMono-Regular.ttf", "Courier New.ttf", "Menlo.ttc", "cour.ttf"),
}

_FONT_RE = re.compile(
    r"^\s*(?P<prefix>(?:[\w-]+\s+)*?)"
    r"(?P<size>\d+(?:\.\d+)?|\.\d+)(?P<unit>pt|px)"
    r"(?:\s*/\s*\S+)?"
    r"\s+(?P<families>.+?)\s*$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class FontSpec:
    """
    Parsed font identity.

    Attributes:
        size: Nominal size in the identity's unit.
        unit: "pt" or "px".
        families: Family names in preference order, quotes stripped.
        modifiers: Style/weight words that preceded the size (e.g. ("bold",)).
    """

    size: float
    unit: str
    families: tuple[str, ...]
    modifiers: tuple[str, ...] = ()

    @property
    def pixel_size(self) -> float:
        """Size converted to pixels (96 DPI)."""
        return self.size * PX_PER_PT if self.unit == "pt" else self.size

    @property
    def family(self) -> str:
        """Preferred family name."""
        return self.families[0]


def parse_font(identity: str) -> FontSpec:
    """
    Parse a CSS-like font identity such as ``"12pt 'Comic Sans MS'"`` or
    ``"bold 20px Helvetica, sans-serif"``.

    Args:
        identity: Font identity string.

    Returns:
        FontSpec with size, unit, families and modifiers.

    Raises:
        ValueError: If the identity has no "<number>pt" / "<number>px" size followed by a family.
    """
    match = _FONT_RE.match(identity)
    if not match:
        raise ValueError(f"Invalid font identity '{identity}': expected '<size>pt|px <family>'")

    families = tuple(
        part.strip().strip("'\"").strip()
        for part in match.group("families").split(",")
        if part.strip().strip("'\"").strip()
    )
    if not families:
        raise ValueError(f"Invalid font identity '{identity}': no font family")

    return FontSpec(
        size=float(match.group("size")),
        unit=match.group("unit").lower(),
        families=families,
        modifiers=tuple(match.group("prefix").split()),
    )


def parse_font_size(identity: str, default: float) -> float:
    """
    Get the nominal size from a font identity, or ``default`` if it has none.

    Args:
        identity: Font identity string.
        default: Size to use when the identity cannot be parsed.

    Returns:
        Nominal font size (in the identity's own unit).
    """
    try:
        return parse_font(identity).size
    except ValueError:
        logger.warning(f"Could not parse size from font '{identity}', using {default}")
        return default


def _normalize_family(name: str) -> str:
    """
    Normalize a family name for registry lookups.

    Examples:
        "'Comic Sans MS'" → "comic sans ms"
        "DejaVu-Sans" → "dejavu sans"
    """
    name = name.strip().strip("'\"")
    return " ".join(name.replace("-", " ").replace("_", " ").lower().split())


# GENERIC_FAMILIES keyed by normalized name, e.g. "sans serif"
_GENERIC_BY_NAME = {_normalize_family(name): files for name, files in GENERIC_FAMILIES.items()}


def register_font(family: str, font_path: Path) -> None:
    """
    Register a font file under a family name.

    Args:
        family: Family name used in font identities (case-insensitive).
        font_path: Path to a TrueType/OpenType font file.
    """
    _FONT_PATHS[_normalize_family(family)] = Path(font_path)
    load_font.cache_clear()
    logger.info(f"Registered font: {family} from {Path(font_path).name}")


def register_fonts(directory: Path = FONTS_DIR) -> int:
    """
    Register every TTF/OTF font file in a directory.

    Each font is registered under a family derived from its filename, so
    ``Comic-Sans-MS.ttf`` is addressable as ``12pt 'Comic Sans MS'``.

    Args:
        directory: Directory to scan (default: the package fonts directory).

    Returns:
        Number of fonts registered.
    """
    font_files = sorted([*directory.glob("*.ttf"), *directory.glob("*.otf")])

    if not font_files:
        logger.info(f"No font files found in {directory}")
        return 0

    for font_path in font_files:
        register_font(font_path.stem, font_path)

    logger.info(f"Successfully registered {len(font_files)} font(s) from {directory}.")
    return len(font_files)


def get_font_path(family: str) -> Optional[Path]:
    """
    Get the file path for a registered font family.

    Args:
        family: Family name (case-insensitive, quotes allowed).

    Returns:
        Path to the font file, or None if the family is not registered.
    """
    return _FONT_PATHS.get(_normalize_family(family))


def _system_font(candidates: tuple[str, ...], pixel_size: float) -> Optional[ImageFont.FreeTypeFont]:
    """Try loading each candidate through Pillow's system font search."""
    for candidate in candidates:
        try:
            return ImageFont.truetype(candidate, pixel_size)
        except OSError:
            continue
    return None


def _family_candidates(family: str) -> tuple[str, ...]:
    """File names Pillow's system lookup should try for a family."""
    normalized = _normalize_family(family)
    if generic := _GENERIC_BY_NAME.get(normalized):
        return generic
    compact = normalized.title().replace(" ", "")
    return (f"{compact}.ttf", f"{compact}-Regular.ttf", f"{family}.ttf", f"{compact}.otf")


@functools.lru_cache(maxsize=None)
def load_font(identity: str, download: bool = False) -> ImageFont.FreeTypeFont:
    """
    Load a Pillow font for a font identity.

    Resolution priority, for each family in the identity:
    1. Registered font file
    2. System font found by Pillow
    3. Google Fonts (only when ``download`` is True)
    Then Pillow's built-in scalable font.

    Args:
        identity: Font identity, e.g. "12pt 'DejaVu Sans'".
        download: Allow downloading missing families from Google Fonts.

    Returns:
        Pillow font sized in pixels.

    Raises:
        ValueError: If the identity cannot be parsed.
    """
    spec = parse_font(identity)
    pixel_size = spec.pixel_size
    weight = 700 if "bold" in (m.lower() for m in spec.modifiers) else 400

    for family in spec.families:
        if font_path := get_font_path(family):
            return ImageFont.truetype(str(font_path), pixel_size)

        if font := _system_font(_family_candidates(family), pixel_size):
            logger.debug(f"Font '{family}' found on system")
            return font

        if download and _normalize_family(family) not in _GENERIC_BY_NAME:
            logger.info(f"Font '{family}' not found locally, trying Google Fonts...")
            if google_path := get_google_font(family, weight):
                _FONT_PATHS[_normalize_family(family)] = google_path
                return ImageFont.truetype(str(google_path), pixel_size)
            logger.warning(f"Could not download '{family}' from Google Fonts")

    logger.warning(f"Using Pillow's built-in font for '{identity}'")
    return ImageFont.load_default(size=pixel_size)


def font_file_for(identity: str) -> Optional[Path]:
    """
    Get the font file backing a font identity, if any.

    Args:
        identity: Font identity string.

    Returns:
        Path to the font file used for the identity, or None for Pillow's built-in font.
    """
    font = load_font(identity)
    path = getattr(font, "path", None)
    if isinstance(path, (str, Path)) and Path(path).exists():
        return Path(path)
    return None
