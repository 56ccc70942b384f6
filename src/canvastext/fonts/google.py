"""Google Fonts downloader and on-disk cache."""

import logging
import re
from pathlib import Path
from typing import Optional

import requests

logger = logging.getLogger(__name__)

# Cache directory for downloaded Google Fonts
CACHE_DIR = Path.home() / ".cache" / "canvastext" / "fonts"

# The CSS v1 endpoint serves TrueType URLs, which Pillow and FreeType both read
CSS_API_URL = "https://fonts.googleapis.com/css"


def get_google_font(family: str, weight: int = 400, cache_dir: Path = CACHE_DIR) -> Optional[Path]:
    """
    Fetch a Google Font and return the path to the cached TTF file.

    Args:
        family: Font family name (e.g., "Orbitron", "Open Sans").
        weight: Font weight (400 regular, 700 bold).
        cache_dir: Directory holding downloaded fonts.

    Returns:
        Path to the cached TTF file, or None if the download failed.
    """
    cache_dir.mkdir(parents=True, exist_ok=True)
    cache_path = cache_dir / f"{family.replace(' ', '')}-{weight}.ttf"

    if cache_path.exists():
        logger.debug(f"Using cached Google Font: {cache_path.name}")
        return cache_path

    params = {"family": f"{family}:{weight}", "display": "swap"}

    try:
        logger.info(f"Downloading Google Font: {family} (weight {weight})")
        css_response = requests.get(CSS_API_URL, params=params, timeout=10)
        css_response.raise_for_status()

        if not (font_file_url := extract_font_url(css_response.text)):
            logger.error(f"No TrueType source in Google Fonts CSS for {family}")
            return None

        font_response = requests.get(font_file_url, timeout=30)
        font_response.raise_for_status()
    except requests.RequestException as e:
        logger.error(f"Failed to download Google Font {family} (weight {weight}): {e}")
        return None

    cache_path.write_bytes(font_response.content)
    logger.info(f"Downloaded and cached Google Font: {cache_path.name}")
    return cache_path


def extract_font_url(css_content: str) -> Optional[str]:
    """
    Find the TTF URL in an @font-face stylesheet.

    Args:
        css_content: CSS returned by the Google Fonts API.

    Returns:
        URL of the font file, or None if the stylesheet has no TTF source.
    """
    for pattern in (r"src:\s*url\((https://[^)]+\.ttf)\)", r"(https://[^\s'\"()]+\.ttf)"):
        if match := re.search(pattern, css_content):
            return match.group(1)
    return None
