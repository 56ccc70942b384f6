"""Drawing surfaces and image helpers."""

from canvastext.render.image import (
    PillowSurface,
    save_image_to_bytes,
    to_rgba,
)
from canvastext.render.surface import DrawingSurface, Shadow

__all__ = [
    "DrawingSurface",
    "PillowSurface",
    "Shadow",
    "save_image_to_bytes",
    "to_rgba",
]
