from __future__ import annotations
import math
from functools import lru_cache
from typing import Optional
from PIL import ImageFont

DEFAULT_FONT_SIZE = 12.0
DEFAULT_FONT_FAMILY = 'sans-serif'
# FreeType rejects pixel sizes much beyond this
MAX_MEASURE_SIZE = 16384.0

GENERIC_FAMILIES = {'serif', 'sans-serif', 'monospace', 'cursive', 'fantasy', 'system-ui'}

@lru_cache(maxsize=64)
def load_font(family: str, size: float):
    """Pillow font for a CSS family list, falling back to Pillow's bundled face."""
    for name in family.split(','):
        name = name.strip().strip('"\'')
        if not name or name.lower() in GENERIC_FAMILIES:
            continue
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default(size)

def measure_text(text: str, font_family: Optional[str] = None,
                 font_size: Optional[float] = None) -> tuple[float, float]:
    """Return the ``(width, height)`` a single line of text occupies.

    Sizes above ``MAX_MEASURE_SIZE`` are measured at that size and scaled up.
    A missing, non-positive or non-finite size measures at ``DEFAULT_FONT_SIZE``.
    """
    size = float(font_size) if font_size else DEFAULT_FONT_SIZE
    if not math.isfinite(size) or size <= 0:
        size = DEFAULT_FONT_SIZE
    if not text:
        return (0.0, size)

    measure_size = min(size, MAX_MEASURE_SIZE)
    font = load_font(font_family or DEFAULT_FONT_FAMILY, measure_size)
    return (float(font.getlength(text)) * size / measure_size, size)
