"""Renders a count into a PNG using the built-in pixel font."""

from __future__ import annotations

import io
from dataclasses import dataclass

from PIL import Image

from .errors import RenderFailure
from .glyphs import GLYPH_HEIGHT, GLYPH_WIDTH, GLYPHS, glyph_pixels

PAD_DIGIT = "0"
GLYPH_KERN = 1
BORDER = 1
GROUP_SIZE = 3
GROUP_GAP = 3
FOREGROUND = (255, 255, 255, 255)
BACKGROUND = (0, 0, 0, 0)

# Alpha masks, built once per process.
_MASKS = {
    digit: Image.frombytes("L", (GLYPH_WIDTH, GLYPH_HEIGHT), bytes(glyph_pixels(digit)))
    for digit in GLYPHS
}


@dataclass(frozen=True)
class RenderedImage:
    data: bytes
    width: int
    height: int
    digits: str

    content_type = "image/png"


def pad_digits(count: int, min_width: int) -> str:
    """Decimal digits of ``count``, left-padded with PAD_DIGIT to ``min_width``."""
    return str(count).rjust(min_width, PAD_DIGIT)


def _group_break_after(index: int, total: int, group_digits: bool) -> bool:
    remaining = total - index - 1
    return group_digits and remaining > 0 and remaining % GROUP_SIZE == 0


def image_size(digit_count: int, group_digits: bool = False) -> tuple[int, int]:
    gaps = (digit_count - 1) // GROUP_SIZE if group_digits and digit_count else 0
    width = 2 * BORDER + digit_count * (GLYPH_WIDTH + GLYPH_KERN) + gaps * GROUP_GAP
    return width, GLYPH_HEIGHT + 2 * BORDER


def draw(digits: str, group_digits: bool = False) -> Image.Image:
    """Blit the glyphs for ``digits`` left to right onto a transparent canvas."""
    size = image_size(len(digits), group_digits)
    canvas = Image.new("RGBA", size, BACKGROUND)
    x = BORDER
    for i, digit in enumerate(digits):
        mask = _MASKS.get(digit)
        if mask is None:
            raise RenderFailure(f"no glyph for {digit!r}")
        canvas.paste(FOREGROUND, (x, BORDER, x + GLYPH_WIDTH, BORDER + GLYPH_HEIGHT), mask)
        x += GLYPH_WIDTH + GLYPH_KERN
        if _group_break_after(i, len(digits), group_digits):
            x += GROUP_GAP
    return canvas


def render(count: int, min_width: int, group_digits: bool = False) -> RenderedImage:
    """Render ``count`` as a PNG at least ``min_width`` digits wide.

    Identical arguments always produce identical bytes.
    """
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise RenderFailure(f"count must be a non-negative integer, got {count!r}")
    if min_width < 0:
        raise RenderFailure(f"min_width must be >= 0, got {min_width!r}")

    digits = pad_digits(count, min_width)
    image = draw(digits, group_digits)
    buf = io.BytesIO()
    try:
        image.save(buf, format="PNG")
    except (OSError, ValueError) as e:
        raise RenderFailure(f"PNG encoding failed: {e}") from e
    return RenderedImage(buf.getvalue(), image.width, image.height, digits)
