"""Pixel font for the digits 0-9.

Each glyph is GLYPH_HEIGHT rows of GLYPH_WIDTH columns; ``#`` is a lit pixel
and ``.`` is transparent.
"""

GLYPH_WIDTH = 8
GLYPH_HEIGHT = 16

GLYPHS = {
    "0": (
        "...##...",
        "..####..",
        ".##..##.",
        ".#....#.",
        "##....##",
        "##....##",
        "##....##",
        "##..#.##",
        "##.#..##",
        "##....##",
        "##....##",
        "##....##",
        ".#....#.",
        ".##..##.",
        "..####..",
        "...##...",
    ),
    "1": (
        "...##...",
        "..###...",
        ".####...",
        "##.##...",
        "#..##...",
        "...##...",
        "...##...",
        "...##...",
        "...##...",
        "...##...",
        "...##...",
        "...##...",
        "...##...",
        "...##...",
        "########",
        "########",
    ),
    "2": (
        "...##...",
        ".#####..",
        ".##..##.",
        "##....##",
        "##....##",
        "......##",
        ".....##.",
        ".....##.",
        "....##..",
        "....##..",
        "...##...",
        "...##...",
        "..##....",
        ".###....",
        "########",
        "########",
    ),
    "3": (
        "...##...",
        ".######.",
        "###..##.",
        "##....##",
        "......##",
        "......##",
        ".....##.",
        "...###..",
        "...###..",
        ".....##.",
        "......##",
        "......##",
        "##....##",
        "###..##.",
        ".######.",
        "...##...",
    ),
    "4": (
        ".....##.",
        "....###.",
        "...####.",
        "...#.##.",
        "..##.##.",
        ".##..##.",
        ".##..##.",
        "##...##.",
        "########",
        "########",
        ".....##.",
        ".....##.",
        ".....##.",
        ".....##.",
        "....####",
        "....####",
    ),
    "5": (
        "#######.",
        "#######.",
        "##......",
        "##......",
        "##......",
        "##......",
        "##.###..",
        "#######.",
        ".#...##.",
        "......##",
        "......##",
        "......##",
        "##....##",
        "###..##.",
        ".#####..",
        "...##...",
    ),
    "6": (
        "...##...",
        ".######.",
        ".##..##.",
        "##......",
        "##......",
        "##......",
        "##.##...",
        "#######.",
        "###..##.",
        "##....##",
        "##....##",
        "##....##",
        ".#....#.",
        ".##..##.",
        ".######.",
        "...##...",
    ),
    "7": (
        "########",
        "########",
        "......##",
        "......##",
        ".....##.",
        ".....##.",
        "....##..",
        "....##..",
        "..#####.",
        "..#####.",
        "...##...",
        "...##...",
        "...##...",
        "...##...",
        "...##...",
        "...##...",
    ),
    "8": (
        "...##...",
        ".######.",
        ".##..##.",
        ".#....#.",
        "##....##",
        "##....##",
        ".##..##.",
        ".######.",
        "..####..",
        ".##..##.",
        "###..###",
        "##....##",
        "##....##",
        ".##..##.",
        ".######.",
        "...##...",
    ),
    "9": (
        "...##...",
        ".######.",
        ".##..##.",
        ".#....#.",
        "##....##",
        "##....##",
        "##....##",
        ".##..###",
        ".#######",
        "...##.##",
        "......##",
        "......##",
        "......##",
        ".##..##.",
        ".######.",
        "...##...",
    ),
}


def glyph_pixels(digit):
    """Return the glyph for ``digit`` as a flat list of 0/255 alpha values."""
    rows = GLYPHS[digit]
    return [255 if c == "#" else 0 for row in rows for c in row]


def _check():
    for digit, rows in GLYPHS.items():
        if len(rows) != GLYPH_HEIGHT or any(len(r) != GLYPH_WIDTH for r in rows):
            raise ValueError(f"glyph {digit!r} is not {GLYPH_WIDTH}x{GLYPH_HEIGHT}")


_check()
