"""Truchet tiles.

Every tile meets its neighbours at edge midpoints (curves, weave) or corners
(diagonals, triangles), so a grid of randomly rotated tiles forms continuous
paths. The background is the last palette color and the stroke the first;
complexity scales the stroke weight.
"""

import math

HALF_PI = math.pi / 2
OUTLINE_FALLBACK = (0, 0, 0)


def _weight(complexity):
    return 0.6 + 0.8 * complexity


def _curve_arcs(surface, size, rotation, color, width):
    """Two quarter arcs of radius size/2 joining adjacent edge midpoints."""
    r = size / 2
    if rotation == 0:
        arcs = ((0, 0, 0.0), (size, size, math.pi))
    else:
        arcs = ((size, 0, HALF_PI), (0, size, 3 * HALF_PI))
    for cx, cy, start in arcs:
        surface.stroke_arc(cx, cy, r, start, start + HALF_PI, color, width,
                           cap="round")


def curved(surface, size, colors, rng, complexity=0.5):
    bg, fg = colors[-1], colors[0]
    surface.fill_rect(0, 0, size, size, bg)
    _curve_arcs(surface, size, rng.randint(2), fg,
                size * 0.35 * _weight(complexity))


def outlined(surface, size, colors, rng, complexity=0.5):
    bg, fg = colors[-1], colors[0]
    outline = colors[1] if len(colors) > 2 else OUTLINE_FALLBACK
    surface.fill_rect(0, 0, size, size, bg)
    rotation = rng.randint(2)
    lw = size * 0.35 * _weight(complexity)
    _curve_arcs(surface, size, rotation, outline, lw + size * 0.1)
    _curve_arcs(surface, size, rotation, fg, lw)


def diagonal(surface, size, colors, rng, complexity=0.5):
    bg, fg = colors[-1], colors[0]
    surface.fill_rect(0, 0, size, size, bg)
    if rng.randint(2) == 0:
        line = [(0, 0), (size, size)]
    else:
        line = [(size, 0), (0, size)]
    surface.stroke_polyline(line, fg, size * 0.15 * _weight(complexity),
                            cap="square")


# Triangle vertices per rotation, as fractions of size.
_TRIANGLES = (
    ((0, 0), (1, 0), (0, 1)),
    ((0, 0), (1, 0), (1, 1)),
    ((1, 0), (1, 1), (0, 1)),
    ((0, 0), (1, 1), (0, 1)),
)


def triangle(surface, size, colors, rng, complexity=0.5):
    bg, fg = colors[-1], colors[0]
    surface.fill_rect(0, 0, size, size, bg)
    tri = _TRIANGLES[rng.randint(4)]
    surface.fill_polygon([(x * size, y * size) for x, y in tri], fg)


def weave(surface, size, colors, rng, complexity=0.5):
    bg = colors[-1]
    fg = colors[rng.randint(max(1, len(colors) - 1))]
    surface.fill_rect(0, 0, size, size, bg)
    lw = size * 0.12 * _weight(complexity)
    strokes = 3 + rng.randint(3)
    rotation = rng.next() * 2 * math.pi
    c = size / 2
    for i in range(strokes):
        radius = size * (rng.next() * 0.5 + 0.25)
        start = rotation + i * math.pi / strokes
        surface.stroke_arc(c, c, radius, start, start + math.pi * 0.8, fg, lw,
                           cap="round")


TRUCHET_PATTERNS = {
    "truchet": (curved, outlined, diagonal, triangle, weave),
    "truchetCurved": (curved,),
    "truchetOutlined": (outlined,),
    "truchetDiagonal": (diagonal,),
    "truchetTriangles": (triangle,),
    "truchetWeave": (weave,),
}
