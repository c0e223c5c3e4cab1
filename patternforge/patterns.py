"""Tile pattern catalog.

Each pattern is a plain function ``pattern(surface, size, colors, rng,
complexity)`` drawing into the local square [0, size] x [0, size]; the
compositor translates and clips the surface to the cell beforehand. Patterns
keep no state and only touch the surface and the random stream they are
handed.
"""

import math

from .surface import cubic_bezier, rotate_points
from .truchet import TRUCHET_PATTERNS

HALF_PI = math.pi / 2
RULE_COLOR = (26, 26, 26)

# Corner positions (as fractions of size) and the start angle of the
# quarter sector that lies inside the cell for that corner.
_CORNERS = ((0, 0), (1, 0), (1, 1), (0, 1))
_CORNER_START = (0.0, HALF_PI, math.pi, 3 * HALF_PI)


def pick_other(rng, colors, *exclude):
    """Pick a color not in ``exclude``; any color if none is left."""
    rest = [c for c in colors if c not in exclude]
    return rng.pick(rest if rest else list(colors))


def solid_block(surface, size, colors, rng, complexity=0.0):
    surface.fill_rect(0, 0, size, size, rng.pick(colors))


def _quarter_sector(surface, size, corner, radius, color):
    fx, fy = _CORNERS[corner]
    start = _CORNER_START[corner]
    surface.fill_pie(fx * size, fy * size, radius, start, start + HALF_PI,
                     color)


# ---------------------------------------------------------------------------
# Quarter circles
# ---------------------------------------------------------------------------

def quarter_circle(surface, size, colors, rng, complexity=0.0):
    corner = rng.randint(4)
    bg = rng.pick(colors)
    fg = pick_other(rng, colors, bg)
    surface.fill_rect(0, 0, size, size, bg)
    _quarter_sector(surface, size, corner, size, fg)


def opposite_quarters(surface, size, colors, rng, complexity=0.0):
    horizontal = rng.next() > 0.5
    bg = rng.pick(colors)
    fg1 = pick_other(rng, colors, bg)
    fg2 = pick_other(rng, colors, bg)
    surface.fill_rect(0, 0, size, size, bg)
    if horizontal:
        _quarter_sector(surface, size, 0, size, fg1)
        _quarter_sector(surface, size, 2, size, fg2)
    else:
        _quarter_sector(surface, size, 1, size, fg1)
        _quarter_sector(surface, size, 3, size, fg2)


def edge_half_circle(surface, size, colors, rng, complexity=0.0):
    edge = rng.randint(4)
    bg = rng.pick(colors)
    fg = pick_other(rng, colors, bg)
    surface.fill_rect(0, 0, size, size, bg)
    half = size / 2
    if edge == 0:
        surface.fill_pie(half, 0, half, 0, math.pi, fg)
    elif edge == 1:
        surface.fill_pie(size, half, half, HALF_PI, 3 * HALF_PI, fg)
    elif edge == 2:
        surface.fill_pie(half, size, half, math.pi, 2 * math.pi, fg)
    else:
        surface.fill_pie(0, half, half, -HALF_PI, HALF_PI, fg)


# ---------------------------------------------------------------------------
# Concentric
# ---------------------------------------------------------------------------

def concentric_quarters(surface, size, colors, rng, complexity=0.0):
    corner = rng.randint(4)
    shuffled = rng.shuffle(colors)[:3]
    for i, radius in enumerate((size, size * 0.66, size * 0.33)):
        _quarter_sector(surface, size, corner, radius,
                        shuffled[i % len(shuffled)])


def target_rings(surface, size, colors, rng, complexity=0.0):
    bg = rng.pick(colors)
    shuffled = rng.shuffle(colors)[:4]
    surface.fill_rect(0, 0, size, size, bg)
    c = size / 2
    for i, radius in enumerate((0.45, 0.32, 0.2, 0.1)):
        surface.fill_circle(c, c, size * radius, shuffled[i % len(shuffled)])


def arc_stripes(surface, size, colors, rng, complexity=0.0):
    corner = rng.randint(4)
    color1 = rng.pick(colors)
    color2 = pick_other(rng, colors, color1)
    color3 = pick_other(rng, colors, color1)
    _quarter_sector(surface, size, corner, size, color1)
    _quarter_sector(surface, size, corner, size * 0.66, color2)
    _quarter_sector(surface, size, corner, size * 0.33, color3)


# ---------------------------------------------------------------------------
# Shadow blocks
# ---------------------------------------------------------------------------

def square_with_shadow(surface, size, colors, rng, complexity=0.0):
    bg = rng.pick(colors)
    shadow = pick_other(rng, colors, bg)
    square = pick_other(rng, colors, bg, shadow)
    side = size * 0.6
    off = size * 0.2
    surface.fill_rect(0, 0, size, size, bg)
    surface.fill_polygon([(off + side, off), (size, off), (size, size),
                          (off, size), (off, off + side),
                          (off + side, off + side)], shadow)
    surface.fill_rect(off, off, side, side, square)


def triangle_shadow(surface, size, colors, rng, complexity=0.0):
    bg = rng.pick(colors)
    shadow = pick_other(rng, colors, bg)
    fg = pick_other(rng, colors, bg, shadow)
    surface.fill_rect(0, 0, size, size, bg)
    surface.fill_polygon([(0, size), (size, size), (size, 0)], shadow)
    surface.fill_rect(size * 0.15, size * 0.15, size * 0.5, size * 0.5, fg)


def offset_rectangles(surface, size, colors, rng, complexity=0.0):
    color1 = rng.pick(colors)
    color2 = pick_other(rng, colors, color1)
    color3 = pick_other(rng, colors, color1, color2)
    surface.fill_rect(0, 0, size, size, color1)
    surface.fill_rect(size * 0.1, size * 0.3, size * 0.5, size * 0.6, color2)
    surface.fill_rect(size * 0.4, size * 0.1, size * 0.5, size * 0.5, color3)


# ---------------------------------------------------------------------------
# Mondrian
# ---------------------------------------------------------------------------

def mondrian_split(surface, size, colors, rng, complexity=0.0):
    sx = size * (0.3 + rng.next() * 0.4)
    sy = size * (0.3 + rng.next() * 0.4)
    c = rng.shuffle(colors)[:4]
    surface.fill_rect(0, 0, sx, sy, c[0])
    surface.fill_rect(sx, 0, size - sx, sy, c[1 % len(c)])
    surface.fill_rect(0, sy, sx, size - sy, c[2 % len(c)])
    surface.fill_rect(sx, sy, size - sx, size - sy, c[3 % len(c)])
    lw = size * 0.03
    surface.stroke_polyline([(sx, 0), (sx, size)], RULE_COLOR, lw)
    surface.stroke_polyline([(0, sy), (size, sy)], RULE_COLOR, lw)


def mondrian_bars(surface, size, colors, rng, complexity=0.0):
    c = rng.shuffle(colors)[:3]
    h1 = size * (0.2 + rng.next() * 0.3)
    h2 = size * (0.2 + rng.next() * 0.3)
    surface.fill_rect(0, 0, size, h1, c[0])
    surface.fill_rect(0, h1, size, h2, c[1 % len(c)])
    surface.fill_rect(0, h1 + h2, size, size - h1 - h2, c[2 % len(c)])
    lw = size * 0.03
    surface.stroke_polyline([(0, h1), (size, h1)], RULE_COLOR, lw)
    surface.stroke_polyline([(0, h1 + h2), (size, h1 + h2)], RULE_COLOR, lw)


def mondrian_accent(surface, size, colors, rng, complexity=0.0):
    bg = rng.pick(colors)
    accent = pick_other(rng, colors, bg)
    surface.fill_rect(0, 0, size, size, bg)
    a = size * (0.2 + rng.next() * 0.3)
    fx, fy = _CORNERS[rng.randint(4)]
    surface.fill_rect(fx * (size - a), fy * (size - a), a, a, accent)
    surface.stroke_polygon([(1, 1), (size - 1, 1), (size - 1, size - 1),
                            (1, size - 1)], RULE_COLOR, size * 0.02)


# ---------------------------------------------------------------------------
# Diamonds
# ---------------------------------------------------------------------------

def centered_diamond(surface, size, colors, rng, complexity=0.0):
    bg = rng.pick(colors)
    fg = pick_other(rng, colors, bg)
    surface.fill_rect(0, 0, size, size, bg)
    c = size / 2
    d = size * 0.4
    surface.fill_polygon([(c, c - d), (c + d, c), (c, c + d), (c - d, c)], fg)


def split_diagonal(surface, size, colors, rng, complexity=0.0):
    forward = rng.next() > 0.5
    color1 = rng.pick(colors)
    color2 = pick_other(rng, colors, color1)
    if forward:
        surface.fill_polygon([(0, 0), (size, 0), (0, size)], color1)
        surface.fill_polygon([(size, 0), (size, size), (0, size)], color2)
    else:
        surface.fill_polygon([(0, 0), (size, 0), (size, size)], color1)
        surface.fill_polygon([(0, 0), (size, size), (0, size)], color2)


def chevron(surface, size, colors, rng, complexity=0.0):
    color1 = rng.pick(colors)
    color2 = pick_other(rng, colors, color1)
    up = rng.next() > 0.5
    surface.fill_rect(0, 0, size, size, color1)
    if up:
        pts = [(0, size), (size / 2, size * 0.3), (size, size)]
    else:
        pts = [(0, 0), (size / 2, size * 0.7), (size, 0)]
    surface.fill_polygon(pts, color2)


# ---------------------------------------------------------------------------
# Circles
# ---------------------------------------------------------------------------

def centered_circle(surface, size, colors, rng, complexity=0.0):
    bg = rng.pick(colors)
    fg = pick_other(rng, colors, bg)
    inner = pick_other(rng, colors, fg)
    surface.fill_rect(0, 0, size, size, bg)
    c = size / 2
    surface.fill_circle(c, c, size * 0.45, fg)
    if rng.next() > 0.5:
        surface.fill_circle(c, c, size * 0.2, inner)


def overlapping_circles(surface, size, colors, rng, complexity=0.0):
    bg = rng.pick(colors)
    color1 = pick_other(rng, colors, bg)
    color2 = pick_other(rng, colors, bg, color1)
    surface.fill_rect(0, 0, size, size, bg)
    off = size * 0.15
    r = size * 0.35
    c = size / 2
    surface.fill_circle(c - off, c, r, color1)
    surface.fill_circle(c + off, c, r, color2)


def half_circles(surface, size, colors, rng, complexity=0.0):
    color1 = rng.pick(colors)
    color2 = pick_other(rng, colors, color1)
    vertical = rng.next() > 0.5
    half = size / 2
    # The filled region lies between two facing half discs.
    surface.fill_rect(0, 0, size, size, color2)
    if vertical:
        surface.fill_pie(half, 0, half, 0, math.pi, color1)
        surface.fill_pie(half, size, half, math.pi, 2 * math.pi, color1)
    else:
        surface.fill_pie(0, half, half, -HALF_PI, HALF_PI, color1)
        surface.fill_pie(size, half, half, HALF_PI, 3 * HALF_PI, color1)


# ---------------------------------------------------------------------------
# Art deco
# ---------------------------------------------------------------------------

def fan(surface, size, colors, rng, complexity=0.0):
    bg = rng.pick(colors)
    fg = pick_other(rng, colors, bg)
    surface.fill_rect(0, 0, size, size, bg)
    corner = rng.randint(4)
    fx, fy = _CORNERS[corner]
    start = _CORNER_START[corner]
    rays = 5 + rng.randint(4)
    ray = HALF_PI / (rays * 2)
    for i in range(rays):
        a = start + ray * (i * 2 + 0.5)
        surface.fill_pie(fx * size, fy * size, size * 1.2, a, a + ray, fg)


def stepped_pyramid(surface, size, colors, rng, complexity=0.0):
    surface.fill_rect(0, 0, size, size, rng.pick(colors))
    steps = 3 + rng.randint(2)
    step = size / (steps * 2)
    for i in range(steps):
        off = step * i
        surface.fill_rect(off, off, size - 2 * off, size - 2 * off,
                          colors[(i + 1) % len(colors)])


def zigzag_chevron(surface, size, colors, rng, complexity=0.0):
    bg = rng.pick(colors)
    fg = pick_other(rng, colors, bg)
    surface.fill_rect(0, 0, size, size, bg)
    h = size / 3
    for i in range(0, 3, 2):
        top = i * h
        surface.fill_polygon([(0, top), (size / 2, top + h / 2), (size, top),
                              (size, top + h), (size / 2, top + h * 1.5),
                              (0, top + h)], fg)


def arches(surface, size, colors, rng, complexity=0.0):
    bg = rng.pick(colors)
    fg = pick_other(rng, colors, bg)
    accent = pick_other(rng, colors, bg, fg)
    surface.fill_rect(0, 0, size, size, bg)
    for radius, color in ((0.45, fg), (0.3, accent), (0.15, bg)):
        surface.fill_pie(size / 2, size, size * radius, math.pi,
                         2 * math.pi, color)


def sunburst(surface, size, colors, rng, complexity=0.0):
    bg = rng.pick(colors)
    fg = pick_other(rng, colors, bg)
    surface.fill_rect(0, 0, size, size, bg)
    c = size / 2
    rays = 8 + rng.randint(8)
    ray = 2 * math.pi / (rays * 2)
    for i in range(rays):
        a = ray * i * 2
        surface.fill_pie(c, c, size * 0.7, a, a + ray, fg)
    surface.fill_circle(c, c, size * 0.15, bg)


def keystone(surface, size, colors, rng, complexity=0.0):
    bg = rng.pick(colors)
    fg = pick_other(rng, colors, bg)
    surface.fill_rect(0, 0, size, size, bg)
    surface.fill_polygon([(size * 0.2, size), (size * 0.35, size * 0.2),
                          (size * 0.65, size * 0.2), (size * 0.8, size)], fg)


# ---------------------------------------------------------------------------
# Memphis
# ---------------------------------------------------------------------------

def squiggle(surface, size, colors, rng, complexity=0.0):
    bg = rng.pick(colors)
    fg = pick_other(rng, colors, bg)
    surface.fill_rect(0, 0, size, size, bg)
    y0 = size * 0.3 + rng.next() * size * 0.4
    waves = 2 + rng.randint(2)
    w = size / waves
    pts = [(0.0, y0)]
    for i in range(waves):
        segment = cubic_bezier((w * i, y0), (w * (i + 0.25), y0 - size * 0.2),
                               (w * (i + 0.75), y0 + size * 0.2),
                               (w * (i + 1), y0), n=16)
        pts.extend(segment[1:])
    surface.stroke_polyline(pts, fg, size * 0.08, cap="round")


def confetti(surface, size, colors, rng, complexity=0.0):
    bg = rng.pick(colors)
    surface.fill_rect(0, 0, size, size, bg)
    for _ in range(4 + rng.randint(6)):
        color = pick_other(rng, colors, bg)
        x = size * 0.15 + rng.next() * size * 0.7
        y = size * 0.15 + rng.next() * size * 0.7
        r = size * 0.05 + rng.next() * size * 0.08
        surface.fill_circle(x, y, r, color)


def lightning(surface, size, colors, rng, complexity=0.0):
    bg = rng.pick(colors)
    fg = pick_other(rng, colors, bg)
    surface.fill_rect(0, 0, size, size, bg)
    pts = [(0.3, 0), (0.5, 0.4), (0.3, 0.4), (0.5, 1), (0.7, 1), (0.5, 0.6),
           (0.7, 0.6), (0.5, 0)]
    surface.fill_polygon([(x * size, y * size) for x, y in pts], fg)


def cross(surface, size, colors, rng, complexity=0.0):
    bg = rng.pick(colors)
    fg = pick_other(rng, colors, bg)
    surface.fill_rect(0, 0, size, size, bg)
    t = size * 0.25
    surface.fill_rect(size / 2 - t / 2, size * 0.1, t, size * 0.8, fg)
    surface.fill_rect(size * 0.1, size / 2 - t / 2, size * 0.8, t, fg)


def nested_triangles(surface, size, colors, rng, complexity=0.0):
    bg = rng.pick(colors)
    fg = pick_other(rng, colors, bg)
    accent = pick_other(rng, colors, bg, fg)
    surface.fill_rect(0, 0, size, size, bg)
    surface.fill_polygon([(size / 2, size * 0.15), (size * 0.85, size * 0.85),
                          (size * 0.15, size * 0.85)], fg)
    surface.fill_polygon([(size / 2, size * 0.4), (size * 0.65, size * 0.7),
                          (size * 0.35, size * 0.7)], accent)


def dashed_bar(surface, size, colors, rng, complexity=0.0):
    bg = rng.pick(colors)
    fg = pick_other(rng, colors, bg)
    surface.fill_rect(0, 0, size, size, bg)
    angle = rng.next() * math.pi
    dash, gap = size * 0.1, size * 0.08
    x = -size * 0.6
    while x < size * 0.6:
        end = min(x + dash, size * 0.6)
        seg = rotate_points([(x, 0.0), (end, 0.0)], angle)
        surface.stroke_polyline([(px + size / 2, py + size / 2)
                                 for px, py in seg], fg, size * 0.06)
        x += dash + gap


def outline_circle(surface, size, colors, rng, complexity=0.0):
    bg = rng.pick(colors)
    fg = pick_other(rng, colors, bg)
    surface.fill_rect(0, 0, size, size, bg)
    surface.stroke_circle(size / 2, size / 2, size * 0.35, fg, size * 0.08)


QUARTER_CIRCLE_PATTERNS = (quarter_circle, opposite_quarters,
                           edge_half_circle)
CONCENTRIC_PATTERNS = (concentric_quarters, target_rings, arc_stripes)
SHADOW_BLOCK_PATTERNS = (square_with_shadow, triangle_shadow,
                         offset_rectangles)
MONDRIAN_PATTERNS = (mondrian_split, mondrian_bars, mondrian_accent)
DIAMOND_PATTERNS = (centered_diamond, split_diagonal, chevron)
CIRCLE_PATTERNS = (centered_circle, overlapping_circles, half_circles)
ART_DECO_PATTERNS = (fan, stepped_pyramid, zigzag_chevron, arches, sunburst,
                     keystone)
MEMPHIS_PATTERNS = (squiggle, confetti, lightning, cross, nested_triangles,
                    dashed_bar, outline_circle)

# Tile variant -> pattern list.
STYLE_PATTERNS = {
    "quarterCircles": QUARTER_CIRCLE_PATTERNS,
    "concentric": CONCENTRIC_PATTERNS,
    "shadowBlocks": SHADOW_BLOCK_PATTERNS,
    "mondrian": MONDRIAN_PATTERNS,
    "diamonds": DIAMOND_PATTERNS,
    "circles": CIRCLE_PATTERNS,
    "artDeco": ART_DECO_PATTERNS,
    "memphis": MEMPHIS_PATTERNS,
}
STYLE_PATTERNS.update(TRUCHET_PATTERNS)

# Variants that fill every cell with a pattern (their tiles connect).
CONTINUOUS_STYLES = frozenset(TRUCHET_PATTERNS)
