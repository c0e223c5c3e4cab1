"""Regular tessellations drawn over the whole canvas.

Unlike the tile compositor, shapes here overlap cell borders and the grid
extends one or two cells past the canvas so the edges are covered.
"""

import logging
import math

from .palette import darken
from .progress import SILENT
from .surface import polygon_path, rotate_points

logger = logging.getLogger(__name__)


def _pick_index(rng, colors):
    return colors[rng.randint(len(colors))]


def _next_color(rng, colors):
    """Color after a random index, wrapping (inner decorations)."""
    return colors[(rng.randint(len(colors)) + 1) % len(colors)]


def _islamic_stars(surface, size, width, height, colors, rng, complexity,
                   progress):
    cols = math.ceil(width / size) + 1
    rows = math.ceil(height / size) + 1
    lw = 1 + complexity * 2
    outline = darken(colors[0], 0.3)
    outer = size * 0.48
    inner = outer * (0.35 + complexity * 0.15)
    for row in range(-1, rows):
        for col in range(-1, cols):
            cx = col * size + size / 2
            cy = row * size + size / 2
            star = [(cx + math.cos(i * math.pi / 8 - math.pi / 2) * r,
                     cy + math.sin(i * math.pi / 8 - math.pi / 2) * r)
                    for i, r in enumerate([outer, inner] * 8)]
            surface.fill_polygon(star, _pick_index(rng, colors))
            surface.stroke_polygon(star, outline, lw)
            octagon = polygon_path(cx, cy, inner * 0.6, 8)
            surface.fill_polygon(octagon, _next_color(rng, colors))
            surface.stroke_polygon(octagon, outline, lw)
        progress.step("stars", row + 2, rows + 1)

    # Diamonds joining four neighbouring stars.
    d = size * 0.25
    for row in range(-1, rows):
        for col in range(-1, cols):
            cx = (col + 1) * size
            cy = (row + 1) * size
            diamond = [(cx, cy - d), (cx + d, cy), (cx, cy + d), (cx - d, cy)]
            surface.fill_polygon(diamond, _pick_index(rng, colors))
            surface.stroke_polygon(diamond, outline, lw)


def _herringbone(surface, size, width, height, colors, rng, complexity,
                 progress):
    brick_h = size * 0.35
    step = size * math.cos(math.pi / 4)
    outline = darken(colors[0], 0.4)
    rows = int(math.ceil(height / step)) + 2
    cols = int(math.ceil(width / step)) + 2
    brick = [(-size / 2, -brick_h / 2), (size / 2, -brick_h / 2),
             (size / 2, brick_h / 2), (-size / 2, brick_h / 2)]
    for row in range(-2, rows):
        for col in range(-2, cols):
            angle = math.pi / 4 if (row + col) % 2 == 0 else -math.pi / 4
            pts = [(x + col * step, y + row * step)
                   for x, y in rotate_points(brick, angle)]
            surface.fill_polygon(pts, _pick_index(rng, colors))
            surface.stroke_polygon(pts, outline, 1)
        progress.step("bricks", row + 3, rows + 2)


def _hexagons(surface, size, width, height, colors, rng, complexity,
              progress):
    radius = size / 1.5
    hex_w = math.sqrt(3) * radius
    vert = radius * 1.5
    rows = int(math.ceil(height / vert)) + 1
    cols = int(math.ceil(width / hex_w)) + 1
    for row in range(-1, rows):
        for col in range(-1, cols):
            x = col * hex_w + (hex_w / 2 if row % 2 else 0)
            y = row * vert
            color = _pick_index(rng, colors)
            edge = darken(color, 0.6)
            outer = polygon_path(x, y, radius, 6, -math.pi / 6)
            surface.fill_polygon(outer, color)
            surface.stroke_polygon(outer, edge, 2)
            if complexity > 0.3:
                core = polygon_path(x, y,
                                    radius * (0.3 + (1 - complexity) * 0.3), 6)
                surface.fill_polygon(core, _next_color(rng, colors))
                surface.stroke_polygon(core, edge, 2)
        progress.step("hexagons", row + 2, rows + 1)


def _triangles(surface, size, width, height, colors, rng, complexity,
               progress):
    tri_h = size * math.sqrt(3) / 2
    rows = int(math.ceil(height / tri_h)) + 1
    cols = int(math.ceil(width / size)) + 2
    for row in range(-1, rows):
        for col in range(-1, cols):
            x = col * size + (size / 2 if row % 2 else 0)
            y = row * tri_h
            up = [(x, y + tri_h), (x + size / 2, y), (x + size, y + tri_h)]
            down = [(x + size / 2, y), (x + size, y + tri_h),
                    (x + size * 1.5, y)]
            for tri in (up, down):
                color = _pick_index(rng, colors)
                surface.fill_polygon(tri, color)
                surface.stroke_polygon(tri, darken(color, 0.5), 1)
        progress.step("triangles", row + 2, rows + 1)


def _basketweave(surface, size, width, height, colors, rng, complexity,
                 progress):
    strip = size / 3
    rows = int(math.ceil(height / size)) + 1
    cols = int(math.ceil(width / size)) + 1
    for row in range(-1, rows):
        for col in range(-1, cols):
            x = col * size
            y = row * size
            vertical = (row + col) % 2 == 0
            for i in range(3):
                color = _pick_index(rng, colors)
                if vertical:
                    rect = (x + i * strip, y, strip - 1, size)
                else:
                    rect = (x, y + i * strip, size, strip - 1)
                rx, ry, rw, rh = rect
                corners = [(rx, ry), (rx + rw, ry), (rx + rw, ry + rh),
                           (rx, ry + rh)]
                surface.fill_polygon(corners, color)
                surface.stroke_polygon(corners, darken(color, 0.5), 1)
        progress.step("strips", row + 2, rows + 1)


_PENROSE_ANGLES = tuple(i * math.pi / 5 for i in range(5))


def _penrose(surface, size, width, height, colors, rng, complexity,
             progress):
    rows = int(math.ceil(height / size)) + 2
    cols = int(math.ceil(width / size)) + 2
    half_long = size * 0.4
    for row in range(-2, rows):
        for col in range(-2, cols):
            cx = col * size + (size / 2 if row % 2 else 0)
            cy = row * size * 0.8
            angle = _PENROSE_ANGLES[(row * 3 + col * 7) % 5]
            # Thin rhombi have a 36 degree acute angle, thick ones 72.
            acute = math.pi / 5 if rng.next() > 0.5 else 2 * math.pi / 5
            half_short = half_long * math.tan(acute / 2)
            color = _pick_index(rng, colors)
            rhomb = [(half_long, 0), (0, half_short), (-half_long, 0),
                     (0, -half_short)]
            pts = [(x + cx, y + cy) for x, y in rotate_points(rhomb, angle)]
            surface.fill_polygon(pts, color)
            surface.stroke_polygon(pts, darken(color, 0.4), 1.5)
            if complexity > 0.5:
                core = [(x * 0.4 + cx * 0.6, y * 0.4 + cy * 0.6)
                        for x, y in pts]
                surface.fill_polygon(core, _next_color(rng, colors))
        progress.step("rhombi", row + 3, rows + 2)


_VARIANTS = {
    "islamicStars": _islamic_stars,
    "herringbone": _herringbone,
    "hexagons": _hexagons,
    "triangles": _triangles,
    "basketweave": _basketweave,
    "penrose": _penrose,
}


def render_tessellation(surface, palette, canvas, rng, variant, complexity,
                        progress=SILENT):
    """Draw a tessellation variant covering the whole canvas.

    Args:
        surface: Surface sized to the canvas.
        palette: Palette supplying colors and background.
        canvas: CanvasSpec; its cell size sets the motif size.
        rng: Seeded Prng; one draw per color choice.
        variant: One of the tessellation variant names.
        complexity: Star depth, inner decorations and stroke weight.
        progress: Progress checkpoint, stepped once per row.
    """
    size = canvas.cell_size
    logger.debug("tessellation %s: motif %.2fpx", variant, size)
    surface.clear(palette.background)
    _VARIANTS[variant](surface, size, canvas.width, canvas.height,
                       list(palette.colors), rng, complexity, progress)
