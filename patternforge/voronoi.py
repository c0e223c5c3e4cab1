"""Voronoi cell renderer.

Cells are approximated per site by casting equally spaced rays and binary
searching, along each ray, the distance at which another site becomes
closer. The search runs on all rays of a site at once with numpy.
"""

import logging
import math
from collections import namedtuple

import numpy as np
from PIL import Image, ImageDraw

from .palette import darken, lighten, with_alpha
from .progress import SILENT
from .surface import polygon_path

logger = logging.getLogger(__name__)

RAYS = 72
MARGIN = 0.15
EPS = 1e-9
STAINED_GLASS_LEAD = (26, 26, 26)
STAINED_GLASS_WIDTH = 3
MOSAIC_INSET = 3.0

Site = namedtuple("Site", ["x", "y", "color"])


def site_count(grid_density, complexity):
    """Number of sites for a grid density and complexity (at least 3)."""
    base = 20 + (grid_density - 4) * 15
    return max(3, int(math.floor(base * (0.5 + complexity * 0.8))))


def scatter_sites(width, height, count, colors, rng):
    """Scatter ``count`` sites over the canvas plus a 15% margin.

    Each site consumes three draws: x, y, then its palette color.
    """
    margin = max(width, height) * MARGIN
    sites = []
    for _ in range(count):
        x = -margin + rng.next() * (width + margin * 2)
        y = -margin + rng.next() * (height + margin * 2)
        sites.append(Site(x, y, colors[rng.randint(len(colors))]))
    return sites


def cell_boundary(index, points, reach, rays=RAYS, tolerance=0.5):
    """Boundary vertices of one site's cell.

    Args:
        index: Index of the site in ``points``.
        points: (N, 2) array of site positions.
        reach: Upper bound of the ray search distance.
        rays: Number of equally spaced rays.
        tolerance: Stop bisecting once the interval is this small.

    Returns:
        (rays, 2) array of vertices, in increasing angle order.
    """
    site = points[index]
    others = np.delete(points, index, axis=0)
    angles = np.arange(rays) * (2 * math.pi / rays)
    dirs = np.stack([np.cos(angles), np.sin(angles)], axis=1)

    low = np.zeros(rays)
    high = np.full(rays, float(reach))
    span = float(reach)
    if len(others):
        while span > tolerance:
            mid = (low + high) / 2
            sample = site + dirs * mid[:, None]
            diff = sample[:, None, :] - others[None, :, :]
            other_sq = np.einsum("rnk,rnk->rn", diff, diff)
            closer = (other_sq < (mid * mid - 0.001)[:, None]).any(axis=1)
            high = np.where(closer, mid, high)
            low = np.where(closer, low, mid)
            span /= 2
    else:
        low = high
    return site + dirs * low[:, None]


def compute_cells(sites, width, height, rays=RAYS, progress=SILENT):
    """Boundary polygons for every site, in site order."""
    points = np.array([(s.x, s.y) for s in sites], dtype=np.float64)
    reach = max(width, height) * 2
    cells = []
    for i in range(len(sites)):
        cells.append(cell_boundary(i, points, reach, rays))
        progress.step("cells", i + 1, len(sites))
    return cells


def inset_polygon(vertices, center, inset):
    """Pull every vertex toward ``center`` by ``inset`` units."""
    offsets = vertices - np.asarray(center)
    dist = np.hypot(offsets[:, 0], offsets[:, 1])
    scale = np.maximum(0.0, (dist - inset) / np.maximum(dist, EPS))
    return center + offsets * scale[:, None]


def _as_points(vertices):
    return [tuple(v) for v in vertices.tolist()]


def _draw_cells(surface, sites, cells, stroke=None, stroke_width=0,
                inset=0.0):
    for site, verts in zip(sites, cells):
        if inset > 0:
            verts = inset_polygon(verts, (site.x, site.y), inset)
        pts = _as_points(verts)
        surface.fill_polygon(pts, site.color)
        if stroke is not None:
            surface.stroke_polygon(pts, stroke, stroke_width)


def _draw_cracked(surface, sites, cells, background, complexity):
    base = sites[0].color if sites else background
    surface.clear(base)
    crack = darken(base, 0.3)
    for verts in cells:
        surface.stroke_polygon(_as_points(verts), crack, 1 + complexity * 2)


def _gradient_stops(color):
    """Crystal ramp: lightened center, base at 70%, darkened edge."""
    stops = np.array([0.0, 0.7, 1.0])
    rgb = np.array([lighten(color, 1.3), color, darken(color, 0.7)],
                   dtype=np.float64)
    return stops, rgb


def _draw_crystals(surface, sites, cells, width, height):
    highlight = with_alpha((255, 255, 255), 0.4)
    for site, verts in zip(sites, cells):
        center = np.array([site.x, site.y])
        radii = np.hypot(*(verts - center).T)
        max_r = max(float(radii.max()), EPS)
        x0 = max(0, int(math.floor(verts[:, 0].min())))
        y0 = max(0, int(math.floor(verts[:, 1].min())))
        x1 = min(width, int(math.ceil(verts[:, 0].max())) + 1)
        y1 = min(height, int(math.ceil(verts[:, 1].max())) + 1)
        if x1 <= x0 or y1 <= y0:
            continue

        mask = Image.new("L", (x1 - x0, y1 - y0), 0)
        ImageDraw.Draw(mask).polygon(
            [(x - x0, y - y0) for x, y in verts.tolist()], fill=255)

        ys, xs = np.mgrid[y0:y1, x0:x1].astype(np.float64)
        t = np.clip(np.hypot(xs - site.x, ys - site.y) / max_r, 0.0, 1.0)
        stops, ramp = _gradient_stops(site.color)
        layer = np.empty((y1 - y0, x1 - x0, 4), dtype=np.uint8)
        for channel in range(3):
            layer[..., channel] = np.round(np.interp(t, stops,
                                                     ramp[:, channel]))
        layer[..., 3] = np.asarray(mask)
        surface.composite(layer, x0, y0)
        surface.stroke_polygon(_as_points(verts), highlight, 1)


def _draw_honeycomb(surface, canvas, colors, rng, background, progress):
    surface.clear(background)
    radius = canvas.cell_size / 1.5
    hex_w = math.sqrt(3) * radius
    vert = radius * 1.5
    rows = int(math.ceil(canvas.height / vert)) + 1
    cols = int(math.ceil(canvas.width / hex_w)) + 1
    edge = darken(background, 0.7)
    for row in range(-1, rows):
        for col in range(-1, cols):
            x = col * hex_w + (hex_w / 2 if row % 2 else 0)
            y = row * vert
            pts = polygon_path(x, y, radius, 6, -math.pi / 6)
            surface.fill_polygon(pts, colors[rng.randint(len(colors))])
            surface.stroke_polygon(pts, edge, 2)
        progress.step("honeycomb", row + 2, rows + 1)


def render_voronoi(surface, palette, canvas, rng, variant, complexity,
                   progress=SILENT):
    """Draw a Voronoi variant.

    Args:
        surface: Surface sized to the canvas.
        palette: Palette supplying site colors and background.
        canvas: CanvasSpec; grid density sets the number of sites.
        rng: Seeded Prng for site placement and colors.
        variant: cells, stainedGlass, mosaic, cracked, honeycomb or crystals.
        complexity: Scales the site count and crack width.
        progress: Progress checkpoint, stepped once per cell.
    """
    colors = list(palette.colors)
    width, height = canvas.width, canvas.height
    surface.clear(palette.background)

    # Sites are scattered even for honeycomb to keep the stream aligned.
    count = site_count(canvas.grid_density, complexity)
    sites = scatter_sites(width, height, count, colors, rng)
    if variant == "honeycomb":
        _draw_honeycomb(surface, canvas, colors, rng, palette.background,
                        progress)
        return

    logger.debug("voronoi %s: %d sites", variant, count)
    cells = compute_cells(sites, width, height, progress=progress)
    if variant == "cells":
        _draw_cells(surface, sites, cells)
    elif variant == "stainedGlass":
        _draw_cells(surface, sites, cells, STAINED_GLASS_LEAD,
                    STAINED_GLASS_WIDTH)
    elif variant == "mosaic":
        _draw_cells(surface, sites, cells, inset=MOSAIC_INSET)
    elif variant == "cracked":
        _draw_cracked(surface, sites, cells, palette.background, complexity)
    elif variant == "crystals":
        _draw_crystals(surface, sites, cells, width, height)
    else:
        raise ValueError(f"unhandled voronoi variant {variant!r}")
