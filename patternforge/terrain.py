"""Layered terrain renderer.

Skylines are 1-D fractal noise curves, one per palette color, filled from
the curve down past the canvas bottom and drawn back to front so nearer
layers cover farther ones.
"""

import logging
import math
from collections import namedtuple

import numpy as np

from .noise import fractal_noise
from .palette import blend, darken, tint, with_alpha
from .progress import SILENT

logger = logging.getLogger(__name__)

SKYLINE_POINTS = 300
NOISE_SEED_RANGE = 1 << 24
HORIZON = 0.6

LayerShape = namedtuple("LayerShape", ["start", "end", "wave_scale",
                                       "amplitude", "octaves"])


def _layer_shape(variant, height, complexity):
    """Vertical band, wave scale, amplitude factor and octaves per variant."""
    if variant == "dunes":
        return LayerShape(height * 0.35, height, 0.4 + complexity * 0.4, 0.7, 2)
    if variant == "waves":
        return LayerShape(height * 0.2, height, 2.0 + complexity * 2.0, 0.8, 4)
    if variant == "peaks":
        return LayerShape(height * 0.25, height * 0.95,
                          1.5 + complexity * 1.5, 0.8, 5)
    if variant == "aurora":
        return LayerShape(height * 0.65, height, 1.0 + complexity, 0.8, 4)
    if variant == "reflection":
        return LayerShape(height * 0.3, height * HORIZON,
                          1.0 + complexity * 1.2, 0.6, 4)
    return LayerShape(height * 0.2, height * 0.95, 1.0 + complexity * 1.2,
                      1.0, 4)


def skyline(width, base_y, amplitude, scale, seed, octaves=4,
            points=SKYLINE_POINTS):
    """Sample a wave curve of ``points + 1`` (x, y) vertices across the width.

    Returns:
        (xs, ys) float arrays.
    """
    u = np.arange(points + 1, dtype=np.float64) / points
    noise = fractal_noise(u * scale, 0.0, seed, octaves)
    return u * width, base_y + (noise - 0.5) * amplitude * 2


def stamp_peaks(xs, ys, width, amplitude, rng, count):
    """Raise triangular peaks at random positions along a skyline."""
    for _ in range(count):
        center = rng.next() * width
        half_width = width * (0.04 + rng.next() * 0.08)
        rise = amplitude * (1.0 + rng.next() * 1.5)
        ys = ys - rise * np.maximum(0.0, 1 - np.abs(xs - center) / half_width)
    return ys


def vertical_gradient(width, height, top, bottom):
    """(height, width, 3) float image blending ``top`` into ``bottom``."""
    t = np.linspace(0.0, 1.0, height)[:, None]
    top = np.asarray(top, dtype=np.float64)
    bottom = np.asarray(bottom, dtype=np.float64)
    column = top + (bottom - top) * t
    return np.repeat(column[:, None, :], width, axis=1)


def draw_sun(surface, x, y, radius, color):
    """Disc with a radial glow fading out at 2.5 radii."""
    outer = radius * 2.5
    x0 = max(0, int(math.floor(x - outer)))
    y0 = max(0, int(math.floor(y - outer)))
    x1 = min(surface.width, int(math.ceil(x + outer)) + 1)
    y1 = min(surface.height, int(math.ceil(y + outer)) + 1)
    if x1 > x0 and y1 > y0:
        ys, xs = np.mgrid[y0:y1, x0:x1].astype(np.float64)
        dist = np.hypot(xs - x, ys - y)
        t = np.clip((dist - radius * 0.3) / max(outer - radius * 0.3, 1e-9),
                    0.0, 1.0)
        alpha = np.interp(t, [0.0, 0.4, 1.0], [1.0, 0.3, 0.0])
        layer = np.empty((y1 - y0, x1 - x0, 4), dtype=np.uint8)
        layer[..., :3] = color
        layer[..., 3] = np.round(alpha * 255)
        surface.composite(layer, x0, y0)
    surface.fill_circle(x, y, radius, color)


def _fill_layer(surface, xs, ys, color, floor_y):
    pts = list(zip(xs.tolist(), ys.tolist()))
    pts += [(float(xs[-1]), floor_y), (float(xs[0]), floor_y)]
    surface.fill_polygon(pts, color)


def _stars(surface, rng, width, height, complexity):
    count = int(width * height / 2500 * (0.3 + complexity * 0.5))
    for _ in range(count):
        x = rng.next() * width
        y = rng.next() * height * 0.7
        r = 0.5 + rng.next() * 1.2
        surface.fill_circle(x, y, r, with_alpha((255, 255, 255),
                                                0.4 + rng.next() * 0.6))


def _aurora_bands(surface, rng, seed, width, height, colors, complexity):
    """Wavy ribbons, opaque-ish at the lower edge and fading upward."""
    rows = np.arange(height, dtype=np.float64)[:, None]
    u = np.arange(width, dtype=np.float64) / max(width, 1)
    for band in range(2 + int(complexity * 2.99)):
        base = height * (0.15 + rng.next() * 0.3)
        thickness = height * (0.08 + rng.next() * 0.1)
        swing = height * (0.04 + rng.next() * 0.06)
        scale = 1.0 + rng.next() * 2.0
        color = colors[band % len(colors)]
        wave = fractal_noise(u * scale, 0.0, seed + 7000 + band * 100, 3)
        bottom = base + (wave - 0.5) * swing * 2
        top = bottom - thickness
        rise = (rows - top[None, :]) / thickness
        alpha = np.where((rise >= 0) & (rise <= 1), rise * 0.55, 0.0)
        layer = np.empty((height, width, 4), dtype=np.uint8)
        layer[..., :3] = color
        layer[..., 3] = np.round(alpha * 255)
        surface.composite(layer)


def render_terrain(surface, palette, canvas, rng, variant, complexity,
                   progress=SILENT):
    """Draw a terrain variant.

    Args:
        surface: Surface sized to the canvas.
        palette: Palette; one layer per color, background tints the sky.
        canvas: CanvasSpec giving the pixel size.
        rng: Seeded Prng; its first draw seeds the noise lattice.
        variant: mountains, mountainsNoSun, dunes, waves, peaks, aurora or
            reflection.
        complexity: Scales wave frequency, amplitude and detail.
        progress: Progress checkpoint, stepped once per layer.
    """
    width, height = canvas.width, canvas.height
    colors = list(palette.colors)
    bg = palette.background
    seed = rng.randint(NOISE_SEED_RANGE)

    if variant == "aurora":
        night = darken(bg, 0.1)
        surface.write_pixels(vertical_gradient(
            width, height, night, darken(blend(bg, colors[0], 0.3), 0.3)))
        _stars(surface, rng, width, height, complexity)
        _aurora_bands(surface, rng, seed, width, height, colors, complexity)
    else:
        surface.write_pixels(vertical_gradient(width, height, bg,
                                               blend(bg, colors[0], 0.25)))

    if variant in ("mountains", "dunes", "reflection"):
        radius = min(width, height) * (0.06 + rng.next() * 0.04)
        sun_x = width * (0.25 + rng.next() * 0.5)
        sun_y = height * (0.1 + rng.next() * 0.12)
        draw_sun(surface, sun_x, sun_y, radius, tint(colors[0], 0.65))

    horizon = height * HORIZON
    if variant == "reflection":
        water = darken(blend(bg, colors[-1], 0.4), 0.85)
        surface.fill_rect(0, horizon, width, height - horizon, water)

    shape = _layer_shape(variant, height, complexity)
    layers = len(colors) if variant != "aurora" else min(3, len(colors))
    spacing = (shape.end - shape.start) / layers
    base_amplitude = height * (0.025 + complexity * 0.045) * shape.amplitude
    logger.debug("terrain %s: %d layers", variant, layers)

    for i in range(layers):
        base_y = shape.start + i * spacing
        layer_seed = seed + i * 1000 + rng.randint(500)
        amplitude = base_amplitude * (0.7 + rng.next() * 0.6)
        scale = shape.wave_scale * (0.8 + rng.next() * 0.4)
        xs, ys = skyline(width, base_y, amplitude, scale, layer_seed,
                         shape.octaves)
        color = colors[i % len(colors)]

        if variant == "peaks":
            ys = stamp_peaks(xs, ys, width, amplitude, rng,
                             2 + int(complexity * 4))
        elif variant == "aurora":
            color = darken(color, 0.2)

        if variant == "reflection":
            ys = np.minimum(ys, horizon)
            _fill_layer(surface, xs, ys, color, horizon)
            _fill_layer(surface, xs, 2 * horizon - ys,
                        with_alpha(color, 0.45), horizon)
        else:
            _fill_layer(surface, xs, ys, color, height + 10)
        progress.step("layers", i + 1, layers)

    if variant == "reflection":
        shimmer = with_alpha((255, 255, 255), 0.15)
        for _ in range(10 + int(complexity * 20)):
            y = horizon + rng.next() * (height - horizon)
            x = rng.next() * width
            length = width * (0.03 + rng.next() * 0.1)
            surface.stroke_polyline([(x, y), (x + length, y)], shimmer, 1)
