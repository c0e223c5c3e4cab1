"""Contour renderer: iso-lines of a scalar height field.

Every variant builds a (rows, cols) field in [0, 1], sampled every
``resolution`` pixels, and hands it to the same marching-squares step.
Cells crossed four times (saddles) get both segments, edges 0-1 and 2-3,
without disambiguation.
"""

import logging
import math

import numpy as np

from .noise import fractal_noise, fractal_noise_grid, smooth_noise
from .palette import with_alpha
from .progress import SILENT

logger = logging.getLogger(__name__)

NOISE_SEED_RANGE = 1 << 24


def extract_segments(field, thresholds, resolution=1.0):
    """Marching-squares line segments for each threshold.

    Args:
        field: (rows, cols) array of heights.
        thresholds: Iterable of iso values.
        resolution: Pixel spacing between samples.

    Returns:
        List with one (n, 4) array of ``x0, y0, x1, y1`` per threshold.
    """
    field = np.asarray(field, dtype=np.float64)
    rows, cols = field.shape
    if rows < 2 or cols < 2:
        return [np.empty((0, 4)) for _ in thresholds]

    v1 = field[:-1, :-1]
    v2 = field[:-1, 1:]
    v3 = field[1:, 1:]
    v4 = field[1:, :-1]
    ys, xs = np.mgrid[0:rows - 1, 0:cols - 1].astype(np.float64)

    out = []
    for threshold in thresholds:
        b1 = v1 < threshold
        b2 = v2 < threshold
        b3 = v3 < threshold
        b4 = v4 < threshold
        # Edges in order top, right, bottom, left.
        crossed = np.stack([b1 != b2, b2 != b3, b3 != b4, b4 != b1], axis=-1)
        with np.errstate(divide="ignore", invalid="ignore"):
            t_top = (threshold - v1) / (v2 - v1)
            t_right = (threshold - v2) / (v3 - v2)
            t_bottom = (threshold - v4) / (v3 - v4)
            t_left = (threshold - v1) / (v4 - v1)
        px = np.stack([xs + t_top, xs + 1, xs + t_bottom, xs], axis=-1)
        py = np.stack([ys, ys + t_right, ys + 1, ys + t_left], axis=-1)

        count = crossed.sum(axis=-1)
        # Crossed edges first, keeping top/right/bottom/left order.
        order = np.argsort(~crossed, axis=-1, kind="stable")
        px = np.take_along_axis(px, order, axis=-1) * resolution
        py = np.take_along_axis(py, order, axis=-1) * resolution

        pairs = count >= 2
        first = np.stack([px[pairs][:, 0], py[pairs][:, 0],
                          px[pairs][:, 1], py[pairs][:, 1]], axis=1)
        saddles = count == 4
        second = np.stack([px[saddles][:, 2], py[saddles][:, 2],
                           px[saddles][:, 3], py[saddles][:, 3]], axis=1)
        out.append(np.concatenate([first, second]))
    return out


def contour_thresholds(count):
    """``count`` evenly spaced thresholds ``i / count`` in [0, 1)."""
    return [i / count for i in range(count)]


def draw_contours(surface, field, count, colors, line_width, resolution,
                  progress=SILENT):
    """Stroke ``count`` iso-lines of ``field``, cycling through ``colors``."""
    thresholds = contour_thresholds(count)
    segments = extract_segments(field, thresholds, resolution)
    for i, segs in enumerate(segments):
        color = colors[i % len(colors)]
        for x0, y0, x1, y1 in segs.tolist():
            surface.stroke_polyline([(x0, y0), (x1, y1)], color, line_width,
                                    cap="round")
        progress.step("contours", i + 1, count)
    return sum(len(s) for s in segments)


def _grid(width, height, resolution):
    cols = math.ceil(width / resolution)
    rows = math.ceil(height / resolution)
    ys, xs = np.mgrid[0:rows, 0:cols].astype(np.float64)
    return rows, cols, xs, ys


# ---------------------------------------------------------------------------
# Height fields
# ---------------------------------------------------------------------------

def island_field(width, height, resolution, seed, rng, complexity):
    """Highest of several squared radial falloffs, plus a little noise."""
    rows, cols, xs, ys = _grid(width, height, resolution)
    field = np.zeros((rows, cols))
    for _ in range(2 + int(complexity * 3)):
        cx = cols * (0.15 + rng.next() * 0.7)
        cy = rows * (0.15 + rng.next() * 0.7)
        size = min(cols, rows) * (0.2 + rng.next() * 0.3)
        dist = np.hypot(xs - cx, ys - cy)
        falloff = np.maximum(0.0, 1 - dist / max(size, 1e-9))
        field = np.maximum(field, falloff * falloff)
    field += fractal_noise(xs / cols * 3, ys / rows * 3, seed, 3) * 0.15
    return np.minimum(1.0, field)


def ridge_field(width, height, resolution, seed, complexity):
    """Ridged fractal noise: each octave folded as (1 - |2n - 1|)^2."""
    rows, cols, xs, ys = _grid(width, height, resolution)
    scale = 2 + complexity * 2
    nx = xs / cols * scale
    ny = ys / rows * scale
    value = np.zeros((rows, cols))
    amplitude, frequency, total = 1.0, 1.0, 0.0
    for octave in range(5):
        n = smooth_noise(nx * frequency, ny * frequency, seed + octave * 100)
        ridged = 1 - np.abs(n * 2 - 1)
        value += ridged * ridged * amplitude
        total += amplitude
        amplitude *= 0.5
        frequency *= 2
    return value / total


def thermal_field(width, height, resolution, seed, rng, complexity):
    """Gaussian heat sources plus turbulence."""
    rows, cols, xs, ys = _grid(width, height, resolution)
    heat = np.zeros((rows, cols))
    for _ in range(2 + int(complexity * 4)):
        sx = cols * rng.next()
        sy = rows * rng.next()
        intensity = 0.5 + rng.next() * 0.5
        radius = max(min(cols, rows) * (0.25 + rng.next() * 0.35), 1e-9)
        d2 = (xs - sx) ** 2 + (ys - sy) ** 2
        heat += intensity * np.exp(-d2 / (radius * radius))
    heat += fractal_noise(xs / cols * 4, ys / rows * 4, seed, 3) * 0.1
    return np.minimum(1.0, heat)


def interference_field(width, height, resolution, rng, complexity):
    """Averaged circular sine waves from one to three sources."""
    rows, cols, xs, ys = _grid(width, height, resolution)
    wave = np.zeros((rows, cols))
    sources = 1 + int(complexity * 2)
    for _ in range(sources):
        sx = cols * (0.2 + rng.next() * 0.6)
        sy = rows * (0.2 + rng.next() * 0.6)
        frequency = 0.15 + rng.next() * 0.15
        phase = rng.next() * math.pi * 2
        wave += np.sin(np.hypot(xs - sx, ys - sy) * frequency + phase)
    return (wave / sources + 1) / 2


def magnetic_field(width, height, resolution, rng, complexity):
    """Potential of alternating charges, squashed into [0, 1] by atan."""
    rows, cols, xs, ys = _grid(width, height, resolution)
    potential = np.zeros((rows, cols))
    for i in range(2 + int(complexity * 2)):
        px = cols * (0.15 + rng.next() * 0.7)
        py = rows * (0.15 + rng.next() * 0.7)
        charge = 1 if i % 2 == 0 else -1
        potential += charge / (np.hypot(xs - px, ys - py) + 5)
    return np.arctan(potential * 30) / math.pi + 0.5


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------

def _elevation(surface, palette, width, height, seed, complexity, progress):
    resolution = 4
    scale = 2.5 + complexity * 2
    colors = list(palette.colors)
    rows, cols = math.ceil(height / resolution), math.ceil(width / resolution)
    field = fractal_noise_grid(rows, cols, scale, seed, octaves=5)

    # Nearest sample per pixel, then one palette band per level.
    ix = np.minimum((np.arange(width) / width * cols).astype(int), cols - 1)
    iy = np.minimum((np.arange(height) / height * rows).astype(int), rows - 1)
    levels = np.minimum((field * len(colors)).astype(int), len(colors) - 1)
    lut = np.array(colors, dtype=np.uint8)
    surface.write_pixels(lut[levels[iy[:, None], ix[None, :]]])

    ink = with_alpha((0, 0, 0), 0.4)
    draw_contours(surface, field, 6 + int(complexity * 8), [ink], 1.5,
                  resolution, progress)


def render_contour(surface, palette, canvas, rng, variant, complexity,
                   progress=SILENT):
    """Draw a contour variant.

    Args:
        surface: Surface sized to the canvas.
        palette: Palette; thresholds cycle through its colors.
        canvas: CanvasSpec giving the pixel size.
        rng: Seeded Prng; its first draw seeds the noise lattice.
        variant: topographic, elevation, islands, ridges, thermal,
            interference or magnetic.
        complexity: Scales contour count, feature count and line width.
        progress: Progress checkpoint, stepped once per threshold.
    """
    width, height = canvas.width, canvas.height
    colors = list(palette.colors)
    seed = rng.randint(NOISE_SEED_RANGE)
    surface.clear(palette.background)

    if variant == "elevation":
        _elevation(surface, palette, width, height, seed, complexity,
                   progress)
        return

    resolution = 4
    if variant == "topographic":
        rows = math.ceil(height / resolution)
        cols = math.ceil(width / resolution)
        field = fractal_noise_grid(rows, cols, 2.5 + complexity * 2, seed, 4)
        count, lw = 12 + int(complexity * 15), 2 + complexity
    elif variant == "islands":
        field = island_field(width, height, resolution, seed, rng, complexity)
        count, lw = 10 + int(complexity * 12), 2 + complexity * 0.5
    elif variant == "ridges":
        field = ridge_field(width, height, resolution, seed, complexity)
        count, lw = 15 + int(complexity * 20), 1.5 + complexity
    elif variant == "thermal":
        field = thermal_field(width, height, resolution, seed, rng,
                              complexity)
        count, lw = 12 + int(complexity * 15), 2 + complexity
    elif variant == "interference":
        resolution = 3
        field = interference_field(width, height, resolution, rng,
                                   complexity)
        count, lw = 15 + int(complexity * 20), 2 + complexity * 0.5
    elif variant == "magnetic":
        resolution = 3
        field = magnetic_field(width, height, resolution, rng, complexity)
        count, lw = 20 + int(complexity * 25), 1.5 + complexity
    else:
        raise ValueError(f"unhandled contour variant {variant!r}")

    segments = draw_contours(surface, field, count, colors, lw, resolution,
                             progress)
    logger.debug("contour %s: %d thresholds, %d segments", variant, count,
                 segments)
