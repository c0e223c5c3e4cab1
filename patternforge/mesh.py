"""Metaball / gradient-mesh blender.

Each variant scatters primitives (blobs, metaballs, orbs, lights, ribbons)
and builds a shader that maps pixel coordinates to colors. Shaders are
evaluated with numpy one band of rows at a time; bands are also the
progress checkpoints.
"""

import logging
import math

import numpy as np

from .noise import fractal_noise
from .progress import SILENT

logger = logging.getLogger(__name__)

BAND_ROWS = 64
NOISE_SEED_RANGE = 1 << 24
SILK_SAMPLES = 11


def _noise(x, y, seed, octaves):
    return fractal_noise(x, y, seed, octaves, quintic=True)


def _mix(rgb, color, t):
    """Blend ``rgb`` toward ``color`` by per-pixel weight ``t``."""
    return rgb + (np.asarray(color, dtype=np.float64) - rgb) * t[..., None]


def _base(shape, color):
    return np.broadcast_to(np.asarray(color, dtype=np.float64),
                           shape + (3,)).copy()


def soft_mesh(width, height, colors, background, rng, seed, complexity):
    """Rotated elliptical blobs with a cos^2 window, on warped coordinates."""
    blobs = []
    for _ in range(5 + int(complexity * 6)):
        radius = max(width, height) * (0.3 + rng.next() * 0.5)
        blobs.append((rng.next() * width, rng.next() * height,
                      radius * (0.6 + rng.next() * 0.8),
                      radius * (0.6 + rng.next() * 0.8),
                      rng.next() * math.pi * 2,
                      colors[rng.randint(len(colors))],
                      0.4 + rng.next() * 0.6))
    scale = 2 + complexity * 2

    def shade(xs, ys):
        u = xs / width * scale
        v = ys / height * scale
        warp = 0.1 * complexity
        px = xs + (_noise(u, v, seed, 3) - 0.5) * width * warp
        py = ys + (_noise(u + 100, v + 100, seed, 3) - 0.5) * height * warp
        rgb = _base(xs.shape, background)
        for bx, by, rx, ry, rotation, color, intensity in blobs:
            c, s = math.cos(rotation), math.sin(rotation)
            dx, dy = px - bx, py - by
            dist = np.hypot((dx * c + dy * s) / rx, (-dx * s + dy * c) / ry)
            t = np.where(dist < 1,
                         np.cos(dist * math.pi * 0.5) ** 2 * intensity, 0.0)
            rgb = _mix(rgb, color, t)
        return rgb

    return shade


def lava(width, height, colors, background, rng, seed, complexity):
    """Reciprocal-square metaballs, color-averaged then smoothstep-masked."""
    balls = []
    for _ in range(4 + int(complexity * 5)):
        balls.append((rng.next() * width, rng.next() * height,
                      max(width, height) * (0.15 + rng.next() * 0.25),
                      colors[rng.randint(len(colors))]))
    scale = 1.5 + complexity
    threshold = 0.8 + complexity * 0.4

    def shade(xs, ys):
        n = _noise(xs / width * scale, ys / height * scale, seed, 3)
        jitter = (n - 0.5) * 50 * complexity
        px, py = xs + jitter, ys + jitter
        total = np.zeros(xs.shape)
        acc = np.zeros(xs.shape + (3,))
        for bx, by, radius, color in balls:
            # +1 keeps the field finite on a ball's center.
            field = radius * radius / ((px - bx) ** 2 + (py - by) ** 2 + 1)
            total += field
            acc += field[..., None] * np.asarray(color, dtype=np.float64)
        acc /= np.maximum(total, 1e-12)[..., None]
        t = np.minimum(1.0, total / threshold)
        bg = np.asarray(background, dtype=np.float64)
        return bg + (acc - bg) * (t * t * (3 - 2 * t))[..., None]

    return shade


def plasma(width, height, colors, background, rng, seed, complexity):
    """Five interfering sine waves mapped through a smoothstep color ramp."""
    freq = 2 + complexity * 4
    phase = rng.next() * 100
    ramp = np.array(colors, dtype=np.float64)

    def shade(xs, ys):
        nx = xs / width
        ny = ys / height
        value = (np.sin(nx * freq * math.pi + phase)
                 + np.sin(ny * freq * 1.3 * math.pi + phase * 1.5)
                 + np.sin((nx + ny) * freq * 0.8 * math.pi + phase * 0.7)
                 + np.sin(np.hypot(nx - 0.5, ny - 0.5) * freq * 2 * math.pi
                          + phase)
                 + np.sin((nx * math.cos(phase) + ny * math.sin(phase))
                          * freq * math.pi))
        pos = np.clip((value + 5) / 10, 0.0, 1.0) * (len(ramp) - 1)
        idx = np.floor(pos).astype(np.int64)
        nxt = np.minimum(idx + 1, len(ramp) - 1)
        f = pos - idx
        t = (f * f * (3 - 2 * f))[..., None]
        return ramp[idx] + (ramp[nxt] - ramp[idx]) * t

    return shade


def orbs(width, height, colors, background, rng, seed, complexity):
    """Depth-sorted spheres with a cos^1.5 radial falloff."""
    items = []
    for _ in range(4 + int(complexity * 6)):
        items.append((rng.next() * width, rng.next() * height,
                      max(width, height) * (0.15 + rng.next() * 0.35),
                      colors[rng.randint(len(colors))], rng.next()))
    items.sort(key=lambda orb: orb[4])

    def shade(xs, ys):
        n = _noise(xs / width * 2, ys / height * 2, seed, 2)
        jitter = (n - 0.5) * 12 * complexity
        px, py = xs + jitter, ys + jitter
        rgb = _base(xs.shape, background)
        for ox, oy, radius, color, _depth in items:
            d = np.hypot(px - ox, py - oy) / radius
            t = np.where(d < 1,
                         np.cos(np.minimum(d, 1) * math.pi * 0.5) ** 1.5
                         * 0.85, 0.0)
            rgb = _mix(rgb, color, t)
        return rgb

    return shade


def spotlight(width, height, colors, background, rng, seed, complexity):
    """Lights just off the canvas edges with a squared linear falloff."""
    lights = []
    for _ in range(2 + int(complexity * 3)):
        edge = rng.next()
        if edge < 0.25:
            lx, ly = rng.next() * width, -height * 0.1
        elif edge < 0.5:
            lx, ly = rng.next() * width, height * 1.1
        elif edge < 0.75:
            lx, ly = -width * 0.1, rng.next() * height
        else:
            lx, ly = width * 1.1, rng.next() * height
        lights.append((lx, ly, colors[rng.randint(len(colors))],
                       0.6 + rng.next() * 0.4,
                       max(width, height) * (0.6 + rng.next() * 0.8)))
    scale = 2 + complexity * 2

    def shade(xs, ys):
        n = _noise(xs / width * scale, ys / height * scale, seed, 2)
        rgb = _base(xs.shape, background)
        for lx, ly, color, intensity, spread in lights:
            reach = spread * (0.9 + n * 0.2)
            t = np.maximum(0.0, 1 - np.hypot(xs - lx, ys - ly) / reach) ** 2
            rgb = _mix(rgb, color, t * intensity)
        return rgb

    return shade


def silk(width, height, colors, background, rng, seed, complexity):
    """Quadratic Bezier ribbons with a Gaussian falloff from the spine."""
    ribbons = []
    for _ in range(3 + int(complexity * 3)):
        if rng.next() < 0.5:
            sx = -width * 0.2 if rng.next() < 0.5 else width * 1.2
            sy = rng.next() * height
            ex = width * 1.2 if sx < 0 else -width * 0.2
            ey = rng.next() * height
        else:
            sx = rng.next() * width
            sy = -height * 0.2 if rng.next() < 0.5 else height * 1.2
            ex = rng.next() * width
            ey = height * 1.2 if sy < 0 else -height * 0.2
        cx, cy = rng.next() * width, rng.next() * height
        color = colors[rng.randint(len(colors))]
        span = max(width, height) * (0.15 + rng.next() * 0.25
                                     + complexity * 0.1)
        t = np.linspace(0.0, 1.0, SILK_SAMPLES)
        spine_x = (1 - t) ** 2 * sx + 2 * (1 - t) * t * cx + t * t * ex
        spine_y = (1 - t) ** 2 * sy + 2 * (1 - t) * t * cy + t * t * ey
        ribbons.append((spine_x, spine_y, color, span))

    def shade(xs, ys):
        n = _noise(xs / width * 2, ys / height * 2, seed, 2)
        jitter = (n - 0.5) * 20 * complexity
        px, py = xs + jitter, ys + jitter
        rgb = _base(xs.shape, background)
        for spine_x, spine_y, color, span in ribbons:
            nearest = np.full(xs.shape, np.inf)
            for bx, by in zip(spine_x, spine_y):
                nearest = np.minimum(nearest, (px - bx) ** 2 + (py - by) ** 2)
            d = np.sqrt(nearest) / span
            t = np.where(d < 1, np.exp(-(d * d) * 3) * 0.8, 0.0)
            rgb = _mix(rgb, color, t)
        return rgb

    return shade


_VARIANTS = {
    "softMesh": soft_mesh,
    "lava": lava,
    "plasma": plasma,
    "orbs": orbs,
    "spotlight": spotlight,
    "silk": silk,
}


def shade_bands(shade, width, height, progress=SILENT):
    """Evaluate ``shade`` over the canvas in bands of ``BAND_ROWS`` rows.

    Returns:
        (height, width, 3) float array.
    """
    out = np.empty((height, width, 3))
    xs_row = np.arange(width, dtype=np.float64)
    bands = (height + BAND_ROWS - 1) // BAND_ROWS
    for band in range(bands):
        y0 = band * BAND_ROWS
        y1 = min(height, y0 + BAND_ROWS)
        ys, xs = np.meshgrid(np.arange(y0, y1, dtype=np.float64), xs_row,
                             indexing="ij")
        out[y0:y1] = shade(xs, ys)
        progress.step("bands", band + 1, bands)
    return out


def render_mesh(surface, palette, canvas, rng, variant, complexity,
                progress=SILENT):
    """Draw a gradient-mesh variant pixel by pixel.

    Args:
        surface: Surface sized to the canvas.
        palette: Palette; primitives take its colors over the background.
        canvas: CanvasSpec giving the pixel size.
        rng: Seeded Prng; its first draw seeds the noise lattice.
        variant: softMesh, lava, plasma, orbs, spotlight or silk.
        complexity: Scales primitive count and coordinate warping.
        progress: Progress checkpoint, stepped once per row band.
    """
    width, height = canvas.width, canvas.height
    seed = rng.randint(NOISE_SEED_RANGE)
    shade = _VARIANTS[variant](width, height, list(palette.colors),
                               palette.background, rng, seed, complexity)
    logger.debug("mesh %s: %d bands", variant,
                 (height + BAND_ROWS - 1) // BAND_ROWS)
    surface.write_pixels(shade_bands(shade, width, height, progress))
