"""Flow-field line integrator.

A direction field ``angle(x, y)`` is built from noise or simple geometry;
particles step along it in lockstep (one numpy batch) and their paths are
then drawn in particle order, either as strokes or as fading dots.
"""

import logging
import math
from collections import namedtuple

import numpy as np

from .noise import fractal_noise
from .palette import with_alpha
from .progress import SILENT

logger = logging.getLogger(__name__)

NOISE_SEED_RANGE = 1 << 24
CURL_DELTA = 0.01
STREAM_ALPHA = 0.7
TRAIL_ALPHA = 0.6
TRAIL_STRIDE = 1.5

FlowSettings = namedtuple("FlowSettings", ["scale", "particles", "step",
                                           "max_steps", "line_width"])


def flow_settings(width, height, grid_density, complexity):
    """Field scale, particle count, step length, step budget, line width.

    Particle count, step length and step budget are non-decreasing in
    complexity.
    """
    base = max(0.02, 0.15 + (grid_density - 4) * 0.08)
    count = int(math.floor(math.floor(width * height / 2500)
                           * (0.4 + complexity * 1.2)))
    return FlowSettings(scale=base / max(width, height),
                        particles=count,
                        step=2 + complexity * 3,
                        max_steps=40 + int(math.floor(complexity * 160)),
                        line_width=1 + (1 - complexity) * 2)


class FlowField:
    """Direction field for one variant.

    Args:
        variant: Flow variant name.
        width, height: Canvas size in pixels.
        scale: Noise frequency per pixel.
        seed: Noise lattice seed.
        attractors: (n, 2) normalized points used by "converge".
    """

    def __init__(self, variant, width, height, scale, seed, attractors=None):
        self.variant = variant
        self.width = width
        self.height = height
        self.scale = scale
        self.seed = seed
        self.attractors = attractors

    def _noise(self, nx, ny, octaves=3):
        return fractal_noise(nx, ny, self.seed, octaves)

    def angle(self, x, y):
        """Flow direction in radians at pixel positions ``x``, ``y``."""
        u = np.asarray(x, dtype=np.float64) / self.width
        v = np.asarray(y, dtype=np.float64) / self.height
        # Both axes use the width-relative frequency.
        nx = u * self.scale * self.width
        ny = v * self.scale * self.width
        variant = self.variant

        if variant == "curl":
            d = CURL_DELTA
            dx = self._noise(nx + d, ny) - self._noise(nx - d, ny)
            dy = self._noise(nx, ny + d) - self._noise(nx, ny - d)
            return np.arctan2(dx, -dy)
        if variant == "spiral":
            cx, cy = u - 0.5, v - 0.5
            return (np.arctan2(cy, cx) + np.hypot(cx, cy) * 3
                    + self._noise(nx, ny) * 0.5)
        if variant == "converge":
            pull_x = np.zeros_like(u)
            pull_y = np.zeros_like(u)
            total = np.zeros_like(u)
            for ax, ay in self.attractors:
                weight = 1.0 / ((u - ax) ** 2 + (v - ay) ** 2 + 0.01)
                pull_x += (ax - u) * weight
                pull_y += (ay - v) * weight
                total += weight
            return (np.arctan2(pull_y / total, pull_x / total)
                    + self._noise(nx, ny) * 0.3)
        if variant == "turbulent":
            return self._noise(nx * 2, ny * 2, octaves=5) * math.pi * 4
        if variant == "radial":
            return np.arctan2(v - 0.5, u - 0.5) + self._noise(nx, ny) * 0.8
        if variant == "magnetic":
            a1 = np.arctan2(v - 0.5, u - 0.3)
            a2 = np.arctan2(v - 0.5, u - 0.7)
            return (a1 - a2) / 2 + self._noise(nx, ny) * 0.3
        return self._noise(nx, ny) * math.pi * 2


def integrate(field, x0, y0, step, max_steps):
    """Advance all particles together.

    A particle stops after ``max_steps`` steps or on the first step that
    leaves the canvas; that position is not part of its path.

    Returns:
        (xs, ys, lengths): (max_steps + 1, n) position arrays and the number
        of valid points per particle (at least 1, the start).
    """
    n = len(x0)
    xs = np.empty((max_steps + 1, n))
    ys = np.empty((max_steps + 1, n))
    xs[0], ys[0] = x0, y0
    lengths = np.ones(n, dtype=np.int64)
    alive = np.ones(n, dtype=bool)
    x = np.array(x0, dtype=np.float64)
    y = np.array(y0, dtype=np.float64)

    for i in range(1, max_steps + 1):
        if not alive.any():
            xs[i:], ys[i:] = x, y
            break
        theta = field.angle(x, y)
        nx = x + np.cos(theta) * step
        ny = y + np.sin(theta) * step
        inside = ((nx >= 0) & (nx <= field.width)
                  & (ny >= 0) & (ny <= field.height))
        alive &= inside
        x = np.where(alive, nx, x)
        y = np.where(alive, ny, y)
        xs[i], ys[i] = x, y
        lengths += alive
    return xs, ys, lengths


def _seed_particles(rng, count, width, height, colors):
    """x, y, color and a size factor per particle, four draws each."""
    x0 = np.empty(count)
    y0 = np.empty(count)
    chosen = []
    factors = np.empty(count)
    for i in range(count):
        x0[i] = rng.next() * width
        y0[i] = rng.next() * height
        chosen.append(colors[rng.randint(len(colors))])
        factors[i] = rng.next()
    return x0, y0, chosen, factors


def render_flow(surface, palette, canvas, rng, variant, complexity,
                progress=SILENT):
    """Draw a flow-field variant.

    Args:
        surface: Surface sized to the canvas.
        palette: Palette supplying line colors and background.
        canvas: CanvasSpec; grid density sets the field frequency.
        rng: Seeded Prng; seeds the noise, attractors and particles.
        variant: streamlines, particleTrails, curl, spiral, converge,
            turbulent, radial or magnetic.
        complexity: Scales particle count, step length and path length.
        progress: Progress checkpoint, stepped once per particle drawn.
    """
    width, height = canvas.width, canvas.height
    colors = list(palette.colors)
    settings = flow_settings(width, height, canvas.grid_density, complexity)
    seed = rng.randint(NOISE_SEED_RANGE)
    surface.clear(palette.background)

    attractors = None
    if variant == "converge":
        attractors = [(rng.next(), rng.next())
                      for _ in range(3 + rng.randint(3))]
    trails = variant == "particleTrails"
    field = FlowField("streamlines" if trails else variant, width, height,
                      settings.scale, seed, attractors)

    count = settings.particles * (2 if trails else 1)
    if count == 0:
        return
    x0, y0, chosen, factors = _seed_particles(rng, count, width, height,
                                              colors)
    step = settings.step * (TRAIL_STRIDE if trails else 1.0)
    xs, ys, lengths = integrate(field, x0, y0, step, settings.max_steps)
    logger.debug("flow %s: %d particles, %d steps max", variant, count,
                 settings.max_steps)

    for i in range(count):
        n = int(lengths[i])
        if trails:
            size = 1 + factors[i] * 2
            for k in range(n):
                fade = 1 - k / settings.max_steps
                surface.fill_circle(xs[k, i], ys[k, i], size * fade,
                                    with_alpha(chosen[i], fade * TRAIL_ALPHA))
        else:
            points = list(zip(xs[:n, i].tolist(), ys[:n, i].tolist()))
            surface.stroke_polyline(points,
                                    with_alpha(chosen[i], STREAM_ALPHA),
                                    settings.line_width * (0.5 + factors[i]),
                                    cap="round")
        progress.step("particles", i + 1, count)
