"""Generation pipeline: validate parameters, then dispatch on style family.

Validation runs before any surface exists, so a rejected call never
produces a partial image.
"""

import logging
import math
import numbers
from dataclasses import dataclass

from .contour import render_contour
from .errors import InvalidParameter
from .flowfield import render_flow
from .mesh import render_mesh
from .palette import CanvasSpec, coerce_palette
from .progress import Progress
from .prng import Prng
from .styles import (CONTOUR, FLOW, MESH, TERRAIN, TESSELLATION, TILE,
                     VORONOI, parse_style)
from .surface import Surface
from .terrain import render_terrain
from .tessellation import render_tessellation
from .tiles import render_tiles
from .voronoi import render_voronoi

logger = logging.getLogger(__name__)


@dataclass
class ArtParams:
    """Parameters of one generation call."""

    style: str = "tile"
    seed: int = 0
    palette: object = "bauhaus"
    width: int = 512
    height: int = 512
    grid_density: int = 8
    complexity: float = 0.7
    variant: str = None


def _is_int(value):
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def validate(params):
    """Check ``params`` and build the derived records.

    Returns:
        (Style, Palette, CanvasSpec) tuple.

    Raises:
        InvalidParameter: on the first rejected field.
    """
    if not _is_int(params.seed):
        raise InvalidParameter(f"seed must be an integer, got {params.seed!r}")
    for name in ("width", "height", "grid_density"):
        value = getattr(params, name)
        if not _is_int(value) or value <= 0:
            raise InvalidParameter(
                f"{name} must be a positive integer, got {value!r}")

    c = params.complexity
    if (not isinstance(c, numbers.Real) or isinstance(c, bool)
            or math.isnan(c) or not 0.0 <= c <= 1.0):
        raise InvalidParameter(f"complexity must be in [0, 1], got {c!r}")

    style = parse_style(params.style, params.variant)
    palette = coerce_palette(params.palette)
    canvas = CanvasSpec(int(params.width), int(params.height),
                        int(params.grid_density))
    return style, palette, canvas


def render(params, on_progress=None, cancel=None):
    """Render one image.

    Args:
        params: ArtParams instance.
        on_progress: Optional callable receiving ProgressEvent objects.
        cancel: Optional callable or ``threading.Event``-like object; when
            it reports True the render stops with GenerationCancelled.

    Returns:
        PIL Image in RGBA mode, fully opaque.
    """
    style, palette, canvas = validate(params)
    progress = Progress(on_progress, cancel)
    rng = Prng(params.seed)
    complexity = float(params.complexity)
    logger.debug("render %s:%s seed=%d %dx%d grid=%d complexity=%.3f",
                 style.family, style.variant, params.seed, canvas.width,
                 canvas.height, canvas.grid_density, complexity)

    surface = Surface(canvas.width, canvas.height, palette.background)
    args = (surface, palette, canvas, rng, style.variant, complexity,
            progress)
    if style.family == TILE:
        render_tiles(*args)
    elif style.family == TESSELLATION:
        render_tessellation(*args)
    elif style.family == VORONOI:
        render_voronoi(*args)
    elif style.family == CONTOUR:
        render_contour(*args)
    elif style.family == TERRAIN:
        render_terrain(*args)
    elif style.family == FLOW:
        render_flow(*args)
    elif style.family == MESH:
        render_mesh(*args)
    else:
        raise InvalidParameter(f"unhandled style family {style.family!r}")

    if len(palette.colors) == 1:
        # A lone color renders as a two-tone stencil over the background.
        surface.quantize((palette.colors[0], palette.background))
    return surface.to_image()
