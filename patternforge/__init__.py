"""PatternForge - Deterministic procedural pattern and texture images."""

import numpy as np

from .errors import GenerationCancelled, InvalidParameter, PatternForgeError
from .palette import PALETTES, CANVAS_SIZES, Palette
from .progress import ProgressEvent
from .renderer import ArtParams, render
from .styles import list_styles

__version__ = "0.1.0"
__all__ = [
    "generate", "render", "list_styles", "ArtParams", "Palette",
    "ProgressEvent", "PALETTES", "CANVAS_SIZES", "PatternForgeError",
    "InvalidParameter", "GenerationCancelled",
]


def generate(style, seed=None, palette="bauhaus", width=512, height=512,
             grid_density=8, complexity=0.7, variant=None, on_progress=None,
             cancel=None):
    """Generate a pattern image.

    Args:
        style: Style identifier, "family" or "family:variant"
            (e.g. "tile:quarterCircles", "voronoi:stainedGlass").
        seed: Integer seed; the same parameters always give the same
            pixels. A random seed is drawn when None.
        palette: Preset name, Palette, or {"colors": [...],
            "background": ...} mapping.
        width, height: Output size in pixels.
        grid_density: Cells along the longer canvas side; also sets
            site count, motif size and field frequency for non-tile styles.
        complexity: Detail knob in [0, 1].
        variant: Optional variant name, alternative to "family:variant".
        on_progress: Optional callable receiving ProgressEvent objects.
        cancel: Optional callable or threading.Event to stop early.

    Returns:
        PIL Image in RGBA mode.
    """
    if seed is None:
        seed = int(np.random.randint(0, 2**31))
    params = ArtParams(style=style, seed=seed, palette=palette, width=width,
                       height=height, grid_density=grid_density,
                       complexity=complexity, variant=variant)
    return render(params, on_progress=on_progress, cancel=cancel)
