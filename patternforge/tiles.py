"""Tile compositor: fills the canvas grid cell by cell from a pattern list."""

import logging
from collections import namedtuple

from .patterns import CONTINUOUS_STYLES, STYLE_PATTERNS, solid_block
from .progress import SILENT

logger = logging.getLogger(__name__)

# Salt of the stream deciding pattern vs. solid per cell.
DECISION_SALT = 0x711E

TileCell = namedtuple("TileCell", ["row", "col", "x", "y", "patterned"])


def plan_tiles(canvas, rng, complexity, continuous=False):
    """Decide, per cell in row-major order, whether it gets a pattern.

    Uses exactly one draw of ``rng`` per cell, so for a fixed stream a cell
    patterned at some complexity stays patterned at every higher one.

    Args:
        canvas: CanvasSpec describing the grid.
        rng: Decision stream.
        complexity: Probability in [0, 1] of a patterned cell.
        continuous: Pattern every cell regardless of complexity.

    Returns:
        List of TileCell.
    """
    cell = canvas.cell_size
    cols, rows = canvas.grid_shape
    plan = []
    for row in range(rows):
        for col in range(cols):
            draw = rng.next()
            plan.append(TileCell(row, col, col * cell, row * cell,
                                 continuous or draw < complexity))
    return plan


def render_tiles(surface, palette, canvas, rng, variant, complexity,
                 progress=SILENT):
    """Draw a tile-family style onto ``surface``.

    Args:
        surface: Surface sized to the canvas.
        palette: Palette supplying colors and background.
        canvas: CanvasSpec with the grid density.
        rng: Seeded Prng; forked into decision and drawing streams.
        variant: Tile variant name, e.g. "quarterCircles".
        complexity: Pattern density (stroke weight for Truchet variants).
        progress: Progress checkpoint, stepped once per row.
    """
    patterns = STYLE_PATTERNS[variant]
    continuous = variant in CONTINUOUS_STYLES
    decisions = rng.fork(DECISION_SALT)
    plan = plan_tiles(canvas, decisions, complexity, continuous)
    colors = list(palette.colors)
    size = canvas.cell_size
    cols, rows = canvas.grid_shape
    logger.debug("tiles %s: %dx%d cells of %.2fpx", variant, cols, rows, size)

    surface.clear(palette.background)
    for tile in plan:
        with surface.clipped(tile.x, tile.y, size, size), \
                surface.translated(tile.x, tile.y):
            if tile.patterned:
                pattern = rng.pick(patterns)
                pattern(surface, size, colors, rng, complexity)
            else:
                solid_block(surface, size, colors, rng)
        if tile.col == cols - 1:
            progress.step("tiles", tile.row + 1, rows)

