"""Tests for the whole-canvas tessellations."""

import numpy as np
import pytest

VARIANTS = ["islamicStars", "herringbone", "hexagons", "triangles",
            "basketweave", "penrose"]
PALETTE = {"colors": ["#E53935", "#1E88E5", "#FDD835"],
           "background": "#000000"}


@pytest.mark.parametrize("variant", VARIANTS)
def test_draws_palette_colors(variant):
    from patternforge import generate
    arr = np.array(generate(f"tessellation:{variant}", seed=4,
                            palette=PALETTE, width=120, height=90,
                            grid_density=6, complexity=0.5))[..., :3]
    present = {tuple(c) for c in arr.reshape(-1, 3)}
    assert len(present & {(229, 57, 53), (30, 136, 229), (253, 216, 53)}) >= 2
    assert (arr == 0).all(axis=-1).mean() < 0.95


@pytest.mark.parametrize("variant", VARIANTS)
def test_progress_reaches_total(variant):
    from patternforge import generate
    events = []
    generate(f"tessellation:{variant}", seed=4, width=100, height=60,
             grid_density=5, on_progress=events.append)
    assert events
    assert [e.done for e in events] == list(range(1, len(events) + 1))
    assert events[-1].done == events[-1].total


@pytest.mark.parametrize("variant", VARIANTS)
def test_single_color(variant):
    from patternforge import generate
    img = generate(f"tessellation:{variant}", seed=2, width=40, height=40,
                   palette={"colors": ["#336699"], "background": "#FFFFFF"})
    assert img.size == (40, 40)
