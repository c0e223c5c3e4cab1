"""Pixel checksums for fixed parameter sets.

Every case must have an entry in ``golden/checksums.json``. Set
``PATTERNFORGE_UPDATE_GOLDEN=1`` to (re)record entries after an intended
change in rendering; without it a missing entry is a failure.
"""

import hashlib
import json
import os
from pathlib import Path

import numpy as np
import pytest

UPDATE = os.environ.get("PATTERNFORGE_UPDATE_GOLDEN") == "1"
CHECKSUMS = Path(__file__).parent / "golden" / "checksums.json"

TWO_COLOR = {"colors": ["#E53935", "#1E88E5"], "background": "#F5F5DC"}

CASES = {
    "tile-quarter-circles": dict(style="tile:quarterCircles", seed=42,
                                 palette=TWO_COLOR, width=512, height=512,
                                 grid_density=8, complexity=0.7),
    "voronoi-stained-glass": dict(style="voronoi:stainedGlass", seed=7,
                                  palette="nordic", width=200, height=150),
    "contour-topographic": dict(style="contour:topographic", seed=11,
                                palette="forest", width=160, height=160),
    "terrain-reflection": dict(style="terrain:reflection", seed=5,
                               palette="sunset", width=240, height=160),
    "flow-curl": dict(style="flow:curl", seed=3, palette="cool-ocean",
                      width=160, height=120),
    "mesh-lava": dict(style="mesh:lava", seed=8, palette="retro-pop",
                      width=120, height=120),
}


def _digest(image):
    pixels = np.ascontiguousarray(np.array(image))
    return hashlib.sha256(pixels.tobytes()).hexdigest()


def _load():
    if CHECKSUMS.exists():
        return json.loads(CHECKSUMS.read_text())
    return {}


@pytest.mark.parametrize("name", sorted(CASES))
def test_golden_checksum(name):
    from patternforge import generate
    digest = _digest(generate(**CASES[name]))
    known = _load()
    if UPDATE:
        known[name] = digest
        CHECKSUMS.parent.mkdir(exist_ok=True)
        CHECKSUMS.write_text(json.dumps(known, indent=2, sort_keys=True)
                             + "\n")
    assert name in known, (
        f"no recorded checksum for {name}; rerun with "
        f"PATTERNFORGE_UPDATE_GOLDEN=1 to record it")
    assert digest == known[name]
