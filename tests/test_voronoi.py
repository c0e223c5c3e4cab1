"""Tests for the Voronoi cell renderer."""

import numpy as np
import pytest
from PIL import Image, ImageDraw

COLORS = [(229, 57, 53), (30, 136, 229), (253, 216, 53)]


def _label_image(cells, size):
    """Rasterize cell polygons with label = index + 1 (0 = uncovered)."""
    labels = Image.new("I", size, 0)
    draw = ImageDraw.Draw(labels)
    for i, verts in enumerate(cells):
        draw.polygon([tuple(v) for v in verts.tolist()], fill=i + 1)
    return np.array(labels)


def _nearest_site(sites, width, height):
    ys, xs = np.mgrid[0:height, 0:width].astype(float)
    d = np.stack([(xs - s.x) ** 2 + (ys - s.y) ** 2 for s in sites])
    return d.argmin(axis=0) + 1


def test_site_count_formula():
    from patternforge.voronoi import site_count
    assert site_count(8, 0.7) == int((20 + 4 * 15) * (0.5 + 0.56))
    assert site_count(4, 0.0) == 10
    # Low grid densities would go negative; at least three sites remain.
    assert site_count(1, 0.0) == 3


def test_sites_cover_margin():
    from patternforge.prng import Prng
    from patternforge.voronoi import scatter_sites
    sites = scatter_sites(200, 100, 500, COLORS, Prng(3))
    xs = np.array([s.x for s in sites])
    ys = np.array([s.y for s in sites])
    assert xs.min() >= -30 and xs.max() <= 230
    assert ys.min() >= -30 and ys.max() <= 130
    assert xs.min() < 0 and xs.max() > 200
    assert all(s.color in COLORS for s in sites)


def test_boundary_is_equidistant_for_two_sites():
    from patternforge.voronoi import cell_boundary
    points = np.array([[40.0, 50.0], [60.0, 50.0]])
    verts = cell_boundary(0, points, reach=200, rays=72)
    # Ray 0 points along +x toward the other site; bisector at x = 50.
    assert 49.0 <= verts[0, 0] <= 50.0
    assert verts[0, 1] == pytest.approx(50.0)


def test_twenty_site_pixel_accounting():
    """Per-cell pixel counts add up to the canvas within edge tolerance."""
    from patternforge.prng import Prng
    from patternforge.voronoi import compute_cells, scatter_sites
    width = height = 256
    sites = scatter_sites(width, height, 20, COLORS, Prng(7))
    cells = compute_cells(sites, width, height)
    assert len(cells) == 20
    assert all(c.shape == (72, 2) for c in cells)

    labels = _label_image(cells, (width, height))
    counts = np.bincount(labels.ravel(), minlength=21)
    total = width * height
    assert abs(counts[1:].sum() - total) <= 0.01 * total

    nearest = _nearest_site(sites, width, height)
    agreement = (labels == nearest).mean()
    assert agreement > 0.97


def test_cells_variant_writes_site_colors():
    from patternforge import generate
    palette = {"colors": ["#E53935", "#1E88E5"], "background": "#000000"}
    arr = np.array(generate("voronoi:cells", seed=7, palette=palette,
                            width=128, height=128, grid_density=4,
                            complexity=0.5))[..., :3]
    colors = {tuple(c) for c in arr.reshape(-1, 3)}
    assert colors <= {(229, 57, 53), (30, 136, 229), (0, 0, 0)}
    background = (arr == 0).all(axis=-1).mean()
    assert background < 0.05


def test_coincident_sites_stay_finite():
    from patternforge.voronoi import cell_boundary, inset_polygon
    points = np.array([[10.0, 10.0], [10.0, 10.0], [30.0, 30.0]])
    verts = cell_boundary(0, points, reach=100)
    assert np.isfinite(verts).all()
    shrunk = inset_polygon(np.array([[10.0, 10.0], [12.0, 10.0]]),
                           (10.0, 10.0), 3.0)
    assert np.isfinite(shrunk).all()
    np.testing.assert_allclose(shrunk, [[10.0, 10.0], [10.0, 10.0]])


def _gap(arr):
    return (arr == 0).all(axis=-1).mean()


def test_mosaic_leaves_gaps():
    from patternforge import generate
    kwargs = dict(seed=2, width=96, height=96, grid_density=6, complexity=0.5,
                  palette={"colors": ["#E53935", "#1E88E5"],
                           "background": "#000000"})
    cells = np.array(generate("voronoi:cells", **kwargs))[..., :3]
    mosaic = np.array(generate("voronoi:mosaic", **kwargs))[..., :3]
    assert _gap(mosaic) > _gap(cells)


def test_progress_per_cell():
    from patternforge import generate
    from patternforge.voronoi import site_count
    events = []
    generate("voronoi", seed=1, width=48, height=48, grid_density=4,
             complexity=0.0, on_progress=events.append)
    assert len(events) == site_count(4, 0.0)
    assert events[-1].done == events[-1].total
