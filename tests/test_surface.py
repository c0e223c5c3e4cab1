"""Tests for the drawing surface."""

import math

import numpy as np
import pytest

RED = (255, 0, 0)
WHITE = (255, 255, 255)


def _surface(width=20, height=20):
    from patternforge.surface import Surface
    return Surface(width, height, WHITE)


def test_fill_rect_half_open():
    s = _surface()
    s.fill_rect(2, 3, 4, 5, RED)
    mask = (s.pixels == RED).all(axis=-1)
    expected = np.zeros((20, 20), dtype=bool)
    expected[3:8, 2:6] = True
    np.testing.assert_array_equal(mask, expected)


def test_adjacent_fractional_rects_leave_no_seam():
    s = _surface()
    cell = 20 / 3
    for i in range(3):
        s.fill_rect(i * cell, 0, cell, 20, RED)
    assert (s.pixels == RED).all()


def test_translated_restores_origin():
    s = _surface()
    with s.translated(5, 5):
        s.fill_rect(0, 0, 2, 2, RED)
    s.fill_rect(0, 0, 1, 1, RED)
    px = s.pixels
    assert tuple(px[5, 5]) == RED
    assert tuple(px[0, 0]) == RED
    assert tuple(px[2, 2]) == WHITE


def test_clipped_confines_drawing():
    s = _surface()
    with s.clipped(5, 5, 10, 10):
        s.fill_circle(10, 10, 30, RED)
    mask = (s.pixels == RED).all(axis=-1)
    assert mask[5:15, 5:15].all()
    assert mask.sum() == 100


def test_clip_outside_canvas_draws_nothing():
    s = _surface()
    with s.clipped(50, 50, 10, 10):
        s.fill_rect(0, 0, 100, 100, RED)
    assert (s.pixels == 255).all()


def test_alpha_fill_blends():
    s = _surface()
    s.fill_rect(0, 0, 20, 20, (0, 0, 0, 128))
    assert abs(int(s.pixels[0, 0, 0]) - 127) <= 1


def test_write_pixels_clips_and_rounds():
    s = _surface(2, 1)
    s.write_pixels(np.array([[[300.0, -4.0, 127.6], [np.nan, 0.4, 254.5]]]))
    np.testing.assert_array_equal(s.pixels,
                                  [[[255, 0, 128], [0, 0, 254]]])


def test_composite_places_layer():
    s = _surface()
    layer = np.zeros((2, 3, 4), dtype=np.uint8)
    layer[..., 0] = 255
    layer[..., 3] = 255
    s.composite(layer, 4, 6)
    mask = (s.pixels == RED).all(axis=-1)
    assert mask.sum() == 6
    assert mask[6:8, 4:7].all()


def test_to_image_is_rgba():
    img = _surface(3, 2).to_image()
    assert img.mode == "RGBA"
    assert img.size == (3, 2)


def test_polygon_path_vertices():
    from patternforge.surface import polygon_path
    pts = polygon_path(0, 0, 2, 4)
    np.testing.assert_allclose(pts, [(2, 0), (0, 2), (-2, 0), (0, -2)],
                               atol=1e-12)


def test_rotate_points():
    from patternforge.surface import rotate_points
    ((x, y),) = rotate_points([(2, 1)], math.pi / 2, 1, 1)
    assert (x, y) == pytest.approx((1, 2))


def test_cubic_bezier_endpoints():
    from patternforge.surface import cubic_bezier
    pts = cubic_bezier((0, 0), (1, 2), (3, 2), (4, 0), n=8)
    assert len(pts) == 9
    assert pts[0] == (0, 0)
    assert pts[-1] == pytest.approx((4, 0))


def test_quantize_snaps_to_nearest():
    s = _surface(3, 1)
    s.write_pixels(np.array([[[250, 10, 10], [200, 200, 200], [0, 0, 0]]],
                            dtype=np.uint8))
    s.quantize([RED, WHITE])
    np.testing.assert_array_equal(s.pixels, [[RED, WHITE, RED]])
