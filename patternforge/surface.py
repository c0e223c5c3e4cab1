"""Drawing surface shared by all renderers.

Wraps a Pillow RGB image with an RGBA ``ImageDraw`` so every primitive may
carry its own opacity. Angles are in radians, measured clockwise from the
positive x axis (screen coordinates, y down), like an HTML canvas.
"""

import math
from contextlib import contextmanager

import numpy as np
from PIL import Image, ImageDraw


def rotate_points(points, angle, cx=0.0, cy=0.0):
    """Rotate (x, y) points by ``angle`` radians around (cx, cy)."""
    c = math.cos(angle)
    s = math.sin(angle)
    return [(cx + (x - cx) * c - (y - cy) * s,
             cy + (x - cx) * s + (y - cy) * c) for x, y in points]


def cubic_bezier(p0, p1, p2, p3, n=24):
    """Sample a cubic Bezier curve into ``n + 1`` points."""
    pts = []
    for i in range(n + 1):
        t = i / n
        u = 1.0 - t
        a, b, c, d = u * u * u, 3 * u * u * t, 3 * u * t * t, t * t * t
        pts.append((a * p0[0] + b * p1[0] + c * p2[0] + d * p3[0],
                    a * p0[1] + b * p1[1] + c * p2[1] + d * p3[1]))
    return pts


def polygon_path(cx, cy, radius, sides, start_angle=0.0):
    """Vertices of a regular polygon."""
    return [(cx + radius * math.cos(start_angle + 2 * math.pi * i / sides),
             cy + radius * math.sin(start_angle + 2 * math.pi * i / sides))
            for i in range(sides)]


class Surface:
    """Raster drawing target with canvas-like primitives.

    Args:
        width, height: Pixel dimensions.
        background: (R, G, B) fill for the fresh image.
    """

    def __init__(self, width, height, background=(0, 0, 0)):
        self.width = width
        self.height = height
        self.image = Image.new("RGB", (width, height), tuple(background))
        self._draw = ImageDraw.Draw(self.image, "RGBA")
        self._ox = 0.0
        self._oy = 0.0

    # ------------------------------------------------------------------
    # Coordinate handling
    # ------------------------------------------------------------------

    @contextmanager
    def translated(self, dx, dy):
        """Shift all drawing by (dx, dy) inside the ``with`` block."""
        ox, oy = self._ox, self._oy
        self._ox += dx
        self._oy += dy
        try:
            yield self
        finally:
            self._ox, self._oy = ox, oy

    @contextmanager
    def clipped(self, x, y, w, h):
        """Confine drawing to the rectangle [x, x+w) x [y, y+h).

        Drawing is redirected to a crop of the image and pasted back when
        the block exits normally.
        """
        x0 = max(0, int(round(x + self._ox)))
        y0 = max(0, int(round(y + self._oy)))
        x1 = min(self.width, int(round(x + w + self._ox)))
        y1 = min(self.height, int(round(y + h + self._oy)))
        saved = (self.image, self._draw, self._ox, self._oy,
                 self.width, self.height)
        if x1 <= x0 or y1 <= y0:
            sub = Image.new("RGB", (1, 1))
            paste = False
        else:
            sub = self.image.crop((x0, y0, x1, y1))
            paste = True
        self.image = sub
        self._draw = ImageDraw.Draw(sub, "RGBA")
        self._ox -= x0
        self._oy -= y0
        self.width, self.height = sub.size
        try:
            yield self
            if paste:
                saved[0].paste(sub, (x0, y0))
        finally:
            (self.image, self._draw, self._ox, self._oy,
             self.width, self.height) = saved

    def _pts(self, points):
        return [(x + self._ox, y + self._oy) for x, y in points]

    def _bbox(self, cx, cy, rx, ry=None):
        if ry is None:
            ry = rx
        x = cx + self._ox
        y = cy + self._oy
        return [x - rx, y - ry, x + rx, y + ry]

    # ------------------------------------------------------------------
    # Fills
    # ------------------------------------------------------------------

    def clear(self, color):
        self._draw.rectangle([0, 0, self.width, self.height], fill=color)

    def fill_rect(self, x, y, w, h, color):
        """Fill the half-open pixel span [x, x+w) x [y, y+h).

        Edges are rounded independently so adjacent rectangles on a
        fractional grid neither overlap nor leave seams.
        """
        x0 = int(round(x + self._ox))
        y0 = int(round(y + self._oy))
        x1 = int(round(x + w + self._ox)) - 1
        y1 = int(round(y + h + self._oy)) - 1
        if x1 < x0 or y1 < y0:
            return
        self._draw.rectangle([x0, y0, x1, y1], fill=color)

    def fill_polygon(self, points, color):
        if len(points) < 3:
            return
        self._draw.polygon(self._pts(points), fill=color)

    def fill_circle(self, cx, cy, r, color):
        if r <= 0:
            return
        self._draw.ellipse(self._bbox(cx, cy, r), fill=color)

    def fill_ellipse(self, cx, cy, rx, ry, color):
        if rx <= 0 or ry <= 0:
            return
        self._draw.ellipse(self._bbox(cx, cy, rx, ry), fill=color)

    def fill_pie(self, cx, cy, r, start, end, color):
        """Filled circular sector from ``start`` to ``end`` radians."""
        if r <= 0:
            return
        self._draw.pieslice(self._bbox(cx, cy, r), math.degrees(start),
                            math.degrees(end), fill=color)

    # ------------------------------------------------------------------
    # Strokes
    # ------------------------------------------------------------------

    def stroke_polyline(self, points, color, width=1.0, cap="butt"):
        """Stroke an open path with round joins.

        Args:
            cap: "butt", "round" or "square" line ends.
        """
        if len(points) < 2:
            return
        lw = max(1, int(round(width)))
        pts = list(points)
        if cap == "square":
            pts = _extend_ends(pts, lw / 2.0)
        self._draw.line(self._pts(pts), fill=color, width=lw,
                        joint="curve" if len(pts) > 2 else None)
        if cap == "round" and lw > 2:
            for x, y in (pts[0], pts[-1]):
                self.fill_circle(x, y, lw / 2.0, color)

    def stroke_polygon(self, points, color, width=1.0):
        if len(points) < 2:
            return
        lw = max(1, int(round(width)))
        closed = list(points) + [points[0], points[1]]
        self._draw.line(self._pts(closed), fill=color, width=lw,
                        joint="curve")

    def stroke_circle(self, cx, cy, r, color, width=1.0):
        lw = max(1, int(round(width)))
        outer = r + lw / 2.0
        if outer <= 0:
            return
        self._draw.ellipse(self._bbox(cx, cy, outer), outline=color,
                           width=lw)

    def stroke_arc(self, cx, cy, r, start, end, color, width=1.0,
                   cap="butt"):
        """Stroke a circular arc centred on radius ``r``."""
        lw = max(1, int(round(width)))
        outer = r + lw / 2.0
        if outer <= 0:
            return
        self._draw.arc(self._bbox(cx, cy, outer), math.degrees(start),
                       math.degrees(end), fill=color, width=lw)
        if cap == "round" and lw > 2:
            for a in (start, end):
                self.fill_circle(cx + r * math.cos(a), cy + r * math.sin(a),
                                 lw / 2.0, color)

    # ------------------------------------------------------------------
    # Pixel access
    # ------------------------------------------------------------------

    @property
    def pixels(self):
        """Copy of the current pixels as a (height, width, 3) uint8 array."""
        return np.array(self.image, dtype=np.uint8)

    def write_pixels(self, rgb):
        """Replace the whole buffer with a (height, width, 3) array.

        Float input is treated as 0..255, clipped and rounded.
        """
        arr = np.asarray(rgb)
        if arr.dtype != np.uint8:
            arr = np.nan_to_num(arr, nan=0.0, posinf=255.0, neginf=0.0)
            arr = np.clip(np.round(arr), 0, 255).astype(np.uint8)
        self.image = Image.fromarray(np.ascontiguousarray(arr), "RGB")
        self._draw = ImageDraw.Draw(self.image, "RGBA")

    def quantize(self, colors):
        """Snap every pixel to the nearest of ``colors`` (first wins ties)."""
        lut = np.array(colors, dtype=np.int32)
        px = self.pixels.astype(np.int32)
        dist = np.stack([((px - c) ** 2).sum(axis=-1) for c in lut])
        self.write_pixels(lut[dist.argmin(axis=0)].astype(np.uint8))

    def composite(self, rgba, x=0, y=0):
        """Alpha-blend a (h, w, 4) uint8 layer with its top-left at (x, y)."""
        layer = Image.fromarray(np.ascontiguousarray(rgba, dtype=np.uint8),
                                "RGBA")
        self.image.paste(layer, (int(round(x + self._ox)),
                                 int(round(y + self._oy))), layer)

    def to_image(self):
        """Final opaque RGBA image."""
        return self.image.convert("RGBA")


def _extend_ends(points, amount):
    """Push the first and last points outward along their segments."""
    (x0, y0), (x1, y1) = points[0], points[1]
    (xa, ya), (xb, yb) = points[-2], points[-1]
    d0 = math.hypot(x1 - x0, y1 - y0) or 1.0
    d1 = math.hypot(xb - xa, yb - ya) or 1.0
    first = (x0 - (x1 - x0) / d0 * amount, y0 - (y1 - y0) / d0 * amount)
    last = (xb + (xb - xa) / d1 * amount, yb + (yb - ya) / d1 * amount)
    return [first] + points[1:-1] + [last]
