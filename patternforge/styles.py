"""Style descriptors: a closed set of renderer families and their variants.

A style identifier is ``"family:variant"`` or just ``"family"`` (default
variant). Names are matched case-insensitively with ``-``, ``_`` and spaces
ignored, so ``"tile:quarter-circles"`` and ``"Tile:Quarter Circles"`` both
resolve to ``Style("tile", "quarterCircles")``.
"""

from collections import namedtuple

from .errors import InvalidParameter

TILE = "tile"
TESSELLATION = "tessellation"
VORONOI = "voronoi"
CONTOUR = "contour"
TERRAIN = "terrain"
FLOW = "flow"
MESH = "mesh"

# Canonical variant names, default first.
VARIANTS = {
    TILE: ("quarterCircles", "concentric", "shadowBlocks", "mondrian",
           "diamonds", "circles", "artDeco", "memphis", "truchet",
           "truchetCurved", "truchetOutlined", "truchetDiagonal",
           "truchetTriangles", "truchetWeave"),
    TESSELLATION: ("islamicStars", "herringbone", "hexagons", "triangles",
                   "basketweave", "penrose"),
    VORONOI: ("cells", "stainedGlass", "mosaic", "cracked", "honeycomb",
              "crystals"),
    CONTOUR: ("topographic", "elevation", "islands", "ridges", "thermal",
              "interference", "magnetic"),
    TERRAIN: ("mountains", "mountainsNoSun", "dunes", "waves", "peaks",
              "aurora", "reflection"),
    FLOW: ("streamlines", "particleTrails", "curl", "spiral", "converge",
           "turbulent", "radial", "magnetic"),
    MESH: ("softMesh", "lava", "plasma", "orbs", "spotlight", "silk"),
}

# Alternative spellings accepted for a few variants.
_ALIASES = {
    (CONTOUR, "soundwaves"): "interference",
    (FLOW, "curlnoise"): "curl",
    (FLOW, "trails"): "particleTrails",
    (FLOW, "field"): "streamlines",
    (TERRAIN, "nosun"): "mountainsNoSun",
    (TILE, "pipes"): "truchetCurved",
}

_FAMILY_ALIASES = {
    "grid": TILE,
    "tiles": TILE,
    "tessellations": TESSELLATION,
    "cells": VORONOI,
    "topo": CONTOUR,
    "layers": TERRAIN,
    "flowfield": FLOW,
    "gradientmesh": MESH,
    "gradient": MESH,
}

Style = namedtuple("Style", ["family", "variant"])


def _key(name):
    return "".join(ch for ch in str(name).lower() if ch not in "-_ ")


def parse_style(style, variant=None):
    """Resolve a style identifier (and optional variant) to a ``Style``.

    Raises:
        InvalidParameter: for an unknown family or variant, or when the
            identifier and ``variant`` name different variants.
    """
    if isinstance(style, Style):
        family_name, embedded = style.family, style.variant
    else:
        if not isinstance(style, str) or not style.strip():
            raise InvalidParameter(f"style must be a non-empty string, "
                                   f"got {style!r}")
        family_name, _, embedded = style.partition(":")
        embedded = embedded or None

    family = _key(family_name)
    family = _FAMILY_ALIASES.get(family, family)
    if family not in VARIANTS:
        raise InvalidParameter(
            f"unknown style family {family_name!r}; "
            f"available: {', '.join(VARIANTS)}")

    resolved = None
    for requested in (embedded, variant):
        if requested is None:
            continue
        name = _resolve_variant(family, requested)
        if resolved is not None and name != resolved:
            raise InvalidParameter(
                f"style {style!r} conflicts with variant {variant!r}")
        resolved = name

    return Style(family, resolved or VARIANTS[family][0])


def _resolve_variant(family, requested):
    key = _key(requested)
    for name in VARIANTS[family]:
        if _key(name) == key:
            return name
    alias = _ALIASES.get((family, key))
    if alias is not None:
        return alias
    raise InvalidParameter(
        f"unknown {family} variant {requested!r}; "
        f"available: {', '.join(VARIANTS[family])}")


def list_styles():
    """Mapping of family name to its variant names."""
    return {family: list(names) for family, names in VARIANTS.items()}
