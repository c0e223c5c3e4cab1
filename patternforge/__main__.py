"""CLI entry point for PatternForge."""

import argparse
import logging
import sys
from pathlib import Path

from . import generate
from .errors import PatternForgeError
from .palette import CANVAS_SIZES, PALETTES
from .styles import list_styles


def _size(text):
    try:
        width, height = (int(part) for part in text.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"size must look like WIDTHxHEIGHT, got {text!r}") from None
    return width, height


def _print_styles():
    for family, variants in list_styles().items():
        print(f"{family}: {', '.join(variants)}")
    print(f"palettes: {', '.join(PALETTES)}")
    print(f"presets: {', '.join(CANVAS_SIZES)}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Generate deterministic procedural pattern images"
    )
    parser.add_argument(
        "style", nargs="?", default="tile",
        help='Style as "family" or "family:variant" (default: tile)'
    )
    parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducible generation"
    )
    parser.add_argument(
        "--palette", "-p", default="bauhaus",
        help="Named palette (default: bauhaus)"
    )
    parser.add_argument(
        "--colors", nargs="+", default=None, metavar="COLOR",
        help="Custom foreground colors, e.g. '#E53935' '#1E88E5'"
    )
    parser.add_argument(
        "--background", default=None,
        help="Background color for --colors (default: #FFFFFF)"
    )
    size = parser.add_mutually_exclusive_group()
    size.add_argument(
        "--size", type=_size, default=None, metavar="WxH",
        help="Output size in pixels (default: 512x512)"
    )
    size.add_argument(
        "--preset", choices=sorted(CANVAS_SIZES),
        help="Named canvas size"
    )
    parser.add_argument(
        "--grid", "-g", type=int, default=8,
        help="Grid density, cells along the longer side (default: 8)"
    )
    parser.add_argument(
        "--complexity", "-c", type=float, default=0.7,
        help="Detail level 0.0-1.0 (default: 0.7)"
    )
    parser.add_argument(
        "--variant", default=None,
        help="Variant name, alternative to family:variant"
    )
    parser.add_argument(
        "--output", "-o", default="pattern.png",
        help="Output file path (default: pattern.png)"
    )
    parser.add_argument(
        "--list", action="store_true",
        help="List styles, palettes and size presets, then exit"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Log render details to stderr"
    )

    args = parser.parse_args(argv)

    if args.list:
        _print_styles()
        return 0
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format="%(name)s: %(message)s")

    palette = args.palette
    if args.colors:
        palette = {"colors": args.colors,
                   "background": args.background or "#FFFFFF"}

    width, height = 512, 512
    if args.size:
        width, height = args.size
    elif args.preset:
        width, height = CANVAS_SIZES[args.preset]

    try:
        image = generate(
            args.style,
            seed=args.seed,
            palette=palette,
            width=width,
            height=height,
            grid_density=args.grid,
            complexity=args.complexity,
            variant=args.variant,
        )
    except PatternForgeError as exc:
        parser.error(str(exc))

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    image.save(str(output))
    print(f"Saved {args.style} ({image.size[0]}x{image.size[1]}) to {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
