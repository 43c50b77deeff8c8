import argparse
import logging
import sys
from pathlib import Path

from halftone.charsets import RAMPS, resolve_ramp
from halftone.config import DEFAULT_CELL_SIZE, DEFAULT_THRESHOLD, HalftoneConfig
from halftone.converter import compute
from halftone.errors import ConfigurationError, InputError
from halftone.export import grid_to_json, save_surface
from halftone.renderers import STYLES


def main(argv=None):
    parser = argparse.ArgumentParser(description="Render an image as a halftone dot matrix and ASCII art")
    parser.add_argument("image", help="Path to input image")
    parser.add_argument(
        "-s", "--cell-size", type=int, default=DEFAULT_CELL_SIZE, help=f"Cell size in pixels (default: {DEFAULT_CELL_SIZE})"
    )
    parser.add_argument(
        "-t",
        "--threshold",
        type=int,
        default=DEFAULT_THRESHOLD,
        help=f"Brightness threshold 0-255; also the alpha cutoff (default: {DEFAULT_THRESHOLD})",
    )
    parser.add_argument("-c", "--contrast", type=float, default=1.0, help="Contrast factor (default: 1.0, no change)")
    parser.add_argument(
        "-r",
        "--ramp",
        default="default",
        help=f"Glyph ramp from sparse to dense: one of {', '.join(sorted(RAMPS))} or a literal string (default: default)",
    )
    parser.add_argument("--font", default=None, help="Path to a .ttf font for the ASCII image")
    parser.add_argument("--style", default="ascii", choices=STYLES, help="Style to save with --output (default: ascii)")
    parser.add_argument("-o", "--output", default=None, help="Save the selected style as a PNG instead of printing text")
    parser.add_argument(
        "--full-size", action="store_true", default=False, help="Scale the saved PNG to the source image's resolution"
    )
    parser.add_argument("--grid-json", default=None, help="Also write the cell grid as JSON to this path")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level (default: WARNING)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(stream=sys.stderr, level=getattr(logging, args.log_level), format="%(levelname)s: %(message)s")

    image_path = Path(args.image)
    if not image_path.exists():
        print(f"File not found: {image_path}", file=sys.stderr)
        sys.exit(1)

    config = HalftoneConfig(
        cell_size=args.cell_size,
        brightness_threshold=args.threshold,
        contrast_factor=args.contrast,
        glyph_ramp=resolve_ramp(args.ramp),
        font_path=args.font,
    )
    try:
        result = compute(image_path, config)
    except ConfigurationError as e:
        print(f"Invalid settings: {e}", file=sys.stderr)
        sys.exit(2)
    except InputError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    if args.grid_json:
        Path(args.grid_json).write_text(grid_to_json(result.grid), encoding="utf-8")

    if args.output:
        size = result.source_size if args.full_size else None
        save_surface(result.surface(args.style), args.output, size=size)
    else:
        print(result.ascii_text)
