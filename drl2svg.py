#!/usr/bin/python3
# Converts KiCad generated drill files (.drl) into mm accurate SVG files that
# can be milled on a CNC (e.g. Snapmaker 2.0 A350T).
#
# Given a --bit-size, every hole is cut as concentric circles spaced by 45% of
# the bit diameter, so the hole disintegrates instead of leaving a loose chunk
# that interrupts the CNC.
#
# Usage: drl2svg --drl board-PTH.drl --bit-size 0.7 --dest board-PTH.svg
#
# Requires 'numpy', 'svgwrite' and 'Pillow'.

import argparse
import io
import logging
import math
import sys
from typing import List, Optional

from concentric_paths import hole_paths
from drill_parser import DEFAULT_BIT_SIZE, DrillJob, Drl2SvgError, ResourceError, parse_drill
from preview import PngPreview
from svg_output import SvgCanvas

logger = logging.getLogger(__name__)

STDIO = '-'
UNIT = 'mm'


def render_holes(job: DrillJob, canvas):
    """Hand the extent and every hole's rings, innermost first, to a canvas."""
    extent = job.extent
    canvas.start_view(extent.width, extent.height, UNIT,
                      extent.left, extent.top, extent.width, extent.height)
    for hole, radii in hole_paths(job):
        for r in radii:
            canvas.circle(hole.cx, hole.cy, r)
    canvas.end()


def read_drill_file(drl: str, bit_size: float) -> DrillJob:
    # Only ASCII directives are matched; undecodable bytes can only sit in ignored lines.
    if drl == STDIO:
        return parse_drill(io.TextIOWrapper(sys.stdin.buffer, encoding='utf-8', errors='replace'), bit_size)

    try:
        with open(drl, 'r', encoding='utf-8', errors='replace') as f:
            return parse_drill(f, bit_size)
    except OSError as e:
        raise ResourceError(f"unable to read {drl!r}: {e}") from e


def build_svg(job: DrillJob) -> SvgCanvas:
    canvas = SvgCanvas()
    render_holes(job, canvas)
    return canvas


def write_svg(canvas: SvgCanvas, dest: Optional[str]):
    if dest is None or dest == STDIO:
        canvas.write(sys.stdout)
        return

    try:
        with open(dest, 'w', encoding='utf-8') as f:
            canvas.write(f)
    except OSError as e:
        raise ResourceError(f"failed to create {dest!r}: {e}") from e


def write_preview(job: DrillJob, preview: str):
    try:
        render_holes(job, PngPreview(preview))
    except (OSError, ValueError) as e:
        raise ResourceError(f"failed to create {preview!r}: {e}") from e


def convert(drl: str = STDIO, dest: Optional[str] = None, bit_size: float = DEFAULT_BIT_SIZE,
            preview: Optional[str] = None) -> DrillJob:
    # Parse and render everything first: a failed run must not leave a partial SVG.
    job = read_drill_file(drl, bit_size)

    extent = job.extent
    logger.info("Holes: %d, tools: %d, extent X:%.3f-%.3f Y:%.3f-%.3f mm",
                len(job.holes), len(job.tools), extent.left, extent.right, extent.top, extent.bottom)

    canvas = build_svg(job)
    if preview:
        write_preview(job, preview)

    write_svg(canvas, dest)
    if dest and dest != STDIO:
        logger.info("SVG generated in '%s'", dest)

    return job


def positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}")
    if not math.isfinite(number) or number <= 0:
        raise argparse.ArgumentTypeError(f"must be a finite number greater than 0, got {value!r}")
    return number


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='drl2svg',
        description="Convert a KiCad drill file into an mm accurate SVG of concentric CNC toolpaths.")
    parser.add_argument("--drl", default=STDIO, help="drill file (default: stdin)")
    parser.add_argument("--bit-size", type=positive_float, default=DEFAULT_BIT_SIZE,
                        help="CNC bit diameter, in mm (default: %(default)s)")
    parser.add_argument("--dest", default=None, help="output SVG filename (default: stdout)")
    parser.add_argument("--preview", default=None, help="optional PNG preview filename")
    parser.add_argument("--debug", action="store_true", help="log more debugging information")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO,
                        format="%(levelname)s: %(message)s", stream=sys.stderr)

    try:
        convert(args.drl, args.dest, args.bit_size, args.preview)
    except Drl2SvgError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    return 0


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
