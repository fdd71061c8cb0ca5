"""
Command-line watermark removal.

Inpaints one or more rectangles of an image and saves the result.

Usage:
    python remove_watermark.py photo.jpg --region 40,40,20,20 --region 300,10,80,30
    python remove_watermark.py photo.jpg -r 40,40,20,20 -o clean.webp --quality 85
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import numpy as np
from PIL import Image

from WR_Libs.constants import (
    CONTEXT_PADDING,
    DEFAULT_EXPORT_FORMAT,
    DEFAULT_EXPORT_QUALITY,
    EXPORT_FORMATS,
    NODE_TYPE_EXPORT,
    RECONSTRUCTION_RADIUS,
)
from WR_Libs.InpaintingLib.image_export import build_export_filename, normalize_export_format
from WR_Libs.InpaintingLib.inpaint_models import ConfigError, InpaintError, SelectionSet
from WR_Libs.InpaintingLib.region_inpainter import inpaint_regions
from WR_Libs.NodesLib.export_node import create_export_node
from WR_Libs.NodesLib.node_executors import get_default_registry

logger = logging.getLogger(__name__)


def parse_region(text: str) -> List[int]:
    """Parse 'X,Y,W,H' into four integers."""
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != 4:
        raise argparse.ArgumentTypeError(f"region must be X,Y,W,H, got '{text}'")
    try:
        return [int(p) for p in parts]
    except ValueError:
        raise argparse.ArgumentTypeError(f"region values must be integers, got '{text}'")


def parse_quality(text: str) -> int:
    """Parse a lossy quality between 1 and 100."""
    try:
        quality = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"quality must be an integer, got '{text}'")
    if not (1 <= quality <= 100):
        raise argparse.ArgumentTypeError(f"quality must be 1-100, got {quality}")
    return quality


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Remove watermarks by inpainting selected areas")
    parser.add_argument("input", help="Image to clean")
    parser.add_argument("--region", "-r", type=parse_region, action="append", required=True,
                        help="Area to remove as X,Y,W,H (repeatable)")
    parser.add_argument("--output", "-o", help="Output file or directory (default: next to input)")
    parser.add_argument("--format", "-f", dest="output_format", default=None,
                        choices=sorted(set(EXPORT_FORMATS) | {"jpg"}),
                        help=f"Output format (default: from the -o suffix, else {DEFAULT_EXPORT_FORMAT})")
    parser.add_argument("--quality", "-q", type=parse_quality, default=DEFAULT_EXPORT_QUALITY,
                        help="Lossy quality 1-100")
    parser.add_argument("--padding", type=int, default=CONTEXT_PADDING,
                        help="Context margin around each area in pixels")
    parser.add_argument("--radius", type=int, default=RECONSTRUCTION_RADIUS,
                        help="Reconstruction radius in pixels")
    parser.add_argument("--reconstruct-alpha", action="store_true",
                        help="Also rebuild transparency inside the areas")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def resolve_output(input_path: Path, output: Optional[str], output_format: Optional[str]) -> Tuple[Path, str]:
    """
    Pick the output path and format.
    
    Without --format the format follows the -o file suffix, falling back to
    the default. An explicit --format wins over the suffix, with a warning
    when the two disagree.
    """
    suffix_format = None
    if output and not Path(output).is_dir() and Path(output).suffix:
        try:
            suffix_format = normalize_export_format(Path(output).suffix)
        except ConfigError:
            suffix_format = None

    if output_format is None:
        chosen = suffix_format or DEFAULT_EXPORT_FORMAT
    else:
        chosen = normalize_export_format(output_format)
        if suffix_format and suffix_format != chosen:
            logger.warning(f"Writing {chosen} data to {output} (suffix suggests {suffix_format})")

    path = Path(output) if output else input_path.parent / build_export_filename(chosen)
    return path, chosen


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    input_path = Path(args.input)
    output, output_format = resolve_output(input_path, args.output, args.output_format)

    try:
        with Image.open(input_path) as source:
            buffer = np.array(source.convert("RGBA"), dtype=np.uint8)
    except OSError as e:
        logger.error(f"Cannot read {input_path}: {e}")
        return 2

    selections = SelectionSet()
    for x, y, width, height in args.region:
        selections.add(x, y, width, height)

    height, width = buffer.shape[:2]
    try:
        result = inpaint_regions(
            buffer,
            width,
            height,
            list(selections),
            on_progress=lambda pct: logger.info(f"Progress: {pct}%"),
            padding=args.padding,
            radius=args.radius,
            reconstruct_alpha=args.reconstruct_alpha,
        )
    except InpaintError as e:
        logger.error(f"Inpainting failed: {e}")
        return 2

    if not result.processed:
        logger.error("No selection could be processed")
        return 1

    node = create_export_node("export", output, output_format, args.quality)
    try:
        saved = get_default_registry().execute(NODE_TYPE_EXPORT, node, [Image.fromarray(buffer)])
    except (ValueError, OSError) as e:
        logger.error(f"Export failed: {e}")
        return 2

    print(f"Saved {saved}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
