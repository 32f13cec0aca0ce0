"""
Command-line interface for wayslope

Usage:
    wayslope map.osm.pbf dem.tif slopes.json
    wayslope map.osm.pbf dem.tif slopes.json --filter highway=path,highway=track
"""

import sys
import argparse
from dataclasses import replace

from loguru import logger
from . import __version__
from .errors import WaySlopeError
from .pipeline import SlopePipeline
from .config import get_config, RESAMPLING_METHODS, OUTPUT_SHAPES
from .collectors.osm.filters import parse_filter, describe_filter


def setup_logging(verbose: bool = False, level: str = "INFO"):
    """Configure logging"""
    logger.remove()
    level = "DEBUG" if verbose else level
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{message}</cyan>",
        level=level
    )


def build_config(args):
    """Apply command-line overrides on top of the global configuration"""
    base = get_config()
    raster = replace(
        base.raster,
        band=args.band if args.band is not None else base.raster.band,
        resampling=args.resampling or base.raster.resampling
    )
    output = replace(
        base.output,
        shape=args.shape or base.output.shape,
        indent=args.indent if args.indent is not None else base.output.indent
    )
    return replace(
        base,
        climb_distance_mode="cumulative" if args.legacy_climb_distance else base.climb_distance_mode,
        raster=raster,
        output=output
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wayslope",
        description="Compute distance, climb and descent for OSM ways from a DEM",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  All highways (default filter):
    wayslope map.osm.pbf dem.tif slopes.json

  Paths and tracks only, as a list of records:
    wayslope map.osm.pbf dem.tif slopes.json -f highway=path,highway=track --shape records
        """
    )
    parser.add_argument("osm_file", help="OSM file to process (PBF or XML)")
    parser.add_argument("elevation_file", help="Elevation raster (e.g. GeoTIFF)")
    parser.add_argument("output_file", help="Output JSON file")
    parser.add_argument(
        "--filter", "-f",
        help="Comma-separated key or key=value conditions; a way matches if any holds (default: highway)"
    )
    parser.add_argument("--shape", choices=OUTPUT_SHAPES, help="Output JSON shape (default: mapping)")
    parser.add_argument("--resampling", choices=RESAMPLING_METHODS, help="Pixel resampling (default: nearest)")
    parser.add_argument("--band", type=int, help="Raster band to sample (default: 1)")
    parser.add_argument(
        "--legacy-climb-distance", action="store_true",
        help="Add the running way distance to climb/descent distance, as older releases did"
    )
    parser.add_argument("--indent", type=int, help="Indent output JSON by this many spaces")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose, get_config().log_level)

    try:
        config = build_config(args)
        filters = parse_filter(args.filter if args.filter is not None else config.default_filter)
        logger.info(f"Filter: {describe_filter(filters)}")

        pipeline = SlopePipeline(config)
        results = pipeline.run_files(args.osm_file, args.elevation_file, filters)
        pipeline.save(results, args.output_file)

        logger.info(f"✓ Generated: {args.output_file}")
        return 0

    except WaySlopeError as e:
        logger.error(f"{type(e).__name__}: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
