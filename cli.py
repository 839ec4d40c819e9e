#!/usr/bin/env python
"""
Command-line interface for Road & Trail Density

Usage:
    python cli.py process --polygon-file area.json --output result.json
    python cli.py serve --port 3001
"""

import os
import sys
import json
import argparse
from typing import Any, List

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from loguru import logger
from road_density.errors import InvalidInput, RoadDensityError
from road_density.pipeline import AreaProcessingPipeline


def setup_logging(verbose: bool = False):
    """Configure logging"""
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{message}</cyan>",
        level=level
    )


def load_polygon_points(data: Any) -> List[List[float]]:
    """
    Extract [lat, lon] points from a polygon file

    Accepts a bare list of [lat, lon] pairs, a {"polygon": [...]} request
    body, or a GeoJSON Polygon / Feature (whose coordinates are [lon, lat]).
    """
    if isinstance(data, dict):
        if "polygon" in data:
            return data["polygon"]
        geometry = data.get("geometry", data)
        if isinstance(geometry, dict) and geometry.get("type") == "Polygon":
            try:
                return [[lat, lon] for lon, lat in geometry["coordinates"][0]]
            except (KeyError, IndexError, TypeError, ValueError):
                raise InvalidInput("GeoJSON Polygon outer ring must be a list of [lon, lat] positions")
        raise InvalidInput("Polygon file must hold a point list, a request body or a GeoJSON Polygon")
    return data


def cmd_process(args):
    """Compute road and trail density for a polygon"""
    setup_logging(args.verbose)

    if not os.path.exists(args.polygon_file):
        logger.error(f"Input file not found: {args.polygon_file}")
        return 1

    try:
        with open(args.polygon_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error(f"Invalid polygon: {args.polygon_file} is not readable JSON ({e})")
        return 2

    pipeline = AreaProcessingPipeline()

    try:
        points = load_polygon_points(data)
        result = pipeline.process_area(points)
    except InvalidInput as e:
        logger.error(f"Invalid polygon: {e}")
        return 2
    except RoadDensityError as e:
        logger.error(f"Failed to process area: {e}")
        return 1

    response = result.to_response()
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(response, f, indent=2, ensure_ascii=False)
        logger.info(f"✓ Generated: {args.output}")

    logger.info(f"  Area: {result.area:.2f} km²")
    logger.info(f"  Roads: {result.total_km_roads:.2f} km, trails: {result.total_km_trails:.2f} km")
    if result.units_failed:
        logger.warning(f"  {result.units_failed}/{result.units_total} tiles could not be fetched")

    if args.summary:
        summary = {k: v for k, v in response.items() if k not in ("roads", "trails")}
        print(json.dumps(summary, indent=2))

    return 0


def cmd_serve(args):
    """Run the HTTP endpoint"""
    setup_logging(args.verbose)
    import uvicorn

    logger.info(f"Serving on http://{args.host}:{args.port}")
    uvicorn.run("road_density.server:app", host=args.host, port=args.port)
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Road & Trail Density CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Process a polygon ([[lat, lon], ...] or GeoJSON):
    python cli.py process --polygon-file area.json --output result.json

  Print numbers only:
    python cli.py process --polygon-file area.geojson --summary

  Run the HTTP endpoint:
    python cli.py serve --port 3001
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Process command
    proc_parser = subparsers.add_parser("process", help="Compute density for a polygon")
    proc_parser.add_argument("--polygon-file", "-p", required=True, help="JSON or GeoJSON polygon file")
    proc_parser.add_argument("--output", "-o", help="Output JSON file")
    proc_parser.add_argument("--summary", "-s", action="store_true", help="Print summary to stdout")
    proc_parser.set_defaults(func=cmd_process)

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP endpoint")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=3001, help="Port")
    serve_parser.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
