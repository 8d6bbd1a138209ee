# -*- coding: utf-8 -*-
"""GeoJSON export command for survey files.

This command commits survey text files to a map, in order, computes the
coordinate of every derived station and writes the map as GeoJSON.
"""

import argparse
import logging
import sys
from pathlib import Path

from cavemap.config import CaveMapConfig
from cavemap.constants import JSON_ENCODING
from cavemap.enums import FileExtension
from cavemap.errors import CaveMapError
from cavemap.io import load_surveys
from cavemap.logging_setup import attach_debug_handler
from cavemap.logging_setup import detach_debug_handler
from cavemap.store import StationStore

logger = logging.getLogger(__name__)


def geojson(args: list[str]) -> int:
    """Entry point for the geojson command."""
    parser = argparse.ArgumentParser(
        prog="cavemap geojson",
        description="Convert cave survey text files to GeoJSON format",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cavemap geojson -i gps.txt                          # Output to stdout
  cavemap geojson -i gps.txt -i line.txt -o cave.geojson
  cavemap geojson -i gps.txt --prefix GPS --indent    # Label 'auto' surveys

Output:
  The GeoJSON FeatureCollection includes:
  - Point features for survey stations, sorted by name
  - One GeometryCollection feature of survey legs per anchor station

Notes:
  - Files are committed in the order given; a survey may start from a
    station of a previous file
  - Stations no anchor station leads to are reported on stderr
""",
    )

    parser.add_argument(
        "-i",
        "--input-file",
        type=Path,
        action="append",
        required=True,
        help="Input survey file path (repeatable)",
    )
    parser.add_argument(
        "-o",
        "--output-file",
        type=Path,
        default=None,
        help="Output GeoJSON file path (prints to stdout if not specified)",
    )
    parser.add_argument(
        "-p",
        "--prefix",
        default="",
        help="Station name prefix for surveys using the 'auto' directive",
    )
    parser.add_argument(
        "-n",
        "--name",
        default="cavemap",
        help="Map name",
    )
    parser.add_argument(
        "--indent",
        action="store_true",
        help="Indent the GeoJSON output",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Trace parsing, commits and propagation on stderr",
    )

    parsed_args = parser.parse_args(args)

    for input_file in parsed_args.input_file:
        if not input_file.exists():
            logger.error("Error: Input file not found: %s", input_file)
            return 1

    output_file = parsed_args.output_file
    if output_file and output_file.suffix.lower() != FileExtension.GEOJSON.value:
        logger.warning(
            "Output file has no %s extension: %s",
            FileExtension.GEOJSON.value,
            output_file,
        )

    handler = attach_debug_handler(sys.stderr) if parsed_args.debug else None
    store = StationStore(
        parsed_args.name, config=CaveMapConfig(debug=parsed_args.debug)
    )

    try:
        load_surveys(store, parsed_args.input_file, parsed_args.prefix)
        store.propagate()
        result = store.export(indent=parsed_args.indent)

        if output_file is None:
            print(result)  # noqa: T201

        else:
            output_file.write_text(result, encoding=JSON_ENCODING)
            logger.info("Converted %d station(s) -> %s", len(store), output_file)

    except CaveMapError:
        logger.exception("Invalid survey data")
        return 1

    finally:
        if handler is not None:
            detach_debug_handler(handler)

    return 0
