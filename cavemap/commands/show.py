# -*- coding: utf-8 -*-
"""Print command for survey files.

Parses one survey file and prints it back, either normalized in the survey
grammar or as Walls .SRV shots.
"""

import argparse
import logging
from pathlib import Path

from cavemap.constants import SURVEY_ENCODING
from cavemap.enums import FileExtension
from cavemap.errors import CaveMapError
from cavemap.io import read_survey
from cavemap.survey.format import format_survey
from cavemap.survey.format import format_survey_as_srv

logger = logging.getLogger(__name__)


def show(args: list[str]) -> int:
    """Entry point for the print command."""
    parser = argparse.ArgumentParser(
        prog="cavemap print",
        description="Print a survey file, normalized or in Walls SRV format",
    )
    parser.add_argument(
        "-i",
        "--input-file",
        type=Path,
        required=True,
        help="Input survey file path",
    )
    parser.add_argument(
        "-p",
        "--prefix",
        default="",
        help="Station name prefix for surveys using the 'auto' directive",
    )
    parser.add_argument(
        "-o",
        "--output-file",
        type=Path,
        default=None,
        help="Output file path (prints to stdout if not specified); "
        f"a {FileExtension.SRV.value} extension implies --srv",
    )
    parser.add_argument(
        "--srv",
        action="store_true",
        help="Print Walls SRV shots instead of survey text",
    )

    parsed_args = parser.parse_args(args)

    if not parsed_args.input_file.exists():
        logger.error("Error: Input file not found: %s", parsed_args.input_file)
        return 1

    output_file = parsed_args.output_file
    as_srv = parsed_args.srv or (
        output_file is not None
        and output_file.suffix.lower() == FileExtension.SRV.value
    )

    try:
        parsed = read_survey(parsed_args.input_file, parsed_args.prefix)
    except CaveMapError:
        logger.exception("Invalid survey data")
        return 1

    if as_srv:
        # The start station lives in another file: its depth is unknown here.
        result = format_survey_as_srv(parsed.stations, parsed.start)
    else:
        result = format_survey(parsed.stations, parsed.start)

    if output_file is None:
        print(result, end="")  # noqa: T201
    else:
        output_file.write_text(result, encoding=SURVEY_ENCODING)

    return 0
