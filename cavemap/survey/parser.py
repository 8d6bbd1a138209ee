# -*- coding: utf-8 -*-
"""Parser for tab-delimited cave survey notes.

A survey text is line oriented. Lines starting with ``#`` and blank lines
are ignored; every other line is split on tabs and classified by its field
count:

    auto                                   label names with the prefix
    reverse                                survey was recorded backwards
    <name>                                 station the survey starts from
    <name> <lon> <lat>                     anchor station
    <name> <azi> <len> <depth> <comment>   leg, one sighting
    <name> <azi1> <len> <azi2|-> <depth> <comment>
                                           leg, two sightings

Architecture: each line goes through ``normalize_fields`` (a best-effort
input rule reconstructing the field count the grammar expects, because the
notes omit the comment column instead of leaving it empty), then through
``classify_fields`` which produces one of the tagged variants of
``cavemap.survey.models``. The parser then folds the variants into a
``ParsedSurvey``.
"""

import logging
import re

from pydantic import ValidationError

from cavemap.config import DEFAULT_CONFIG
from cavemap.config import CaveMapConfig
from cavemap.constants import ANCHOR_FIELD_COUNT
from cavemap.constants import COMMENT_PREFIX
from cavemap.constants import DIRECTIVE_FIELD_COUNT
from cavemap.constants import LEG_1_SIGHTING_FIELD_COUNT
from cavemap.constants import LEG_2_SIGHTING_FIELD_COUNT
from cavemap.constants import NO_SIGHTING
from cavemap.constants import START_STATION
from cavemap.enums import Directive
from cavemap.enums import LineKind
from cavemap.enums import Severity
from cavemap.enums import StationKind
from cavemap.errors import MalformedFieldError
from cavemap.errors import ParseIssue
from cavemap.errors import SourceLocation
from cavemap.errors import SurveyParseError
from cavemap.errors import UnexpectedFieldCountError
from cavemap.geo_utils import reverse_azimuth
from cavemap.models import Station
from cavemap.survey.models import AnchorLine
from cavemap.survey.models import DirectiveLine
from cavemap.survey.models import LegLine
from cavemap.survey.models import ParsedLine
from cavemap.survey.models import ParsedSurvey

logger = logging.getLogger(__name__)

NUMBER = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")

# Column roles of leg lines, after the station name and before the comment.
# Reversed surveys note the depth first.
_LEG_1_COLUMNS = ("azimuth", "length", "depth")
_LEG_1_REVERSE_COLUMNS = ("depth", "azimuth", "length")
_LEG_2_COLUMNS = ("azimuth1", "length", "azimuth2", "depth")
_LEG_2_REVERSE_COLUMNS = ("depth", "azimuth1", "length", "azimuth2")


def is_number(text: str) -> bool:
    """Check if a field holds a number in plain decimal notation."""
    return bool(NUMBER.match(text))


def normalize_fields(fields: list[str]) -> list[str]:
    """Reconstruct the field count the grammar expects.

    Best-effort rule, not a grammar guarantee:

    - When some field is empty, everything after the last non-empty field
      is considered accidental blank cells. If that field is a number the
      comment was left empty and a single empty comment is kept; otherwise
      the field is the comment and the blanks are dropped.
    - When nothing after the name reads as text ("-" counts as a number),
      a line of four fields or more is missing its comment and gets an
      empty one.

    Args:
        fields: Raw fields of one line

    Returns:
        A new list of fields
    """
    filled = [i for i, value in enumerate(fields) if value]
    has_empty = len(filled) != len(fields)
    has_comment = any(
        i != 0 and fields[i] != NO_SIGHTING and not is_number(fields[i])
        for i in filled
    )

    if has_empty and filled:
        last = filled[-1]
        if is_number(fields[last]):
            return [*fields[: last + 1], ""]
        return list(fields[: last + 1])

    if not has_comment and len(fields) >= LEG_1_SIGHTING_FIELD_COUNT - 1:
        return [*fields, ""]

    return list(fields)


def _parse_number(value: str, role: str, location: SourceLocation) -> float:
    if not is_number(value):
        raise MalformedFieldError(role, value, location)
    return float(value)


def classify_fields(
    fields: list[str],
    location: SourceLocation,
    *,
    reverse: bool = False,
) -> ParsedLine:
    """Turn the normalized fields of a line into a tagged variant.

    Args:
        fields: Normalized fields
        location: Location of the line (for error messages)
        reverse: Read leg columns in reversed-survey order

    Returns:
        DirectiveLine, AnchorLine or LegLine

    Raises:
        MalformedFieldError: If a numeric field does not parse
        UnexpectedFieldCountError: If no record kind has this field count
    """
    count = len(fields)

    if count == DIRECTIVE_FIELD_COUNT:
        token = fields[0]
        return DirectiveLine(
            line=location.line,
            directive=Directive.from_token(token),
            value=token,
        )

    if count == ANCHOR_FIELD_COUNT:
        return AnchorLine(
            line=location.line,
            name=fields[0],
            longitude=_parse_number(fields[1], "longitude", location),
            latitude=_parse_number(fields[2], "latitude", location),
        )

    if count == LEG_1_SIGHTING_FIELD_COUNT:
        roles = _LEG_1_REVERSE_COLUMNS if reverse else _LEG_1_COLUMNS
        values = {
            role: _parse_number(value, role, location)
            for role, value in zip(roles, fields[1:-1])
        }
        return LegLine(
            line=location.line,
            kind=LineKind.LEG_1_SIGHTING,
            name=fields[0],
            first_azimuth=values["azimuth"],
            length=values["length"],
            depth=values["depth"],
            comment=fields[-1],
        )

    if count == LEG_2_SIGHTING_FIELD_COUNT:
        roles = _LEG_2_REVERSE_COLUMNS if reverse else _LEG_2_COLUMNS
        columns = dict(zip(roles, fields[1:-1]))
        second = columns.pop("azimuth2")
        values = {
            role: _parse_number(value, role, location)
            for role, value in columns.items()
        }
        return LegLine(
            line=location.line,
            kind=LineKind.LEG_2_SIGHTING,
            name=fields[0],
            first_azimuth=values["azimuth1"],
            length=values["length"],
            depth=values["depth"],
            comment=fields[-1],
            second_azimuth=(
                None
                if second == NO_SIGHTING
                else _parse_number(second, "azimuth2", location)
            ),
        )

    raise UnexpectedFieldCountError(fields, location)


class SurveyParser:
    """Parser for survey text.

    Errors are raised as ``SurveyParseError`` subclasses carrying the
    partial survey; non-fatal oddities are collected in ``warnings``.

    Attributes:
        prefix: Label applied to names after an ``auto`` directive, and used
            to renumber reversed surveys
        config: Runtime configuration
        warnings: Issues encountered during the last parse
    """

    def __init__(self, prefix: str = "", config: CaveMapConfig | None = None):
        self.prefix = prefix
        self.config = config or DEFAULT_CONFIG
        self.warnings: list[ParseIssue] = []
        self._source: str = "<string>"

    def _add_warning(
        self, message: str, location: SourceLocation | None = None
    ) -> None:
        logger.warning("%s %s", message, location or f"(in {self._source})")
        self.warnings.append(
            ParseIssue(severity=Severity.WARNING, message=message, location=location)
        )

    def parse(self, text: str, source: str = "<string>") -> ParsedSurvey:
        """Parse a survey text.

        The stations are returned in survey order, without ids; committing
        them to a store is a separate step.

        Args:
            text: Survey text
            source: Source identifier for error messages

        Returns:
            The parsed survey

        Raises:
            SurveyParseError: On the first malformed line. ``stations`` and
                ``start`` hold what was parsed before it.
        """
        self._source = source
        self.warnings = []

        stations: list[Station] = []
        start = START_STATION
        label = ""
        reverse = False

        for number, raw_line in enumerate(text.split("\n"), start=1):
            line = raw_line.rstrip("\r")
            if not line.strip() or line.startswith(COMMENT_PREFIX):
                continue

            location = SourceLocation(source=source, line=number, text=line)
            fields = normalize_fields(line.split(self.config.delimiter))
            if self.config.debug:
                logger.debug("line %d fields %r", number, fields)

            try:
                parsed = classify_fields(fields, location, reverse=reverse)

                match parsed:
                    case DirectiveLine(directive=Directive.AUTO) if self.prefix:
                        label = self.prefix

                    case DirectiveLine(directive=Directive.REVERSE):
                        reverse = True

                    case DirectiveLine(directive=directive, value=value):
                        if directive == Directive.AUTO:
                            self._add_warning(
                                "'auto' without a prefix is read as a start station",
                                location,
                            )
                        start = value

                    case AnchorLine():
                        stations.append(self._anchor_station(parsed, label, location))

                    case LegLine():
                        stations.append(self._leg_station(parsed, label))

            except SurveyParseError as e:
                e.stations = stations
                e.start = start
                if self.config.debug:
                    logger.debug("parse failed after %d stations: %s", len(stations), e)
                raise

        if reverse:
            self._reverse(stations)

        return ParsedSurvey(stations=stations, start=start)

    @staticmethod
    def _anchor_station(
        parsed: AnchorLine, label: str, location: SourceLocation
    ) -> Station:
        try:
            return Station.anchor(
                name=label + parsed.name,
                longitude=parsed.longitude,
                latitude=parsed.latitude,
            )
        except ValidationError as e:
            role = e.errors()[0]["loc"][0]
            value = {"longitude": parsed.longitude, "latitude": parsed.latitude}
            raise MalformedFieldError(role, str(value[role]), location) from e

    @staticmethod
    def _leg_station(parsed: LegLine, label: str) -> Station:
        return Station.derived(
            name=label + parsed.name,
            azimuth=parsed.azimuth,
            length=parsed.length,
            depth=parsed.depth,
            comment=parsed.comment,
        )

    def _reverse(self, stations: list[Station]) -> None:
        """Turn a survey recorded from its far end around, in place."""
        stations.reverse()
        if not self.prefix:
            self._add_warning("reversed survey without a prefix keeps its names")

        for index, station in enumerate(stations, start=1):
            if station.kind == StationKind.DERIVED:
                station.azimuth = reverse_azimuth(station.azimuth)
            if self.prefix:
                station.name = f"{self.prefix}{index}"


def parse_survey(
    text: str,
    prefix: str = "",
    *,
    source: str = "<string>",
    config: CaveMapConfig | None = None,
) -> ParsedSurvey:
    """Parse a survey text with a fresh parser."""
    return SurveyParser(prefix=prefix, config=config).parse(text, source)
