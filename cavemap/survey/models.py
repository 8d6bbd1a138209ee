# -*- coding: utf-8 -*-
"""Survey data models for the survey text grammar.

This module contains the tagged variants a survey line is classified into:
- DirectiveLine: ``auto``, ``reverse`` or the name of the start station
- AnchorLine: a station with a known longitude / latitude
- LegLine: a station reached by one or two azimuth sightings

and ``ParsedSurvey``, the result of parsing a whole survey text: the ordered
stations (not yet committed to any store) and the start station name.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel
from pydantic import Field

from cavemap.constants import START_STATION
from cavemap.enums import Directive
from cavemap.enums import LineKind
from cavemap.geo_utils import average_azimuth
from cavemap.models import Station


@dataclass(frozen=True)
class DirectiveLine:
    line: int
    directive: Directive
    value: str

    @property
    def kind(self) -> LineKind:
        return LineKind.DIRECTIVE


@dataclass(frozen=True)
class AnchorLine:
    line: int
    name: str
    longitude: float
    latitude: float

    @property
    def kind(self) -> LineKind:
        return LineKind.ANCHOR


@dataclass(frozen=True)
class LegLine:
    """A leg reading.

    ``second_azimuth`` is only ever set on LEG_2_SIGHTING lines, and stays
    None there when the backsight column holds the "-" placeholder.
    """

    line: int
    kind: LineKind
    name: str
    first_azimuth: float
    length: float
    depth: float
    comment: str = ""
    second_azimuth: float | None = None

    @property
    def azimuth(self) -> float:
        if self.second_azimuth is None:
            return self.first_azimuth
        return average_azimuth(self.first_azimuth, self.second_azimuth)


ParsedLine = DirectiveLine | AnchorLine | LegLine


class ParsedSurvey(BaseModel):
    """A parsed survey, ready to be validated and committed to a store."""

    stations: list[Station] = Field(default_factory=list)
    start: str = START_STATION

    @property
    def names(self) -> list[str]:
        return [station.name for station in self.stations]

    def __len__(self) -> int:
        return len(self.stations)
