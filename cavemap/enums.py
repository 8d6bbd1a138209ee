# -*- coding: utf-8 -*-
"""Enumerations for cave survey data.

This module contains the enumerations used by the station model, the
survey text parser and the command line tools.
"""

from enum import Enum


class StationKind(str, Enum):
    """How the position of a station is known.

    Attributes:
        ANCHOR: Positioned directly by its coordinate (e.g. a GPS fix)
        DERIVED: Located by azimuth and distance from its parent station
    """

    ANCHOR = "anchor"
    DERIVED = "derived"


class LineKind(str, Enum):
    """Record kinds of the survey text grammar.

    Attributes:
        DIRECTIVE: Single field line (``auto``, ``reverse`` or a start name)
        ANCHOR: Station name, longitude and latitude
        LEG_1_SIGHTING: Leg with a single azimuth reading
        LEG_2_SIGHTING: Leg with a foresight and an optional backsight
    """

    DIRECTIVE = "directive"
    ANCHOR = "anchor"
    LEG_1_SIGHTING = "leg_1_sighting"
    LEG_2_SIGHTING = "leg_2_sighting"


class Directive(str, Enum):
    """Single field survey directives.

    Attributes:
        AUTO: Prefix every following station name with the survey prefix
        REVERSE: The survey was recorded from its far end
        START: Name of the station the survey starts from
    """

    AUTO = "auto"
    REVERSE = "reverse"
    START = "start"

    @classmethod
    def from_token(cls, token: str) -> "Directive":
        """Classify a single field line.

        Args:
            token: The only field of the line

        Returns:
            AUTO or REVERSE for the reserved words, START otherwise
        """
        if token == cls.AUTO.value:
            return cls.AUTO
        if token == cls.REVERSE.value:
            return cls.REVERSE
        return cls.START


class Severity(str, Enum):
    """Severity level for parse issues.

    Attributes:
        ERROR: Critical parsing error
        WARNING: Non-fatal warning
    """

    ERROR = "error"
    WARNING = "warning"


class FileExtension(str, Enum):
    """File extensions handled by the command line tools (with dot).

    Attributes:
        TXT: Survey text file extension
        GEOJSON: GeoJSON file extension
        SRV: Walls survey file extension
    """

    TXT = ".txt"
    GEOJSON = ".geojson"
    SRV = ".srv"
