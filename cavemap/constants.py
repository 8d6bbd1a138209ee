# -*- coding: utf-8 -*-
"""Constants used throughout the cavemap library.

This module centralizes all constant values to ensure consistency
and avoid magic numbers/strings scattered across the codebase.
"""

# -----------------------------------------------------------------------------
# File Encodings
# -----------------------------------------------------------------------------

#: Encoding of survey text files
SURVEY_ENCODING = "utf-8"

#: Encoding used for JSON / GeoJSON files
JSON_ENCODING = "utf-8"

# -----------------------------------------------------------------------------
# Station Sentinels
# -----------------------------------------------------------------------------

#: Station name used as a placeholder by anchors and as the default
#: starting point of a survey. It is the only name allowed to repeat.
START_STATION = "START"

#: Parent id of stations that hang from no other station
ROOT_ID: int = -1

# -----------------------------------------------------------------------------
# Survey Grammar
# -----------------------------------------------------------------------------

#: Field separator of survey lines
FIELD_DELIMITER = "\t"

#: Lines starting with this prefix are ignored
COMMENT_PREFIX = "#"

#: Placeholder for a missing second azimuth sighting
NO_SIGHTING = "-"

#: Field counts of each record kind (after normalization)
DIRECTIVE_FIELD_COUNT: int = 1
ANCHOR_FIELD_COUNT: int = 3
LEG_1_SIGHTING_FIELD_COUNT: int = 5
LEG_2_SIGHTING_FIELD_COUNT: int = 6

# -----------------------------------------------------------------------------
# Geodesy
# -----------------------------------------------------------------------------

#: Mean Earth radius used by the spherical forward formula (meters)
EARTH_RADIUS_M: float = 6_371_000.0

#: Significant digits used when rendering anchor coordinates as text
COORDINATE_SIGNIFICANT_DIGITS: int = 8

#: Decimal precision for GeoJSON coordinates (WGS84)
GEOJSON_COORDINATE_PRECISION: int = 7

# -----------------------------------------------------------------------------
# Walls SRV Export
# -----------------------------------------------------------------------------

#: Header emitted before any SRV survey block
SRV_HEADER = "#UNITS Meters ORDER=DA TAPE=SS"
