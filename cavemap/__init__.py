# -*- coding: utf-8 -*-
"""Cave Map Library.

A Python library turning underwater cave survey notes into maps. Surveys
are tab-delimited azimuth / distance / depth readings anchored at GPS
fixes; the library assembles them into a tree of stations, locates every
station and exports the map as GeoJSON.

Usage:
    from cavemap import StationStore

    store = StationStore("Chico")
    store.add_survey(Path("gps.txt").read_text(), prefix="GPS")
    store.propagate()
    print(store.export())

    # Or step by step
    parsed = store.parse_survey(text, prefix="GPS")
    store.validate_survey(parsed.stations)
    store.commit_survey(parsed.stations, parsed.start)
"""

__version__ = "0.1.0"

# Constants
from cavemap.constants import EARTH_RADIUS_M
from cavemap.constants import ROOT_ID
from cavemap.constants import START_STATION

# Enums
from cavemap.enums import Directive
from cavemap.enums import LineKind
from cavemap.enums import Severity
from cavemap.enums import StationKind

# Errors
from cavemap.errors import CaveMapError
from cavemap.errors import CycleError
from cavemap.errors import DuplicateIdError
from cavemap.errors import DuplicateNameError
from cavemap.errors import EmptySurveyError
from cavemap.errors import MalformedFieldError
from cavemap.errors import ParseIssue
from cavemap.errors import SourceLocation
from cavemap.errors import StoreError
from cavemap.errors import SurveyParseError
from cavemap.errors import UnexpectedFieldCountError
from cavemap.errors import UnknownStationError

from cavemap.config import CaveMapConfig
from cavemap.geo_utils import average_azimuth
from cavemap.geo_utils import forward_position
from cavemap.geo_utils import reverse_azimuth
from cavemap.geojson import GeoJSONExport
from cavemap.geojson import compare_station_names
from cavemap.geojson import export_geojson
from cavemap.geojson import store_to_geojson
from cavemap.io import load_surveys
from cavemap.io import read_survey
from cavemap.io import write_geojson
from cavemap.logging_setup import attach_debug_handler
from cavemap.logging_setup import detach_debug_handler
from cavemap.models import Station
from cavemap.propagation import propagate_locations
from cavemap.store import StationStore
from cavemap.survey.models import ParsedSurvey
from cavemap.survey.parser import SurveyParser
from cavemap.survey.parser import parse_survey

__all__ = [
    # Constants
    "EARTH_RADIUS_M",
    "ROOT_ID",
    "START_STATION",
    # Config
    "CaveMapConfig",
    # Errors
    "CaveMapError",
    "CycleError",
    # Enums
    "Directive",
    "DuplicateIdError",
    "DuplicateNameError",
    "EmptySurveyError",
    # Export
    "GeoJSONExport",
    "LineKind",
    "MalformedFieldError",
    "ParseIssue",
    # Survey
    "ParsedSurvey",
    "Severity",
    "SourceLocation",
    # Models
    "Station",
    "StationKind",
    # Store
    "StationStore",
    "StoreError",
    "SurveyParseError",
    "SurveyParser",
    "UnexpectedFieldCountError",
    "UnknownStationError",
    # Logging
    "attach_debug_handler",
    # Geodesy
    "average_azimuth",
    "compare_station_names",
    "detach_debug_handler",
    "export_geojson",
    "forward_position",
    # I/O
    "load_surveys",
    "parse_survey",
    "propagate_locations",
    "read_survey",
    "reverse_azimuth",
    "store_to_geojson",
    "write_geojson",
]
