# -*- coding: utf-8 -*-
"""Survey module for parsing and formatting survey text."""

from cavemap.survey.format import format_map
from cavemap.survey.format import format_station
from cavemap.survey.format import format_survey
from cavemap.survey.format import format_survey_as_srv
from cavemap.survey.models import AnchorLine
from cavemap.survey.models import DirectiveLine
from cavemap.survey.models import LegLine
from cavemap.survey.models import ParsedSurvey
from cavemap.survey.parser import SurveyParser
from cavemap.survey.parser import parse_survey

__all__ = [
    "AnchorLine",
    "DirectiveLine",
    "LegLine",
    "ParsedSurvey",
    "SurveyParser",
    "format_map",
    "format_station",
    "format_survey",
    "format_survey_as_srv",
    "parse_survey",
]
