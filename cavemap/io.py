# -*- coding: utf-8 -*-
"""File I/O operations for survey files.

Thin wrappers reading survey text files into parsed surveys or straight
into a station store, and writing GeoJSON. No lock is held while a file is
read or written.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from cavemap.config import CaveMapConfig
from cavemap.constants import SURVEY_ENCODING
from cavemap.geojson import export_geojson
from cavemap.models import Station
from cavemap.store import StationStore
from cavemap.survey.models import ParsedSurvey
from cavemap.survey.parser import SurveyParser

__all__ = [
    "load_surveys",
    "read_survey",
    "write_geojson",
]


def read_survey(
    path: Path,
    prefix: str = "",
    *,
    encoding: str = SURVEY_ENCODING,
    config: CaveMapConfig | None = None,
) -> ParsedSurvey:
    """Read and parse a survey text file.

    Args:
        path: Path to the survey file
        prefix: Station name prefix (see the ``auto`` directive)
        encoding: Character encoding (default: UTF-8)
        config: Runtime configuration

    Returns:
        The parsed survey

    Raises:
        FileNotFoundError: If the file doesn't exist
        SurveyParseError: If the text is malformed
    """
    text = path.read_text(encoding=encoding)
    return SurveyParser(prefix=prefix, config=config).parse(text, source=str(path))


def load_surveys(
    store: StationStore,
    paths: Iterable[Path],
    prefix: str = "",
    *,
    encoding: str = SURVEY_ENCODING,
) -> list[Station]:
    """Read, validate and commit survey files into a store, in order.

    A later survey may start from a station of an earlier one.

    Returns:
        Every committed station, in commit order
    """
    committed: list[Station] = []
    for path in paths:
        parsed = read_survey(path, prefix, encoding=encoding, config=store.config)
        with store.lock:
            store.validate_survey(parsed.stations)
            committed.extend(store.commit_survey(parsed.stations, parsed.start))
    return committed


def write_geojson(store: StationStore, path: Path, *, indent: bool = False) -> str:
    """Export a store to a GeoJSON file and return the text written."""
    return export_geojson(store, path, indent=indent)
