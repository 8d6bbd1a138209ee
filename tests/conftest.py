# -*- coding: utf-8 -*-
"""Pytest configuration and fixtures.

This module provides the survey texts and station lists shared by the
test modules.
"""

from __future__ import annotations

import logging

import pytest

from cavemap.models import Station
from cavemap.store import StationStore

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


# =============================================================================
# Survey texts
# =============================================================================

GPS_SURVEY = (
    "\n"
    "#Survey from the tree in front of the entrance, to the start of the\n"
    "#cave line.\n"
    "#\n"
    '#Ariane: "GPS to water" light red color\n'
    "#\n"
    "#Name\tAzi\tLen\tDepth\tCommets\n"
    "auto\n"
    "0\t-87.451223\t20.317874\n"
    "1\t108\t18\t0.0\troof inside cavern\n"
    "2\t79\t4.55\t2.63\tceiling, calcite, R\n"
    "3\t122\t2.16\t4.06\tceiling small dome\n"
)

#: Expected locations of the GPS survey stations (longitude, latitude)
GPS_LOCATIONS = {
    "GPS0": (-87.451223, 20.317874),
    "GPS1": (-87.4510588305111, 20.31782397690468),
    "GPS2": (-87.45101599818992, 20.317831784638138),
    "GPS3": (-87.45099843158461, 20.31782149077183),
}

#: A survey continuing from the last GPS station, without prefix
LINE_SURVEY = "GPS3\n4\t90\t5\t1\tline start\n5\t180\t7.5\t3.2\n"


# =============================================================================
# Station fixtures
# =============================================================================


def make_chico_free() -> list[Station]:
    """Pre-numbered free-dive survey, stored out of order."""
    section = {"section": "FREEDIVE"}
    return [
        Station.anchor(
            "START", -87.447680, 20.317899,
            id=159, depth=-5.4, comment="START", **section,
        ),
        Station.derived(
            "CsFree1", 170, 14.5, 0, "near jetty, silty floor",
            id=160, from_id=159, **section,
        ),
        Station.derived(
            "CsFree3", 197, 10.07, 5.7, "silt, R, zero vis",
            id=162, from_id=161, **section,
        ),
        Station.derived(
            "CsFree2", 182, 8.2, 2.9, "silt, ceramic",
            id=161, from_id=160, **section,
        ),
        Station.derived(
            "CsFree5", 201, 2.15, 9.4, "R end",
            id=164, from_id=163, **section,
        ),
        Station.derived(
            "CsFree4", 177, 5.92, 8.4, "",
            id=163, from_id=162, **section,
        ),
        Station.derived(
            "CsFree7", 253, 9.02, 11.4, "continues",
            id=166, from_id=165, **section,
        ),
        Station.derived(
            "CsFree6", 169, 2.95, 11.2, "!E!>Beto2023",
            id=165, from_id=164, **section,
        ),
    ]  # fmt: skip


#: Expected locations of some chico free stations (longitude, latitude)
CHICO_LOCATIONS = {
    "CsFree1": (-87.44765585363852, 20.317770579459303),
    "CsFree4": (-87.44768386116395, 20.317557108561907),
    "CsFree7": (-87.44776857301903, 20.31748929797647),
}


@pytest.fixture
def chico_free() -> list[Station]:
    return make_chico_free()


@pytest.fixture
def chico_store(chico_free) -> StationStore:
    store = StationStore("Chico")
    store.insert_detached_survey(chico_free)
    return store


@pytest.fixture
def gps_store() -> StationStore:
    """Store holding the committed (not yet propagated) GPS survey."""
    store = StationStore("Test")
    store.add_survey(GPS_SURVEY, prefix="GPS")
    return store


@pytest.fixture
def survey_file(tmp_path):
    """Write a survey text to a file and return its path."""

    def _write(text: str, name: str = "survey.txt"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
