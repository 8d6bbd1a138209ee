# -*- coding: utf-8 -*-
"""Formatting of surveys and maps as text.

- ``format_survey``: back to the tab-delimited survey grammar
- ``format_survey_as_srv``: Walls .SRV shot lines
- ``format_map``: the anchor trees of a store, one leg per line
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cavemap.constants import COORDINATE_SIGNIFICANT_DIGITS
from cavemap.constants import SRV_HEADER
from cavemap.constants import START_STATION

if TYPE_CHECKING:
    from cavemap.models import Station
    from cavemap.store import StationStore


def _format_number(value: float) -> str:
    """Shortest round-tripping text of a number, without a trailing ``.0``."""
    text = repr(float(value))
    if text.endswith(".0"):
        return text[:-2]
    return text


def _format_coordinate(value: float) -> str:
    return f"{value:.{COORDINATE_SIGNIFICANT_DIGITS}g}"


def format_station(station: Station) -> str:
    """Format a station as one survey line (no newline)."""
    if station.is_anchor:
        return "\t".join(
            [
                station.name,
                _format_coordinate(station.longitude),
                _format_coordinate(station.latitude),
            ]
        )
    return "\t".join(
        [
            station.name,
            _format_number(station.azimuth),
            _format_number(station.length),
            _format_number(station.depth),
            station.comment,
        ]
    )


def format_survey(stations: list[Station], start: str = START_STATION) -> str:
    """Format a parsed survey back into survey text.

    The start station line is only written when the survey does not start
    from "START".
    """
    lines = [] if start == START_STATION else [start]
    lines.extend(format_station(station) for station in stations)
    return "".join(f"{line}\n" for line in lines)


def _srv_shot(from_name: str, from_depth: float, station: Station) -> str:
    return "\t".join(
        [
            from_name,
            station.name,
            _format_number(station.length),
            _format_number(station.azimuth),
            _format_number(from_depth),
            _format_number(station.depth),
            f";{station.comment}",
        ]
    )


def format_survey_as_srv(
    stations: list[Station],
    start: str = START_STATION,
    start_depth: float = 0.0,
) -> str:
    """Format a survey as Walls .SRV shots.

    Each station becomes a shot from the previous one. A survey starting
    from a named station gets a first shot from it, at ``start_depth``;
    a survey starting from "START" has no shot to its first station.

    Args:
        stations: Stations in survey order
        start: Name of the station the survey starts from
        start_depth: Depth of the start station

    Returns:
        SRV text, empty for an empty survey starting from a named station
    """
    if start != START_STATION and not stations:
        return ""

    lines = [SRV_HEADER]
    from_name, from_depth = start, start_depth
    for index, station in enumerate(stations):
        if index > 0 or start != START_STATION:
            lines.append(_srv_shot(from_name, from_depth, station))
        from_name, from_depth = station.name, station.depth
    return "".join(f"{line}\n" for line in lines)


def format_map(store: StationStore) -> str:
    """Format the anchor trees of a store.

    The first line is ``Map: <store>``; each anchor follows as
    ``<lon>/<lat>:`` with one ``parent->child`` line per leg of its tree.
    """
    with store.lock:
        lines = [f"Map: {store}"]
        for anchor in store.anchors():
            lines.append(f"{anchor}: ")
            lines.extend(
                f"{parent}->{child}" for parent, child in store.subtree_edges(anchor.id)
            )
    return "".join(f"{line}\n" for line in lines)
