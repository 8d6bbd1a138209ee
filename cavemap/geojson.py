# -*- coding: utf-8 -*-
"""GeoJSON export of a station store.

The output is a deterministic FeatureCollection:

- one Point feature per station, properties ``name``, ``depth`` and
  ``comment``, sorted by station name ("START" first, then numbered names
  of a same series in numeric order);
- one feature per anchor station whose geometry is a GeometryCollection of
  two-point LineStrings, one per parent -> child leg of the anchor's tree,
  property ``name``.

Stations that no anchor tree reaches are reported in the export result and
logged; they do not prevent the export. A station without coordinate gets
a null geometry.
"""

from __future__ import annotations

import functools
import logging
import re
from dataclasses import dataclass
from dataclasses import field
from typing import TYPE_CHECKING

import orjson
from geojson import Feature
from geojson import FeatureCollection
from geojson import GeometryCollection
from geojson import LineString
from geojson import Point

from cavemap.constants import JSON_ENCODING
from cavemap.constants import START_STATION

if TYPE_CHECKING:
    from pathlib import Path

    from cavemap.models import Station
    from cavemap.store import StationStore

logger = logging.getLogger(__name__)

SERIES_NAME = re.compile(r"[A-Za-z]+[0-9]+")
LETTERS = re.compile(r"[A-Za-z]+")
DIGITS = re.compile(r"[0-9]+")


# -----------------------------------------------------------------------------
# Name ordering
# -----------------------------------------------------------------------------


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def compare_station_names(first: str, second: str) -> int:
    """Three-way comparison of station names.

    "START" sorts before anything else. Two names of the same series (same
    leading letters, followed by digits) compare by their number, so
    ``CsFree2`` comes before ``CsFree10``. Anything else is lexicographic.
    """
    if first == second:
        return 0
    if first == START_STATION:
        return -1
    if second == START_STATION:
        return 1

    if SERIES_NAME.search(first) and SERIES_NAME.search(second):
        first_series = LETTERS.search(first).group()
        second_series = LETTERS.search(second).group()
        if first_series == second_series:
            by_number = _cmp(
                int(DIGITS.search(first).group()),
                int(DIGITS.search(second).group()),
            )
            if by_number:
                return by_number

    return _cmp(first, second)


station_name_key = functools.cmp_to_key(compare_station_names)


def sort_station_names(names: list[str]) -> list[str]:
    return sorted(names, key=station_name_key)


# -----------------------------------------------------------------------------
# Features
# -----------------------------------------------------------------------------


@dataclass
class GeoJSONExport:
    """Result of exporting a store.

    Attributes:
        collection: The FeatureCollection
        unreached: Ids of the stations no anchor tree reaches (sorted)
    """

    collection: FeatureCollection
    unreached: list[int] = field(default_factory=list)

    @property
    def is_connected(self) -> bool:
        return not self.unreached


def station_to_feature(station: Station, precision: int) -> Feature:
    """Convert a station to a GeoJSON Point Feature."""
    location = station.location
    geometry = (
        Point(location.as_tuple(precision), precision=precision)
        if location is not None
        else None
    )
    return Feature(
        geometry=geometry,
        properties={
            "name": station.name,
            "depth": station.depth,
            "comment": station.comment,
        },
    )


def anchor_to_feature(
    anchor: Station,
    edges: list[tuple[Station, Station]],
    precision: int,
) -> Feature:
    """Convert the legs of an anchor's tree to a GeometryCollection Feature."""
    lines: list[LineString] = []
    for parent, child in edges:
        if not (parent.has_coordinate and child.has_coordinate):
            logger.debug("Skipping leg %s->%s: no coordinate", parent.name, child.name)
            continue
        lines.append(
            LineString(
                [
                    parent.location.as_tuple(precision),
                    child.location.as_tuple(precision),
                ],
                precision=precision,
            )
        )
    return Feature(
        geometry=GeometryCollection(lines),
        properties={"name": anchor.name},
    )


# -----------------------------------------------------------------------------
# Main Conversion Functions
# -----------------------------------------------------------------------------


def store_to_geojson(store: StationStore) -> GeoJSONExport:
    """Convert a station store to a GeoJSON FeatureCollection.

    Unlike a plain "one Point per station" layout, a station without a
    coordinate (never reached from an anchor, or not propagated yet) keeps
    its feature with a ``null`` geometry, so the first features are one per
    station but not all of them are Points.

    Args:
        store: The station store (locked for the whole conversion)

    Returns:
        The collection and the ids of the stations no anchor reaches
    """
    with store.lock:
        precision = store.config.coordinate_precision
        debug = store.config.debug
        stations = store.stations()

        ordered = sorted(
            stations, key=lambda s: (station_name_key(s.name), s.id)
        )
        features = [station_to_feature(s, precision) for s in ordered]

        reached: set[int] = set()
        for anchor in store.anchors():
            if debug:
                logger.debug("%s", anchor)
            reached.add(anchor.id)
            edges = store.subtree_edges(anchor.id)
            for parent, child in edges:
                if debug:
                    logger.debug("%s->%s", parent, child)
                reached.add(child.id)
            features.append(anchor_to_feature(anchor, edges, precision))

        unreached = sorted(s.id for s in stations if s.id not in reached)
        for station in stations:
            if station.id not in reached:
                logger.warning(
                    "missed %d[%s] from_id %d",
                    station.id,
                    station.name,
                    station.from_id,
                )

    return GeoJSONExport(collection=FeatureCollection(features), unreached=unreached)


def export_geojson(
    store: StationStore,
    output_path: Path | None = None,
    *,
    indent: bool = False,
) -> str:
    """Serialize a station store to GeoJSON text.

    Serialization and file output happen after the store lock is released.

    Args:
        store: The station store
        output_path: Optional output path
        indent: Indent the output instead of the compact form

    Returns:
        GeoJSON string
    """
    result = store_to_geojson(store)

    opts = orjson.OPT_INDENT_2 if indent else 0
    json_str = orjson.dumps(result.collection, option=opts).decode(JSON_ENCODING)

    if output_path:
        output_path.write_text(json_str, encoding=JSON_ENCODING)

    return json_str
