# -*- coding: utf-8 -*-
"""Station store: the authoritative registry of a cave map.

A ``StationStore`` holds the stations of a series of surveys, keyed by id.
Surveys are added whole, either pre-numbered (``insert_detached_survey``) or
parsed, validated and committed (``commit_survey``), which assigns fresh ids
and chains every station to the previous one.

Every public operation holds the store's lock for its full duration. The
lock is re-entrant so composite operations (``add_survey``, ``propagate``,
the GeoJSON export) can use the primitives below.
"""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from collections.abc import Iterable
from collections.abc import Iterator
from typing import TYPE_CHECKING

from cavemap import geojson
from cavemap import propagation
from cavemap.config import DEFAULT_CONFIG
from cavemap.config import CaveMapConfig
from cavemap.constants import ROOT_ID
from cavemap.constants import START_STATION
from cavemap.errors import CycleError
from cavemap.errors import DuplicateIdError
from cavemap.errors import DuplicateNameError
from cavemap.errors import EmptySurveyError
from cavemap.errors import UnknownStationError
from cavemap.survey.format import format_survey_as_srv
from cavemap.survey.parser import SurveyParser

if TYPE_CHECKING:
    from cavemap.geojson import GeoJSONExport
    from cavemap.models import Station
    from cavemap.survey.models import ParsedSurvey

logger = logging.getLogger(__name__)


class StationStore:
    """Lock-guarded map of station id to Station.

    Example:
        store = StationStore("Chico")
        store.add_survey(text, prefix="GPS")
        store.propagate()
        print(store.export())

    Attributes:
        name: Name of the map
        config: Runtime configuration
        lock: The store's single coarse lock
    """

    def __init__(self, name: str, config: CaveMapConfig | None = None) -> None:
        self.name = name
        self.config = config or DEFAULT_CONFIG
        self.lock = threading.RLock()
        self._stations: dict[int, Station] = {}

    def __str__(self) -> str:
        with self.lock:
            return f"{self.name} {len(self._stations)} stations"

    def __len__(self) -> int:
        with self.lock:
            return len(self._stations)

    def __contains__(self, station_id: object) -> bool:
        with self.lock:
            return station_id in self._stations

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    def get(self, station_id: int) -> Station | None:
        with self.lock:
            return self._stations.get(station_id)

    def stations(self) -> list[Station]:
        """Stations in insertion order."""
        with self.lock:
            return list(self._stations.values())

    def anchors(self) -> list[Station]:
        with self.lock:
            return [s for s in self._stations.values() if s.is_anchor]

    @property
    def max_id(self) -> int:
        """Largest id in the store, 0 when empty."""
        with self.lock:
            return max(self._stations, default=0)

    def lookup_id_by_name(self, name: str) -> int | None:
        """Id of the first station (in insertion order) called ``name``."""
        with self.lock:
            for station in self._stations.values():
                if station.name == name:
                    return station.id
            return None

    def __iter__(self) -> Iterator[Station]:
        return iter(self.stations())

    # -------------------------------------------------------------------------
    # Insertion
    # -------------------------------------------------------------------------

    def insert_detached_survey(self, stations: Iterable[Station]) -> None:
        """Insert stations whose ids were assigned by the caller.

        The insertion is all-or-nothing: parent references may point at
        stations of the same batch, in any order.

        Args:
            stations: Stations with their ``id`` and ``from_id`` set

        Raises:
            ValueError: If a station has no id, or a negative one
            DuplicateIdError: If an id is repeated or already used
            UnknownStationError: If a ``from_id`` references no station
            CycleError: If the parent links would form a cycle
        """
        batch = list(stations)
        with self.lock:
            incoming: dict[int, Station] = {}
            for station in batch:
                if station.id is None:
                    raise ValueError(f"station {station.name!r} has no id")
                if station.id < 0:
                    raise ValueError(
                        f"station {station.name!r} has negative id {station.id}"
                    )
                if station.id in self._stations or station.id in incoming:
                    raise DuplicateIdError(station.id, station.name)
                incoming[station.id] = station

            for station in incoming.values():
                if station.is_root:
                    continue
                if (
                    station.from_id not in self._stations
                    and station.from_id not in incoming
                ):
                    raise UnknownStationError(station.from_id)

            self._check_acyclic(incoming)

            self._stations.update(incoming)
            if self.config.debug:
                for station in incoming.values():
                    logger.debug("adding[%d] %s", station.id, station)
            logger.info(
                "Inserted %d pre-numbered station(s) into %s", len(incoming), self.name
            )

    def _check_acyclic(self, incoming: dict[int, Station]) -> None:
        """Follow the parent chain of every new station up to a root.

        Stations already in the store reach a root by construction.
        """
        settled: set[int] = set(self._stations)
        for station in incoming.values():
            chain: set[int] = set()
            current = station
            while current.id not in settled and not current.is_root:
                if current.id in chain:
                    raise CycleError(current.id)
                chain.add(current.id)
                if current.from_id in incoming:
                    current = incoming[current.from_id]
                else:
                    current = self._stations[current.from_id]
            settled |= chain

    def validate_survey(self, stations: Iterable[Station]) -> None:
        """Check a candidate survey against the names already in the store.

        The "START" placeholder may repeat; any other name must be new, and
        unique within the survey.

        Raises:
            DuplicateNameError: On the first clashing name
        """
        with self.lock:
            taken = {s.name for s in self._stations.values()}
            for station in stations:
                if station.name == START_STATION:
                    continue
                if station.name in taken:
                    raise DuplicateNameError(station.name)
                taken.add(station.name)

    def commit_survey(
        self,
        stations: Iterable[Station],
        start: str = START_STATION,
    ) -> list[Station]:
        """Add a parsed survey to the store.

        Parse and validate the survey before. Each station gets the next free
        id and hangs from the previous station; the first one hangs from the
        ``start`` station (or from no station for "START"). The store keeps
        its own copies.

        Args:
            stations: Stations in survey order
            start: Name of the station the survey starts from

        Returns:
            The stations as stored, with their ids

        Raises:
            EmptySurveyError: If there are no stations
            UnknownStationError: If ``start`` names no station
            DuplicateIdError: If a fresh id is somehow taken
        """
        survey = list(stations)
        if not survey:
            raise EmptySurveyError

        with self.lock:
            from_id = ROOT_ID
            if start != START_STATION:
                found = self.lookup_id_by_name(start)
                if found is None:
                    raise UnknownStationError(start)
                from_id = found
            if self.config.debug:
                logger.debug("from station %s %d", start, from_id)

            next_id = self.max_id
            committed: list[Station] = []
            for station in survey:
                next_id += 1
                committed.append(
                    station.model_copy(update={"id": next_id, "from_id": from_id})
                )
                from_id = next_id

            for station in committed:
                if station.id in self._stations:
                    raise DuplicateIdError(station.id, station.name)

            for station in committed:
                if self.config.debug:
                    logger.debug("adding[%d] %s", station.id, station)
                self._stations[station.id] = station

            logger.info(
                "Committed survey of %d station(s) from %s into %s",
                len(committed),
                start,
                self.name,
            )
            return committed

    def parse_survey(
        self, text: str, prefix: str = "", source: str = "<string>"
    ) -> ParsedSurvey:
        """Parse a survey with this store's configuration (no lock needed)."""
        return SurveyParser(prefix=prefix, config=self.config).parse(text, source)

    def add_survey(
        self, text: str, prefix: str = "", source: str = "<string>"
    ) -> list[Station]:
        """Parse, validate and commit a survey text in one go."""
        parsed = self.parse_survey(text, prefix, source)
        with self.lock:
            self.validate_survey(parsed.stations)
            return self.commit_survey(parsed.stations, parsed.start)

    # -------------------------------------------------------------------------
    # Traversal
    # -------------------------------------------------------------------------

    def children_index(self) -> dict[int, list[int]]:
        """Map of parent id to child ids, in insertion order."""
        with self.lock:
            children: dict[int, list[int]] = defaultdict(list)
            for station in self._stations.values():
                children[station.from_id].append(station.id)
            return children

    def subtree_edges(self, root_id: int) -> list[tuple[Station, Station]]:
        """Pre-order (parent, child) pairs of the tree below ``root_id``.

        Uses an explicit stack; a parent always comes before its children.

        Raises:
            UnknownStationError: If ``root_id`` is not in the store
        """
        with self.lock:
            if root_id not in self._stations:
                raise UnknownStationError(root_id)
            children = self.children_index()
            edges: list[tuple[Station, Station]] = []
            stack = [(root_id, child) for child in reversed(children[root_id])]
            while stack:
                parent_id, child_id = stack.pop()
                edges.append((self._stations[parent_id], self._stations[child_id]))
                stack.extend(
                    (child_id, grandchild)
                    for grandchild in reversed(children.get(child_id, []))
                )
            return edges

    # -------------------------------------------------------------------------
    # Derived output
    # -------------------------------------------------------------------------

    def propagate(self) -> list[int]:
        """Compute the coordinate of every derived station reachable."""
        return propagation.propagate_locations(self)

    def to_geojson(self) -> GeoJSONExport:
        return geojson.store_to_geojson(self)

    def export(self, *, indent: bool = False) -> str:
        """Serialize the map to GeoJSON text."""
        return geojson.export_geojson(self, indent=indent)

    def format_survey_as_srv(
        self, stations: Iterable[Station], start: str = START_STATION
    ) -> str:
        """Render a survey in Walls SRV format, starting depth from the store.

        Raises:
            UnknownStationError: If ``start`` names no station
        """
        with self.lock:
            start_depth = 0.0
            if start != START_STATION:
                found = self.lookup_id_by_name(start)
                if found is None:
                    raise UnknownStationError(start)
                start_depth = self._stations[found].depth
            return format_survey_as_srv(list(stations), start, start_depth)
