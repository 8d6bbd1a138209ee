# -*- coding: utf-8 -*-
"""Location propagation from anchor stations.

Every anchor station roots a tree of derived stations. Walking each tree in
pre-order guarantees a parent's coordinate is known before its children are
visited, so a single pass locates every derived station reachable from an
anchor with the spherical forward formula.

Stations that already have a coordinate are left alone, which makes the
pass idempotent. No loop closure or adjustment is attempted: a station
reached by several readings keeps the first position computed.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cavemap.geo_utils import forward_position

if TYPE_CHECKING:
    from cavemap.models import Station
    from cavemap.store import StationStore

logger = logging.getLogger(__name__)


def locate_station(parent: Station, station: Station) -> tuple[float, float]:
    """Coordinate of ``station`` from its parent's coordinate and its leg."""
    return forward_position(
        parent.longitude,
        parent.latitude,
        station.azimuth,
        station.length,
    )


def propagate_locations(store: StationStore) -> list[int]:
    """Fill in the coordinate of every reachable derived station.

    Args:
        store: The station store (locked for the whole pass)

    Returns:
        Ids of the stations located by this call, in visiting order
    """
    updated: list[int] = []
    with store.lock:
        debug = store.config.debug
        for anchor in store.anchors():
            for parent, station in store.subtree_edges(anchor.id):
                if station.is_anchor or station.has_coordinate:
                    continue
                station.set_coordinate(*locate_station(parent, station))
                updated.append(station.id)
                if debug:
                    logger.debug(
                        "update[%s] %.8g/%.8g",
                        station.name,
                        station.longitude,
                        station.latitude,
                    )

        logger.info(
            "Located %d station(s) of %s from %d anchor(s)",
            len(updated),
            store.name,
            len(store.anchors()),
        )
    return updated
