# -*- coding: utf-8 -*-
"""Core data model for cave survey stations.

A station is a point along a survey. Anchor stations carry a coordinate
known from outside the survey (a GPS fix); derived stations carry the leg
reading (azimuth, length, depth) that leads to them from their parent and
receive their coordinate from location propagation.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import model_validator
from pydantic_extra_types.coordinate import Latitude  # noqa: TC002
from pydantic_extra_types.coordinate import Longitude  # noqa: TC002

from cavemap.constants import COORDINATE_SIGNIFICANT_DIGITS
from cavemap.constants import ROOT_ID
from cavemap.constants import START_STATION
from cavemap.enums import StationKind
from cavemap.geo_utils import GeoLocation


class Station(BaseModel):
    """A point along a survey.

    ``id`` and ``from_id`` are frozen: a station receives them once, from the
    store (or from the caller for pre-numbered input), through
    ``model_copy(update=...)``.

    Attributes:
        id: Unique identifier within a store (None until inserted)
        name: Station name, unique within a store except for "START"
        from_id: Id of the parent station, ROOT_ID for none
        kind: ANCHOR or DERIVED
        section: Free-form grouping label
        azimuth: Leg bearing from the parent, degrees (DERIVED)
        length: Leg horizontal distance from the parent, meters (DERIVED)
        depth: Signed depth
        longitude: Known or computed longitude (None while unknown)
        latitude: Known or computed latitude (None while unknown)
        comment: Free-form annotation
    """

    model_config = ConfigDict(validate_assignment=True)

    id: Annotated[int | None, Field(default=None, frozen=True)]
    name: str
    from_id: Annotated[int, Field(default=ROOT_ID, frozen=True)]
    kind: StationKind = StationKind.DERIVED
    section: str = ""
    azimuth: float = 0.0
    length: float = 0.0
    depth: float = 0.0
    longitude: Longitude | None = None
    latitude: Latitude | None = None
    comment: str = ""

    @model_validator(mode="after")
    def check_anchor_coordinate(self) -> Station:
        if self.kind == StationKind.ANCHOR and not self.has_coordinate:
            raise ValueError(f"anchor station {self.name!r} needs a coordinate")
        return self

    @classmethod
    def anchor(
        cls,
        name: str,
        longitude: float,
        latitude: float,
        **kwargs,
    ) -> Station:
        """Build an ANCHOR station at a known coordinate."""
        return cls(
            name=name,
            kind=StationKind.ANCHOR,
            longitude=longitude,
            latitude=latitude,
            **kwargs,
        )

    @classmethod
    def derived(
        cls,
        name: str,
        azimuth: float,
        length: float,
        depth: float,
        comment: str = "",
        **kwargs,
    ) -> Station:
        """Build a DERIVED station from its leg reading."""
        return cls(
            name=name,
            kind=StationKind.DERIVED,
            azimuth=azimuth,
            length=length,
            depth=depth,
            comment=comment,
            **kwargs,
        )

    # -----------------------------
    # Properties
    # -----------------------------

    @property
    def is_anchor(self) -> bool:
        return self.kind == StationKind.ANCHOR

    @property
    def is_root(self) -> bool:
        """True when the station hangs from no other station."""
        return self.from_id == ROOT_ID

    @property
    def is_start_placeholder(self) -> bool:
        return self.name == START_STATION

    @property
    def has_coordinate(self) -> bool:
        return self.longitude is not None and self.latitude is not None

    @property
    def location(self) -> GeoLocation | None:
        if not self.has_coordinate:
            return None
        return GeoLocation(latitude=self.latitude, longitude=self.longitude)

    # -----------------------------
    # Methods
    # -----------------------------

    def set_coordinate(self, longitude: float, latitude: float) -> None:
        self.longitude = longitude
        self.latitude = latitude

    def __str__(self) -> str:
        if self.is_anchor:
            digits = COORDINATE_SIGNIFICANT_DIGITS
            return f"{self.longitude:.{digits}g}/{self.latitude:.{digits}g}"
        return self.name
