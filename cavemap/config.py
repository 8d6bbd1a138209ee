# -*- coding: utf-8 -*-
"""Runtime configuration for parsers and station stores.

The configuration is an explicit value handed to each ``SurveyParser`` and
``StationStore``; there is no process-wide state.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from cavemap.constants import FIELD_DELIMITER
from cavemap.constants import GEOJSON_COORDINATE_PRECISION


class CaveMapConfig(BaseModel):
    """Settings shared by the parser, the store and the exporter.

    Attributes:
        debug: Emit per-station DEBUG traces (parsing, commits, propagation,
            export). The records still go through the ``cavemap`` logger;
            see ``cavemap.logging_setup`` to route them somewhere.
        coordinate_precision: Decimal places kept in GeoJSON coordinates
        delimiter: Field separator of survey lines
    """

    model_config = ConfigDict(frozen=True)

    debug: bool = False
    coordinate_precision: Annotated[
        int, Field(default=GEOJSON_COORDINATE_PRECISION, ge=0, le=15)
    ]
    delimiter: Annotated[str, Field(default=FIELD_DELIMITER, min_length=1)]


DEFAULT_CONFIG = CaveMapConfig()
