# -*- coding: utf-8 -*-
"""Opt-in routing of cavemap debug traces.

Library modules only create loggers. Applications that want the traces a
``CaveMapConfig(debug=True)`` produces attach a handler here, pointing at any
text stream (the output sink).
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

PACKAGE_LOGGER = "cavemap"

_DEBUG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def attach_debug_handler(stream: TextIO | None = None) -> logging.Handler:
    """Send every cavemap record at DEBUG and above to ``stream``.

    While attached, cavemap records stop propagating to the root logger, so
    an application handler installed with ``logging.basicConfig`` does not
    print them a second time.

    Args:
        stream: Destination stream (stderr if None)

    Returns:
        The attached handler, to be given back to ``detach_debug_handler``
    """
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(_DEBUG_FORMAT))
    handler.setLevel(logging.DEBUG)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    return handler


def detach_debug_handler(handler: logging.Handler) -> None:
    """Remove a handler installed by ``attach_debug_handler``."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.removeHandler(handler)
    if not logger.handlers:
        logger.setLevel(logging.NOTSET)
        logger.propagate = True
    handler.flush()
