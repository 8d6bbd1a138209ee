# -*- coding: utf-8 -*-
"""Error handling for cave survey parsing and station stores.

This module provides the exception hierarchy raised by the parser and the
station store, plus the source location and issue records used to report
parsing problems with helpful messages.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from cavemap.enums import Severity

if TYPE_CHECKING:
    from cavemap.models import Station


@dataclass(frozen=True)
class SourceLocation:
    """Tracks the source location of text for error reporting.

    Attributes:
        source: The source file name or identifier
        line: Line number (1-based, every physical line counts)
        text: The text of the line
    """

    source: str
    line: int
    text: str = ""

    def __str__(self) -> str:
        """Format as human-readable location string."""
        return f"(in {self.source}, line {self.line})"


@dataclass(frozen=True)
class ParseIssue:
    """A non-fatal parsing problem with its source location.

    This is a data record, not an exception. The parser collects these in
    its ``warnings`` list while it keeps going.

    Attributes:
        severity: ERROR or WARNING
        message: Human-readable message
        location: Source location where the issue occurred (optional)
    """

    severity: Severity
    message: str
    location: SourceLocation | None = None

    def __str__(self) -> str:
        base = f"{self.severity.value}: {self.message}"
        if self.location:
            base += f" {self.location}"
            if self.location.text:
                base += f"\n  {self.location.text}"
        return base


class CaveMapError(Exception):
    """Base class of every error raised by cavemap."""


# -----------------------------------------------------------------------------
# Parsing
# -----------------------------------------------------------------------------


class SurveyParseError(CaveMapError):
    """Raised when a survey text cannot be parsed.

    The parser attaches whatever it had assembled before failing, so callers
    can inspect the context while debugging.

    Attributes:
        message: Error message
        location: Source location where the error occurred
        stations: Stations parsed before the failing line
        start: Start station name in effect before the failing line
    """

    def __init__(self, message: str, location: SourceLocation | None = None):
        self.message = message
        self.location = location
        self.stations: list[Station] = []
        self.start: str | None = None
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.location:
            return f"{self.message} {self.location}"
        return self.message

    def to_issue(self) -> ParseIssue:
        """Convert the exception to a ParseIssue record."""
        return ParseIssue(
            severity=Severity.ERROR,
            message=self.message,
            location=self.location,
        )


class MalformedFieldError(SurveyParseError):
    """A numeric field failed to parse."""

    def __init__(
        self,
        role: str,
        value: str,
        location: SourceLocation | None = None,
    ):
        self.role = role
        self.value = value
        super().__init__(f"invalid {role}: {value!r}", location)


class UnexpectedFieldCountError(SurveyParseError):
    """A line does not match any record kind of the grammar."""

    def __init__(self, fields: list[str], location: SourceLocation | None = None):
        self.fields = list(fields)
        super().__init__(
            f"wrong number {len(self.fields)} of fields {self.fields!r}", location
        )


# -----------------------------------------------------------------------------
# Station store
# -----------------------------------------------------------------------------


class StoreError(CaveMapError):
    """Base class of station store errors."""


class DuplicateIdError(StoreError):
    """A station id is already used in the store."""

    def __init__(self, station_id: int, name: str = ""):
        self.station_id = station_id
        self.name = name
        super().__init__(f"station {name!r} already in store with id {station_id}")


class DuplicateNameError(StoreError):
    """A station name (other than the START sentinel) is already used."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"duplicate name {name!r}")


class UnknownStationError(StoreError):
    """A station referenced by name or id does not exist."""

    def __init__(self, reference: str | int):
        self.reference = reference
        super().__init__(f"unknown station {reference!r}")


class EmptySurveyError(StoreError):
    """A survey without stations was committed."""

    def __init__(self) -> None:
        super().__init__("can't add empty survey")


class CycleError(StoreError):
    """Inserting the stations would create a parent cycle."""

    def __init__(self, station_id: int):
        self.station_id = station_id
        super().__init__(f"station id {station_id} is its own ancestor")
