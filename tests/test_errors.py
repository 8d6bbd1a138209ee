# -*- coding: utf-8 -*-
"""Tests for error handling classes."""

import pytest

from cavemap.enums import Severity
from cavemap.errors import CaveMapError
from cavemap.errors import CycleError
from cavemap.errors import DuplicateIdError
from cavemap.errors import DuplicateNameError
from cavemap.errors import EmptySurveyError
from cavemap.errors import MalformedFieldError
from cavemap.errors import ParseIssue
from cavemap.errors import SourceLocation
from cavemap.errors import StoreError
from cavemap.errors import SurveyParseError
from cavemap.errors import UnexpectedFieldCountError
from cavemap.errors import UnknownStationError


class TestSourceLocation:
    """Tests for SourceLocation dataclass."""

    def test_str(self):
        location = SourceLocation(source="gps.txt", line=3, text="1\tx")
        assert str(location) == "(in gps.txt, line 3)"

    def test_immutable(self):
        location = SourceLocation(source="gps.txt", line=3)
        with pytest.raises(AttributeError):
            location.line = 4


class TestParseIssue:
    def test_str_without_location(self):
        issue = ParseIssue(severity=Severity.WARNING, message="odd")
        assert str(issue) == "warning: odd"

    def test_str_with_location(self):
        issue = ParseIssue(
            severity=Severity.ERROR,
            message="bad",
            location=SourceLocation(source="gps.txt", line=2, text="a\tb"),
        )
        assert str(issue) == "error: bad (in gps.txt, line 2)\n  a\tb"


class TestSurveyParseError:
    def test_defaults(self):
        error = SurveyParseError("broken")
        assert str(error) == "broken"
        assert error.stations == []
        assert error.start is None

    def test_malformed_field(self):
        location = SourceLocation(source="gps.txt", line=3)
        error = MalformedFieldError("azimuth", "x", location)
        assert str(error) == "invalid azimuth: 'x' (in gps.txt, line 3)"
        assert (error.role, error.value) == ("azimuth", "x")

    def test_unexpected_field_count(self):
        error = UnexpectedFieldCountError(["1", "2"])
        assert str(error) == "wrong number 2 of fields ['1', '2']"

    def test_to_issue(self):
        location = SourceLocation(source="gps.txt", line=3)
        issue = MalformedFieldError("length", "?", location).to_issue()
        assert issue.severity == Severity.ERROR
        assert issue.message == "invalid length: '?'"
        assert issue.location is location

    def test_can_be_raised(self):
        with pytest.raises(CaveMapError, match="invalid depth"):
            raise MalformedFieldError("depth", "deep")


class TestStoreErrors:
    @pytest.mark.parametrize(
        ("error", "message"),
        [
            (DuplicateIdError(3, "A"), "station 'A' already in store with id 3"),
            (DuplicateNameError("A"), "duplicate name 'A'"),
            (UnknownStationError("GPS9"), "unknown station 'GPS9'"),
            (UnknownStationError(99), "unknown station 99"),
            (EmptySurveyError(), "can't add empty survey"),
            (CycleError(5), "station id 5 is its own ancestor"),
        ],
    )
    def test_messages(self, error, message):
        assert str(error) == message
        assert isinstance(error, StoreError)
        assert isinstance(error, CaveMapError)

    def test_parse_errors_are_not_store_errors(self):
        assert not issubclass(SurveyParseError, StoreError)
        assert issubclass(SurveyParseError, CaveMapError)
