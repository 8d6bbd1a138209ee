# -*- coding: utf-8 -*-
"""Tests for the station store."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from cavemap.constants import ROOT_ID
from cavemap.errors import CycleError
from cavemap.errors import DuplicateIdError
from cavemap.errors import DuplicateNameError
from cavemap.errors import EmptySurveyError
from cavemap.errors import UnknownStationError
from cavemap.models import Station
from cavemap.store import StationStore
from cavemap.survey.parser import parse_survey
from tests.conftest import GPS_SURVEY
from tests.conftest import LINE_SURVEY


class TestCommitSurvey:
    def test_ids_in_empty_store(self):
        store = StationStore("Test")
        parsed = parse_survey(GPS_SURVEY, "GPS")
        store.validate_survey(parsed.stations)
        committed = store.commit_survey(parsed.stations, parsed.start)

        assert [s.id for s in committed] == [1, 2, 3, 4]
        assert [s.from_id for s in committed] == [ROOT_ID, 1, 2, 3]
        assert len(store) == 4
        assert store.max_id == 4
        assert str(store) == "Test 4 stations"

    def test_input_is_not_modified(self):
        store = StationStore("Test")
        parsed = parse_survey(GPS_SURVEY, "GPS")
        store.commit_survey(parsed.stations, parsed.start)
        assert all(s.id is None for s in parsed.stations)

    def test_start_from_named_station(self, gps_store):
        committed = gps_store.add_survey(LINE_SURVEY)
        assert [(s.name, s.id, s.from_id) for s in committed] == [
            ("4", 5, 4),
            ("5", 6, 5),
        ]

    def test_ids_follow_max_id(self, chico_store):
        committed = chico_store.add_survey("CsFree7\nCsFree8\t200\t3\t12\tend\n")
        assert (committed[0].id, committed[0].from_id) == (167, 166)

    def test_unknown_start(self, gps_store):
        with pytest.raises(UnknownStationError) as exc_info:
            gps_store.add_survey("Nowhere\n1\t90\t5\t1\tc\n")
        assert exc_info.value.reference == "Nowhere"
        assert len(gps_store) == 4

    def test_empty_survey(self):
        store = StationStore("Test")
        with pytest.raises(EmptySurveyError):
            store.commit_survey([], "START")
        assert len(store) == 0


class TestValidateSurvey:
    def test_duplicate_name(self, gps_store):
        with pytest.raises(DuplicateNameError) as exc_info:
            gps_store.add_survey(GPS_SURVEY, prefix="GPS")
        assert exc_info.value.name == "GPS0"
        assert len(gps_store) == 4

    def test_duplicate_within_survey(self):
        store = StationStore("Test")
        with pytest.raises(DuplicateNameError):
            store.add_survey("1\t90\t5\t1\ta\n1\t90\t5\t1\tb\n")

    def test_start_may_repeat(self):
        store = StationStore("Test")
        store.add_survey("START\t-87.4\t20.3\n")
        store.add_survey("START\t-87.5\t20.4\n")
        assert len(store) == 2
        assert store.lookup_id_by_name("START") == 1


class TestInsertDetachedSurvey:
    def test_out_of_order_batch(self, chico_store):
        assert len(chico_store) == 8
        assert chico_store.max_id == 166
        assert chico_store.lookup_id_by_name("CsFree3") == 162
        assert chico_store.get(162).from_id == 161
        assert [s.name for s in chico_store.anchors()] == ["START"]

    def test_duplicate_id_in_store(self, chico_store):
        with pytest.raises(DuplicateIdError) as exc_info:
            chico_store.insert_detached_survey(
                [Station.derived("X", 0, 1, 0, id=160, from_id=159)]
            )
        assert exc_info.value.station_id == 160
        assert len(chico_store) == 8
        assert chico_store.get(160).name == "CsFree1"

    def test_duplicate_id_in_batch(self):
        store = StationStore("Test")
        with pytest.raises(DuplicateIdError):
            store.insert_detached_survey(
                [
                    Station.anchor("A", 0, 0, id=1),
                    Station.derived("B", 0, 1, 0, id=1, from_id=1),
                ]
            )
        assert len(store) == 0

    def test_dangling_parent(self):
        store = StationStore("Test")
        with pytest.raises(UnknownStationError) as exc_info:
            store.insert_detached_survey(
                [
                    Station.anchor("A", 0, 0, id=1),
                    Station.derived("B", 0, 1, 0, id=2, from_id=99),
                ]
            )
        assert exc_info.value.reference == 99
        assert len(store) == 0

    def test_cycle(self):
        store = StationStore("Test")
        with pytest.raises(CycleError):
            store.insert_detached_survey(
                [
                    Station.derived("A", 0, 1, 0, id=1, from_id=2),
                    Station.derived("B", 0, 1, 0, id=2, from_id=1),
                ]
            )
        assert len(store) == 0

    def test_self_parent(self):
        store = StationStore("Test")
        with pytest.raises(CycleError) as exc_info:
            store.insert_detached_survey(
                [Station.derived("A", 0, 1, 0, id=5, from_id=5)]
            )
        assert exc_info.value.station_id == 5

    def test_parent_in_store(self, chico_store):
        chico_store.insert_detached_survey(
            [Station.derived("Side1", 90, 2, 3, id=200, from_id=163)]
        )
        assert chico_store.get(200).from_id == 163

    def test_missing_id(self):
        store = StationStore("Test")
        with pytest.raises(ValueError, match="has no id"):
            store.insert_detached_survey([Station.derived("A", 0, 1, 0)])

    @pytest.mark.parametrize("station_id", [ROOT_ID, -7])
    def test_negative_id(self, station_id):
        store = StationStore("Test")
        with pytest.raises(ValueError, match="negative id"):
            store.insert_detached_survey(
                [Station.anchor("A", -87.4, 20.3, id=station_id)]
            )
        assert len(store) == 0
        assert store.propagate() == []


class TestTraversal:
    def test_subtree_edges_pre_order(self, chico_store):
        edges = chico_store.subtree_edges(159)
        assert [(p.name, c.name) for p, c in edges] == [
            ("START", "CsFree1"),
            ("CsFree1", "CsFree2"),
            ("CsFree2", "CsFree3"),
            ("CsFree3", "CsFree4"),
            ("CsFree4", "CsFree5"),
            ("CsFree5", "CsFree6"),
            ("CsFree6", "CsFree7"),
        ]

    def test_subtree_edges_branches(self, chico_store):
        chico_store.insert_detached_survey(
            [
                Station.derived("Side1", 90, 2, 3, id=200, from_id=160),
                Station.derived("Side2", 90, 2, 3, id=201, from_id=200),
            ]
        )
        names = [(p.name, c.name) for p, c in chico_store.subtree_edges(159)]
        assert names[:3] == [
            ("START", "CsFree1"),
            ("CsFree1", "CsFree2"),
            ("CsFree2", "CsFree3"),
        ]
        assert names[-2:] == [("CsFree1", "Side1"), ("Side1", "Side2")]
        assert len(names) == 9

    def test_subtree_of_leaf(self, chico_store):
        assert chico_store.subtree_edges(166) == []

    def test_subtree_unknown_root(self, chico_store):
        with pytest.raises(UnknownStationError):
            chico_store.subtree_edges(1)

    def test_children_index(self, chico_store):
        children = chico_store.children_index()
        assert children[ROOT_ID] == [159]
        assert children[159] == [160]
        assert children[165] == [166]

    def test_lookup_missing(self, gps_store):
        assert gps_store.lookup_id_by_name("GPS9") is None
        assert gps_store.get(99) is None
        assert 1 in gps_store
        assert 99 not in gps_store


class TestConcurrency:
    def test_concurrent_commits(self):
        store = StationStore("Test")
        text = "auto\n0\t-87.45\t20.31\n1\t90\t5\t1\tc\n2\t90\t5\t1\tc\n"

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(
                executor.map(lambda i: store.add_survey(text, f"T{i}-"), range(16))
            )

        assert len(store) == 48
        assert {s.id for s in store} == set(range(1, 49))
        for committed in results:
            ids = [s.id for s in committed]
            assert ids == list(range(ids[0], ids[0] + 3))
            assert [s.from_id for s in committed[1:]] == ids[:-1]
