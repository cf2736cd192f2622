"""Tests for src.tracker.store — ordered incident collection."""

from __future__ import annotations

import pytest

from src.contracts.errors import NotFoundError
from src.tracker.store import IncidentStore
from tests.conftest import make_incident


@pytest.fixture
def store() -> IncidentStore:
    s = IncidentStore()
    for n in range(1, 4):
        s.add(make_incident(incident_id=f"INC-{n}"))
    return s


class TestIncidentStore:
    def test_insertion_order(self, store):
        assert [i.incident_id for i in store.all()] == ["INC-1", "INC-2", "INC-3"]
        assert len(store) == 3

    def test_all_is_read_only_snapshot(self, store):
        view = store.all()
        assert isinstance(view, tuple)
        store.add(make_incident(incident_id="INC-4"))
        assert len(view) == 3
        assert len(store.all()) == 4

    def test_find_by_id_case_insensitive(self, store):
        assert store.find_by_id("inc-2").incident_id == "INC-2"

    def test_find_by_id_missing(self, store):
        assert store.find_by_id("INC-99") is None

    def test_first_duplicate_wins(self, store):
        dup = make_incident(incident_id="inc-1", description="second copy")
        store.add(dup)
        assert store.find_by_id("INC-1").description == "test incident"

    def test_find_by_index_one_based(self, store):
        assert store.find_by_index(1).incident_id == "INC-1"
        assert store.find_by_index(3).incident_id == "INC-3"

    @pytest.mark.parametrize("n", [0, -1, 4])
    def test_find_by_index_out_of_range(self, store, n):
        with pytest.raises(NotFoundError):
            store.find_by_index(n)

    def test_empty_store(self):
        s = IncidentStore()
        assert s.all() == ()
        with pytest.raises(NotFoundError):
            s.find_by_index(1)
