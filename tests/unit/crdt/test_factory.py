"""Tests for building CRDTs from payload kinds."""

import pytest

from statesync.crdt.factory import CRDT_KINDS, create_crdt, crdt_for_state
from statesync.crdt.gset import GSet
from statesync.exceptions import InvalidStateKind


class TestCreateCrdt:
    """Tests for create_crdt."""

    def test_gset_kind(self):
        crdt = create_crdt("gset")
        assert isinstance(crdt, GSet)
        assert crdt.size == 0

    def test_passes_any_support(self, any_support):
        crdt = create_crdt("gset", any_support)
        assert crdt._any_support is any_support

    def test_unknown_kind_raises(self):
        with pytest.raises(InvalidStateKind, match="gcounter"):
            create_crdt("gcounter")

    def test_registry_contains_gset(self):
        assert CRDT_KINDS["gset"] is GSet


class TestCrdtForState:
    """Tests for crdt_for_state."""

    def test_rehydrates_gset(self):
        source = GSet().add("a").add({"b": 1})
        crdt = crdt_for_state(source.get_state_and_reset_delta())

        assert isinstance(crdt, GSet)
        assert crdt.has("a")
        assert crdt.has({"b": 1})
        assert crdt.get_and_reset_delta() is None

    @pytest.mark.parametrize("state", [None, {}, {"gcounter": {"value": 1}}, {"gset": None}])
    def test_unknown_state_raises(self, state):
        with pytest.raises(InvalidStateKind):
            crdt_for_state(state)
