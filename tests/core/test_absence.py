"""Tests for scenario.core.absence module."""

import copy
import pickle

import pytest

from scenario.core.absence import UNSET, Unset, clone, is_absent


class TestUnset:
    """Test the UNSET sentinel."""

    def test_singleton(self):
        assert Unset() is UNSET

    def test_falsy(self):
        assert not UNSET

    def test_repr(self):
        assert repr(UNSET) == "UNSET"

    def test_copy_preserves_identity(self):
        assert copy.copy(UNSET) is UNSET
        assert copy.deepcopy(UNSET) is UNSET
        assert copy.deepcopy({"k": UNSET})["k"] is UNSET

    def test_pickle_preserves_identity(self):
        assert pickle.loads(pickle.dumps(UNSET)) is UNSET


class TestIsAbsent:
    """Test absence classification."""

    @pytest.mark.parametrize("value", [None, UNSET])
    def test_sentinels(self, value):
        assert is_absent(value) is True

    @pytest.mark.parametrize("value", [0, "", False, [], {}, set(), 0.0, b""])
    def test_falsy_values_are_not_absent(self, value):
        assert is_absent(value) is False


class TestClone:
    """Test the clone strategy."""

    def test_deep_copy(self):
        original = {"nested": {"items": [1, 2]}}
        copied = clone(original)
        copied["nested"]["items"].append(3)
        assert original == {"nested": {"items": [1, 2]}}

    def test_immutables_pass_through(self):
        assert clone(5) == 5
        assert clone("text") == "text"
        assert clone(None) is None
