"""Tests for LCOM and method grouping."""

from math import comb

import pytest

from class_insight.metrics.lcom import calculate_lcom, cohesion_level, method_groups


class TestCalculateLcom:
    def test_no_methods(self):
        assert calculate_lcom({}) == 0

    def test_single_method(self):
        assert calculate_lcom({"a": {"x", "y"}}) == 0

    def test_single_method_without_properties(self):
        assert calculate_lcom({"a": set()}) == 0

    def test_all_methods_share_all_properties(self):
        props = {"x", "y", "z"}
        assert calculate_lcom({m: set(props) for m in "abcde"}) == 0

    @pytest.mark.parametrize("n", [2, 3, 5, 8])
    def test_disjoint_methods(self, n):
        method_props = {f"m{i}": {f"p{i}"} for i in range(n)}
        assert calculate_lcom(method_props) == comb(n, 2)

    def test_methods_without_properties_are_non_cohesive(self):
        assert calculate_lcom({"a": set(), "b": set()}) == 1

    def test_clamped_at_zero(self):
        # 3 cohesive pairs (a-b, a-c, b-c via x) vs 0 non-cohesive
        assert calculate_lcom({"a": {"x"}, "b": {"x"}, "c": {"x", "y"}}) == 0

    def test_mixed(self):
        # a-b cohesive, a-c and b-c non-cohesive -> 2 - 1
        assert calculate_lcom({"a": {"x"}, "b": {"x"}, "c": {"y"}}) == 1

    def test_never_negative(self):
        method_props = {"a": {"x"}, "b": {"x", "y"}, "c": {"y"}, "d": set()}
        assert calculate_lcom(method_props) >= 0


class TestMethodGroups:
    def test_two_groups(self):
        groups = method_groups(
            {"getName": {"name"}, "rename": {"name"}, "charge": {"balance"}, "log": set()}
        )
        assert sorted(sorted(g) for g in groups) == [["charge"], ["getName", "rename"]]

    def test_transitive_grouping(self):
        groups = method_groups({"a": {"x"}, "b": {"x", "y"}, "c": {"y"}})
        assert len(groups) == 1
        assert sorted(groups[0]) == ["a", "b", "c"]

    def test_empty(self):
        assert method_groups({}) == []


class TestCohesionLevel:
    @pytest.mark.parametrize(
        "lcom,level",
        [(0, "Excellent"), (2, "Good"), (5, "Fair"), (10, "Poor"), (11, "Very Poor")],
    )
    def test_levels(self, lcom, level):
        assert cohesion_level(lcom) == level
