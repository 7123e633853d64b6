"""Tests for extracting compared names from if conditions."""

import ast

import pytest

from matchaudit.rules.python.condition_analyzer import (
    ConditionKind,
    classify,
    condition_names,
    iter_condition_names,
)


def _expr(source: str) -> ast.expr:
    return ast.parse(source, mode="eval").body


class TestClassify:
    @pytest.mark.parametrize(
        "source, kind",
        [
            ("a and b", ConditionKind.LOGICAL),
            ("a or b == 1", ConditionKind.LOGICAL),
            ("a == 1", ConditionKind.COMPARISON),
            ("1 <= a < 10", ConditionKind.COMPARISON),
            ("a", ConditionKind.NAME),
            ("a in b", ConditionKind.OTHER),
            ("a is None", ConditionKind.OTHER),
            ("a < b in c", ConditionKind.OTHER),
            ("not a == 1", ConditionKind.OTHER),
            ("f(a)", ConditionKind.OTHER),
            ("obj.attr", ConditionKind.OTHER),
            ("True", ConditionKind.OTHER),
        ],
    )
    def test_kinds(self, source, kind):
        assert classify(_expr(source)) is kind

    def test_missing_expression_is_other(self):
        assert classify(None) is ConditionKind.OTHER


class TestConditionNames:
    """Which operands count as variable usages."""

    def test_both_sides_of_comparison(self):
        assert condition_names(_expr("a == b")) == ["a", "b"]

    def test_literal_side_ignored(self):
        assert condition_names(_expr("1 == a")) == ["a"]

    def test_logical_operands_left_to_right(self):
        assert condition_names(_expr("a == 1 and b > 2 or c != 3")) == ["a", "b", "c"]

    def test_nested_logical_combinations(self):
        assert condition_names(_expr("(a == 1 or b == 2) and (c < 3 and d >= 4)")) == [
            "a",
            "b",
            "c",
            "d",
        ]

    def test_repeated_name_reported_each_time(self):
        assert condition_names(_expr("a == 1 or a == 2")) == ["a", "a"]

    def test_chained_comparison_reports_every_name(self):
        assert condition_names(_expr("low <= value < high")) == ["low", "value", "high"]

    @pytest.mark.parametrize(
        "source",
        [
            "f(x) == 1",
            "obj.kind == 1",
            "items[0] == 1",
            "x in allowed",
            "x is None",
            "not x == 1",
            "x",
            "x and y",
            "True",
        ],
    )
    def test_untracked_shapes(self, source):
        assert condition_names(_expr(source)) == []

    def test_bare_name_operand_of_logical_ignored(self):
        assert condition_names(_expr("flag and a == 1")) == ["a"]

    def test_yields_name_nodes_with_positions(self):
        names = list(iter_condition_names(_expr("x == y")))

        assert all(isinstance(n, ast.Name) for n in names)
        assert [n.col_offset for n in names] == [0, 5]

    def test_none_condition(self):
        assert condition_names(None) == []
