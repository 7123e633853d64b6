"""Extraction of plain variable names tested by an ``if`` condition.

Only two shapes are decomposed:

- ``and`` / ``or`` combinations, whose operands are analyzed left to right
- comparisons (``==``, ``!=``, ``<``, ``<=``, ``>``, ``>=``), whose bare-name
  operands are reported

Calls, attribute access, membership and identity tests, ``not`` and every
other expression contribute nothing.
"""

import ast
from collections.abc import Iterator
from enum import Enum

COMPARISON_OPERATORS = (ast.Eq, ast.NotEq, ast.Lt, ast.LtE, ast.Gt, ast.GtE)


class ConditionKind(Enum):
    """Shape of an expression as far as condition tracking is concerned."""

    LOGICAL = "logical"
    COMPARISON = "comparison"
    NAME = "name"
    OTHER = "other"


def classify(expr: ast.AST | None) -> ConditionKind:
    """Tag an expression with its ConditionKind."""
    if isinstance(expr, ast.BoolOp):
        return ConditionKind.LOGICAL
    if isinstance(expr, ast.Compare) and all(
        isinstance(op, COMPARISON_OPERATORS) for op in expr.ops
    ):
        return ConditionKind.COMPARISON
    if isinstance(expr, ast.Name):
        return ConditionKind.NAME
    return ConditionKind.OTHER


def iter_condition_names(expr: ast.AST | None) -> Iterator[ast.Name]:
    """Yield every bare name compared inside ``expr``, in source order.

    The generator is lazy: callers record each name before the next one is
    produced, so repeated names in one condition are counted one by one.
    """
    kind = classify(expr)

    if kind is ConditionKind.LOGICAL:
        for operand in expr.values:
            if classify(operand) in (ConditionKind.LOGICAL, ConditionKind.COMPARISON):
                yield from iter_condition_names(operand)
    elif kind is ConditionKind.COMPARISON:
        for operand in (expr.left, *expr.comparators):
            if classify(operand) is ConditionKind.NAME:
                yield operand
    elif kind in (ConditionKind.NAME, ConditionKind.OTHER):
        return
    else:
        raise AssertionError(f"Unhandled condition kind: {kind}")


def condition_names(expr: ast.AST | None) -> list[str]:
    """Names compared in ``expr``, repeats included."""
    return [name.id for name in iter_condition_names(expr)]
