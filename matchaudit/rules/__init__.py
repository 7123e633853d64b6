"""matchaudit AST-based rule definitions."""

from .python import find_multiple_if_else_issues

__all__ = [
    "find_multiple_if_else_issues",
]
