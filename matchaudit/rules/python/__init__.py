"""Python-specific code structure rules.

This module contains rules for detecting Python-specific issues:
- if/elif/else chains that repeatedly compare the same variable and
  should be written as a match statement
"""

from .multiple_if_else_analyze import analyze as find_multiple_if_else_issues

__all__ = [
    'find_multiple_if_else_issues',
]
