"""Pytest configuration and fixtures."""
import ast
import textwrap

import pytest

from matchaudit.rules.base import source_lines
from matchaudit.rules.python.chain_walker import MAX_VARIABLE_USAGE, MultipleIfElseCheck


@pytest.fixture
def scan():
    """Run the per-function check over a source snippet.

    Returns a callable giving the list of (line, column, token, usage_count)
    tuples reported, in report order.
    """

    def _scan(source: str, threshold: int = MAX_VARIABLE_USAGE):
        source = textwrap.dedent(source)
        issues = []

        def add_issue(anchor, message):
            issues.append((anchor.line, anchor.column, anchor.token, anchor.usage_count))

        check = MultipleIfElseCheck(add_issue, threshold=threshold, lines=source_lines(source))
        for node in ast.walk(ast.parse(source)):
            if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
                check.visit_function(node)
        return issues

    return _scan


@pytest.fixture
def sample_project(tmp_path):
    """Create minimal project with one offending and one clean module."""
    pkg = tmp_path / "app"
    pkg.mkdir()

    (pkg / "dispatch.py").write_text(textwrap.dedent("""\
        def route(kind):
            if kind == "a":
                return 1
            elif kind == "b":
                return 2
            elif kind == "c":
                return 3
            return 0
        """))

    (pkg / "clean.py").write_text(textwrap.dedent("""\
        def pick(x, y):
            if x == 1:
                return y
            return None
        """))

    venv = tmp_path / ".venv" / "lib"
    venv.mkdir(parents=True)
    (venv / "vendored.py").write_text(textwrap.dedent("""\
        def f(a):
            if a == 1:
                pass
            elif a == 2:
                pass
            elif a == 3:
                pass
        """))

    return tmp_path
