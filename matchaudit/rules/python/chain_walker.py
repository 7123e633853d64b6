"""Walk if/elif/else chains of one function and count compared variables.

The walk keeps two ledgers:

- ``global_usage`` accumulates usages across the whole function body, so
  sibling conditions at the same or shallower depth add up.
- ``chain_usage`` only remembers what the branches of the chain currently
  being processed tested. An ``else`` has no condition, so it re-uses the
  variables of the branch before it.

An ``elif`` continues the decision of its ``if`` and is counted at the same
depth; only branch bodies open a deeper level.
"""

import ast
import re
from collections.abc import Callable
from dataclasses import dataclass

from matchaudit.rules.python.condition_analyzer import iter_condition_names
from matchaudit.rules.python.usage_ledger import VariableUsageLedger
from matchaudit.utils.logging import logger

MESSAGE = "Use a match-case statement instead of multiple if-else if possible"

# A name may appear in this many conditions before each further use is reported
MAX_VARIABLE_USAGE = 2

ELSE_KEYWORD = re.compile(r"^(\s*)else\s*:")


@dataclass(frozen=True)
class IssueAnchor:
    """Source token a finding is attached to."""

    line: int
    column: int
    token: str
    usage_count: int


IssueSink = Callable[[IssueAnchor, str], None]


def elif_branch(node: ast.If) -> ast.If | None:
    """Return the ``elif`` following ``node``, if its else-part is one.

    ``elif`` is stored as a lone ``If`` in ``orelse`` that starts at the
    column of its parent, while ``else:`` followed by an ``if`` is indented.
    """
    if len(node.orelse) != 1:
        return None
    candidate = node.orelse[0]
    if isinstance(candidate, ast.If) and candidate.col_offset == node.col_offset:
        return candidate
    return None


class ConditionalChainWalker:
    """Recursive walk over the statement lists of a single function."""

    def __init__(
        self,
        add_issue: IssueSink,
        threshold: int = MAX_VARIABLE_USAGE,
        lines: list[str] | None = None,
    ):
        self.add_issue = add_issue
        self.threshold = threshold
        self.lines = lines or []
        self.global_usage = VariableUsageLedger()
        self.chain_usage = VariableUsageLedger()

    def visit(self, statements: list[ast.stmt] | None, depth: int) -> None:
        """Visit every conditional chain directly inside ``statements``."""
        if not statements:
            return

        for statement in statements:
            if isinstance(statement, ast.If):
                self.visit_if(statement, depth)

    def visit_if(self, node: ast.If, depth: int) -> None:
        """Process an ``if`` together with its ``elif`` branches and ``else``."""
        branch = node
        self._visit_branch(branch, depth)

        next_branch = elif_branch(branch)
        while next_branch is not None:
            branch = next_branch
            self._visit_branch(branch, depth)
            next_branch = elif_branch(branch)

        if branch.orelse:
            self._visit_else(branch, depth)

    def _visit_branch(self, branch: ast.If, depth: int) -> None:
        # Counts below this level belong to the previous sibling's body
        self.global_usage.invalidate_from(depth + 1)
        self.chain_usage.invalidate_from(depth)

        if branch.test is not None:
            for name in iter_condition_names(branch.test):
                used = self._record_usage(name.id, depth)
                if used > self.threshold:
                    self._report(IssueAnchor(name.lineno, name.col_offset, name.id, used))

        self.visit(branch.body, depth + 1)

    def _visit_else(self, branch: ast.If, depth: int) -> None:
        self.global_usage.invalidate_from(depth + 1)

        inherited = self.chain_usage.snapshot(depth)
        if inherited:
            line, column = self._locate_else(branch)
            for name in inherited:
                used = self._record_usage(name, depth)
                if used > self.threshold:
                    self._report(IssueAnchor(line, column, "else", used))

        self.visit(branch.orelse, depth + 1)

    def _record_usage(self, name: str, depth: int) -> int:
        used = self.global_usage.increment(name, depth)
        self.chain_usage.increment(name, depth)
        return used

    def _report(self, anchor: IssueAnchor) -> None:
        self.add_issue(anchor, MESSAGE)

    def _locate_else(self, branch: ast.If) -> tuple[int, int]:
        """Line and column of the ``else`` keyword closing ``branch``."""
        body_end = branch.body[-1].end_lineno or branch.lineno
        first_else = branch.orelse[0].lineno

        for line_no in range(body_end + 1, min(first_else, len(self.lines)) + 1):
            match = ELSE_KEYWORD.match(self.lines[line_no - 1])
            if match:
                return line_no, len(match.group(1))

        return body_end + 1, branch.col_offset


class MultipleIfElseCheck:
    """Entry point called once per function definition.

    Each call builds a fresh walker, so no usage count survives from one
    function to the next and independent calls never share state.
    """

    def __init__(
        self,
        add_issue: IssueSink,
        threshold: int = MAX_VARIABLE_USAGE,
        lines: list[str] | None = None,
    ):
        self.add_issue = add_issue
        self.threshold = threshold
        self.lines = lines

    def visit_function(self, node: ast.FunctionDef | ast.AsyncFunctionDef) -> None:
        reported = 0

        def add_issue(anchor: IssueAnchor, message: str) -> None:
            nonlocal reported
            reported += 1
            self.add_issue(anchor, message)

        walker = ConditionalChainWalker(add_issue, self.threshold, self.lines)
        walker.visit(node.body, 0)

        logger.debug(
            "Scanned function {name} (line {line}): {count} issue(s)",
            name=node.name,
            line=node.lineno,
            count=reported,
        )
