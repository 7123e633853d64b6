"""Detect if/elif/else chains that keep testing the same variable.

When one variable is compared in more than two conditions of nested or
chained ``if`` statements inside a function, a ``match`` statement usually
expresses the dispatch with a single evaluation of the subject.

Rule key: GCI2 (formerly EC2).
"""

import ast
from typing import Any

from matchaudit.rules.base import (
    Confidence,
    RuleMetadata,
    Severity,
    StandardFinding,
    StandardRuleContext,
    source_lines,
)
from matchaudit.rules.python.chain_walker import (
    MAX_VARIABLE_USAGE,
    MESSAGE,
    IssueAnchor,
    MultipleIfElseCheck,
)

METADATA = RuleMetadata(
    name="python-multiple-if-else",
    category="python",
    rule_key="GCI2",
    deprecated_keys=["EC2"],
    message=MESSAGE,
    target_extensions=[".py", ".pyi"],
    exclude_patterns=[".venv/", "__pycache__/", "site-packages/"],
)


class FunctionDefinitionVisitor(ast.NodeVisitor):
    """Hands every function definition in a module to the check, nested ones included."""

    def __init__(self, check: MultipleIfElseCheck):
        self.check = check

    def visit_FunctionDef(self, node: ast.FunctionDef) -> None:
        self.check.visit_function(node)
        self.generic_visit(node)

    def visit_AsyncFunctionDef(self, node: ast.AsyncFunctionDef) -> None:
        self.check.visit_function(node)
        self.generic_visit(node)


def find_repeated_comparisons(
    tree: Any,
    file_path: str = None,
    content: str = None,
    threshold: int = MAX_VARIABLE_USAGE,
) -> list[StandardFinding]:
    """Find variables compared in too many conditions of the same function.

    Args:
        tree: Python AST or dict wrapper from ast_parser.py
        file_path: Path to the file being analyzed
        content: Source text, used to locate ``else`` keywords and snippets
        threshold: Number of conditions a name may appear in before reporting

    Returns:
        One finding per usage beyond the threshold
    """
    if isinstance(tree, dict):
        if tree.get("type") != "python_ast":
            return []
        content = content if content is not None else tree.get("content")
        tree = tree.get("tree")

    if not isinstance(tree, ast.AST):
        return []

    file_path = file_path or "unknown"
    lines = source_lines(content)
    findings: list[StandardFinding] = []

    def add_issue(anchor: IssueAnchor, message: str) -> None:
        findings.append(
            StandardFinding(
                rule_name=METADATA.name,
                message=message,
                file_path=file_path,
                line=anchor.line,
                column=anchor.column,
                severity=Severity.LOW,
                category="quality",
                confidence=Confidence.HIGH,
                additional_info={
                    "rule_key": METADATA.rule_key,
                    "token": anchor.token,
                    "usage_count": anchor.usage_count,
                },
            )
        )

    check = MultipleIfElseCheck(add_issue, threshold=threshold, lines=lines)
    FunctionDefinitionVisitor(check).visit(tree)
    return findings


def analyze(context: StandardRuleContext) -> list[StandardFinding]:
    """Run the multiple if/else check on one parsed Python file."""
    tree = context.get_ast("python_ast")
    if tree is None:
        return []

    threshold = context.extra.get("max_variable_usage", MAX_VARIABLE_USAGE)
    context_lines = context.extra.get("snippet_context_lines", 2)

    findings = find_repeated_comparisons(
        tree,
        file_path=str(context.file_path),
        content=context.content,
        threshold=threshold,
    )
    for finding in findings:
        finding.snippet = context.get_snippet(finding.line, context_lines)

    return findings
