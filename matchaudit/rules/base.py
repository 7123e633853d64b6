"""Contracts shared by the rules and the orchestrator that runs them."""

import inspect
import json
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from matchaudit.utils.logging import logger

# The only line terminators the Python tokenizer recognises. str.splitlines()
# also breaks on form feeds and other control characters, which shifts
# line numbers away from the ones stored on AST nodes.
LINE_BREAK = re.compile(r"\r\n|\r|\n")


def source_lines(content: str) -> list[str]:
    """Split source text into lines numbered the way ``ast`` numbers them."""
    if not content:
        return []
    lines = LINE_BREAK.split(content)
    if lines[-1] == "":
        lines.pop()
    return lines


class Severity(Enum):
    """How urgently a finding should be addressed."""

    LOW = "low"
    INFO = "info"


class Confidence(Enum):
    """How likely a finding is to be a true positive."""

    HIGH = "high"
    LOW = "low"


@dataclass
class StandardRuleContext:
    """Everything a rule gets to see about one source file."""

    file_path: Path
    content: str
    language: str
    project_path: Path

    ast_wrapper: dict[str, Any] | None = None

    # Rule settings taken from the runtime config (thresholds, snippet size)
    extra: dict[str, Any] = field(default_factory=dict)

    def get_ast(self, expected_type: str = None) -> Any | None:
        """Return the parsed tree, or None when absent or of another type."""
        if not self.ast_wrapper:
            return None

        ast_type = self.ast_wrapper.get("type")
        if expected_type and ast_type != expected_type:
            logger.debug(
                "AST type mismatch: wanted {wanted}, got {got}",
                wanted=expected_type,
                got=ast_type,
            )
            return None

        return self.ast_wrapper.get("tree")

    def get_lines(self) -> list[str]:
        return source_lines(self.content)

    def get_snippet(self, line_num: int, context_lines: int = 2) -> str:
        """Numbered source excerpt with the reported line marked by ``>>``."""
        lines = self.get_lines()
        if not lines or line_num < 1 or line_num > len(lines):
            return ""

        start = max(1, line_num - context_lines)
        end = min(len(lines), line_num + context_lines)

        return "\n".join(
            f"{i:4d}{'>> ' if i == line_num else '   '}{lines[i - 1]}"
            for i in range(start, end + 1)
        )


@dataclass
class StandardFinding:
    """One reported occurrence, as produced by a rule."""

    rule_name: str
    message: str
    file_path: str
    line: int

    column: int = 0
    severity: Severity | str = Severity.LOW
    category: str = "quality"
    confidence: Confidence | str = Confidence.HIGH
    snippet: str = ""

    additional_info: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Flatten into the row shape written to the JSON report."""
        result = {
            "rule": self.rule_name,
            "message": self.message,
            "file": self.file_path,
            "line": self.line,
            "column": self.column,
            "severity": self.severity.value
            if isinstance(self.severity, Severity)
            else self.severity,
            "category": self.category,
            "confidence": self.confidence.value
            if isinstance(self.confidence, Confidence)
            else self.confidence,
            "code_snippet": self.snippet,
        }

        if self.additional_info:
            result["details_json"] = json.dumps(self.additional_info)

        return result


def validate_rule_signature(func: Callable) -> bool:
    """A standardized rule takes exactly one parameter named ``context``."""
    params = list(inspect.signature(func).parameters)
    return params == ["context"]


@dataclass
class RuleMetadata:
    """Identity of a rule and the files the orchestrator should run it on."""

    name: str
    category: str

    rule_key: str | None = None
    deprecated_keys: list[str] = field(default_factory=list)
    message: str = ""

    target_extensions: list[str] | None = None
    exclude_patterns: list[str] | None = None
