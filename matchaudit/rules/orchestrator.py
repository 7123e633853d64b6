"""Unified orchestrator for dynamic rule discovery and execution.

This module provides a central orchestrator that:
1. Dynamically discovers the rules in the /rules directory
2. Filters them per file using their METADATA
3. Parses each source file once and executes every applicable rule
4. Collects findings as dictionaries ready for reporting
"""

import importlib
import inspect
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from matchaudit.ast_parser import ASTParser
from matchaudit.config_runtime import load_runtime_config
from matchaudit.exceptions import SourceParseError
from matchaudit.rules.base import (
    RuleMetadata,
    StandardRuleContext,
    validate_rule_signature,
)
from matchaudit.utils.constants import DEFAULT_EXCLUDED_DIRS
from matchaudit.utils.logging import logger


@dataclass
class RuleInfo:
    """Metadata about a discovered rule."""

    name: str
    module: str
    function: Callable
    category: str
    metadata: RuleMetadata | None = None


class RulesOrchestrator:
    """Unified orchestrator for rule execution."""

    def __init__(self, project_path: Path, config: dict[str, Any] | None = None):
        """Initialize the orchestrator.

        Args:
            project_path: Root path of the project being analyzed
            config: Runtime configuration (defaults to load_runtime_config(project_path))
        """
        self.project_path = Path(project_path)
        self.config = config if config is not None else load_runtime_config(str(self.project_path))
        self.parser = ASTParser()
        self.rules = self._discover_all_rules()
        self.skipped_files: list[dict[str, Any]] = []

        total_rules = sum(len(r) for r in self.rules.values())
        logger.debug(
            "Discovered {total} rules across {count} categories",
            total=total_rules,
            count=len(self.rules),
        )

    def _discover_all_rules(self) -> dict[str, list[RuleInfo]]:
        """Discover rule modules named ``*_analyze.py`` under /rules/<category>/.

        Returns:
            Dictionary mapping category name to list of RuleInfo objects
        """
        rules_by_category: dict[str, list[RuleInfo]] = {}

        import matchaudit.rules as rules_package

        rules_dir = Path(rules_package.__file__).parent

        for subdir in sorted(rules_dir.iterdir()):
            if not subdir.is_dir() or subdir.name.startswith("__"):
                continue

            category = subdir.name
            rules_by_category[category] = []

            for py_file in sorted(subdir.glob("*_analyze.py")):
                module_name = f"matchaudit.rules.{category}.{py_file.stem}"

                try:
                    module = importlib.import_module(module_name)
                except ImportError as e:
                    logger.warning("Failed to import {module}: {err}", module=module_name, err=e)
                    continue

                func = getattr(module, "analyze", None)
                if func is None or not inspect.isfunction(func) or not validate_rule_signature(func):
                    logger.debug("Module {module} has no standard analyze(context)", module=module_name)
                    continue

                metadata = getattr(module, "METADATA", None)
                rules_by_category[category].append(
                    RuleInfo(
                        name=metadata.name if metadata else py_file.stem,
                        module=module_name,
                        function=func,
                        category=category,
                        metadata=metadata,
                    )
                )
                logger.debug("Found rule: {category}/{module}", category=category, module=py_file.stem)

        return rules_by_category

    def _should_run_rule_on_file(self, rule: RuleInfo, file_path: Path) -> bool:
        """Check if a rule should run on a specific file based on its METADATA."""
        metadata = rule.metadata
        if metadata is None:
            return True

        file_path_str = str(file_path).replace("\\", "/")

        if metadata.exclude_patterns:
            for pattern in metadata.exclude_patterns:
                if pattern in file_path_str:
                    return False

        if metadata.target_extensions:
            if file_path.suffix.lower() not in metadata.target_extensions:
                return False

        return True

    def iter_rules(self) -> Iterable[RuleInfo]:
        for rules in self.rules.values():
            yield from rules

    def run_rules_for_file(self, file_path: Path) -> list[dict[str, Any]]:
        """Parse one file and run the rules applicable to it.

        Unparsable files are logged and recorded in ``skipped_files``; a rule
        failing on a file is logged and does not stop the other rules.
        """
        file_path = Path(file_path)
        applicable = [r for r in self.iter_rules() if self._should_run_rule_on_file(r, file_path)]
        if not applicable:
            return []

        try:
            wrapper = self.parser.parse_file(file_path)
        except SourceParseError as e:
            logger.warning("Skipping {path}: {err}", path=file_path, err=e.reason)
            self.skipped_files.append({"file": str(file_path), "line": e.line, "reason": e.reason})
            return []
        except OSError as e:
            logger.warning("Cannot read {path}: {err}", path=file_path, err=e)
            self.skipped_files.append({"file": str(file_path), "line": None, "reason": str(e)})
            return []

        if wrapper is None:
            return []

        context = StandardRuleContext(
            file_path=self._display_path(file_path),
            content=wrapper["content"],
            language=wrapper["language"],
            project_path=self.project_path,
            ast_wrapper=wrapper,
            extra={
                "max_variable_usage": self.config["limits"]["max_variable_usage"],
                "snippet_context_lines": self.config["report"]["snippet_context_lines"],
            },
        )

        findings = []
        for rule in applicable:
            try:
                rule_findings = rule.function(context)
            except Exception as e:
                logger.opt(exception=True).error(
                    "Rule {rule} failed on {path}: {err}", rule=rule.name, path=file_path, err=e
                )
                continue

            findings.extend(f.to_dict() for f in rule_findings or [])

        return findings

    def collect_files(self, paths: Iterable[Path], exclude: Iterable[str] = ()) -> list[Path]:
        """Expand files and directories into the Python files to analyze."""
        exclude = list(exclude) + list(self.config["scan"]["exclude"])
        max_size = self.config["limits"]["max_file_size"]
        collected: list[Path] = []

        for path in paths:
            path = Path(path)
            if path.is_file():
                candidates = [path]
            elif path.is_dir():
                candidates = sorted(
                    p
                    for p in path.rglob("*")
                    if p.is_file()
                    and p.suffix.lower() in ASTParser.EXTENSIONS
                    and not DEFAULT_EXCLUDED_DIRS.intersection(p.relative_to(path).parts[:-1])
                )
            else:
                logger.warning("Path does not exist: {path}", path=path)
                continue

            for candidate in candidates:
                normalized = str(candidate).replace("\\", "/")
                if any(pattern in normalized for pattern in exclude):
                    continue
                if candidate.stat().st_size > max_size:
                    logger.info("Skipping {path}: larger than {size} bytes", path=candidate, size=max_size)
                    continue
                collected.append(candidate)

        return collected

    def run_paths(self, paths: Iterable[Path], exclude: Iterable[str] = ()) -> list[dict[str, Any]]:
        """Run all rules over files and directories, findings sorted by location."""
        files = self.collect_files(paths, exclude)
        logger.info("Analyzing {count} file(s)", count=len(files))

        all_findings = []
        for file_path in files:
            all_findings.extend(self.run_rules_for_file(file_path))

        all_findings.sort(key=lambda f: (f["file"], f["line"], f["column"]))
        logger.info(
            "Found {count} issue(s) in {files} file(s)",
            count=len(all_findings),
            files=len({f["file"] for f in all_findings}),
        )
        return all_findings

    def get_rule_stats(self) -> dict[str, Any]:
        """Get statistics about discovered rules."""
        return {
            "total_rules": sum(len(rules) for rules in self.rules.values()),
            "categories": [cat for cat, rules in self.rules.items() if rules],
            "by_category": {cat: len(rules) for cat, rules in self.rules.items() if rules},
        }

    def _display_path(self, file_path: Path) -> Path:
        try:
            return file_path.resolve().relative_to(self.project_path.resolve())
        except ValueError:
            return file_path


def run_all_rules(project_path: str, paths: Iterable[str] | None = None) -> list[dict[str, Any]]:
    """Run all rules for a project.

    Args:
        project_path: Root path of the project
        paths: Files or directories to analyze (defaults to the project root)

    Returns:
        List of all findings
    """
    orchestrator = RulesOrchestrator(Path(project_path))
    targets = [Path(p) for p in paths] if paths else [orchestrator.project_path]
    return orchestrator.run_paths(targets)
