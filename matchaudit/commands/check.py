"""Match-case audit CLI command.

Usage: matchaudit check [PATHS]...
"""

import json
from collections import Counter
from pathlib import Path

import click
from rich.table import Table

from matchaudit.config_runtime import load_runtime_config
from matchaudit.rules.orchestrator import RulesOrchestrator
from matchaudit.ui import console, print_header, print_success
from matchaudit.utils.error_handler import handle_exceptions
from matchaudit.utils.exit_codes import ExitCodes
from matchaudit.utils.logging import logger


@click.command("check")
@click.argument("paths", nargs=-1, type=click.Path(exists=True, path_type=Path))
@click.option("--project-path", default=".", help="Root directory holding .pf/config.json")
@click.option(
    "--exclude",
    multiple=True,
    help="Skip files whose path contains this pattern (repeatable)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json", "summary"]),
    default="text",
    help="Output format",
)
@click.option("--save", type=click.Path(path_type=Path), help="Save JSON report to file")
@click.option("--max-rows", type=int, default=None, help="Maximum rows to display in table")
@click.option("--fail-on-findings", is_flag=True, help="Exit 1 if any finding is reported")
@handle_exceptions
def check(paths, project_path, exclude, output_format, save, max_rows, fail_on_findings):
    """Flag if/elif/else chains that should be match statements.

    Walks every function and counts, per nesting level, how often each
    plain variable is compared in an if/elif condition. The third and
    every later comparison of the same name in one function is reported,
    as is an else branch that completes such a chain.

    \b
    EXAMPLES:
      matchaudit check src/
      matchaudit check app.py --format json --save report.json
      matchaudit check . --exclude tests/ --fail-on-findings

    \b
    EXIT CODES:
      0 = Success (or findings without --fail-on-findings)
      1 = Findings reported and --fail-on-findings set
      2 = Analysis failed (see .pf/error.log)
    """
    project_path = Path(project_path).resolve()
    config = load_runtime_config(str(project_path))
    orchestrator = RulesOrchestrator(project_path, config=config)

    targets = list(paths) if paths else [project_path]
    findings = orchestrator.run_paths(targets, exclude=exclude)
    report = _build_report(findings, orchestrator.skipped_files)

    raw_output = project_path / config["paths"]["raw_report"]
    raw_output.parent.mkdir(parents=True, exist_ok=True)
    with open(raw_output, "w", encoding="utf-8") as f:
        json.dump(report, f, indent=2)

    if save:
        save.parent.mkdir(parents=True, exist_ok=True)
        with open(save, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2)

    if output_format == "json":
        click.echo(json.dumps(report, indent=2))
    elif output_format == "summary":
        _print_summary(report)
    else:
        _print_table(findings, max_rows or config["report"]["max_rows"])
        _print_summary(report)

    if fail_on_findings and findings:
        logger.info(ExitCodes.get_description(ExitCodes.FINDINGS))
        raise click.exceptions.Exit(ExitCodes.FINDINGS)


def _build_report(findings: list[dict], skipped: list[dict]) -> dict:
    return {
        "findings": findings,
        "skipped_files": skipped,
        "summary": {
            "total_findings": len(findings),
            "files_affected": len({f["file"] for f in findings}),
            "by_rule": dict(Counter(f["rule"] for f in findings)),
            "files_skipped": len(skipped),
        },
    }


def _print_table(findings: list[dict], max_rows: int) -> None:
    if not findings:
        print_success("No conditional chains need a match statement")
        return

    table = Table(title="Match-case candidates", show_lines=False)
    table.add_column("File", style="path", overflow="fold")
    table.add_column("Line", justify="right")
    table.add_column("Col", justify="right")
    table.add_column("Token")
    table.add_column("Uses", justify="right")

    for finding in findings[:max_rows]:
        details = json.loads(finding.get("details_json", "{}"))
        table.add_row(
            finding["file"],
            str(finding["line"]),
            str(finding["column"]),
            str(details.get("token", "")),
            str(details.get("usage_count", "")),
        )

    console.print(table)
    if len(findings) > max_rows:
        console.print(f"[dim]... {len(findings) - max_rows} more not shown[/dim]")


def _print_summary(report: dict) -> None:
    summary = report["summary"]
    print_header("MATCH-CASE AUDIT")
    console.print(f"Total findings: {summary['total_findings']}", highlight=False)
    console.print(f"Files affected: {summary['files_affected']}", highlight=False)
    if summary["files_skipped"]:
        console.print(
            f"[warning]Files skipped (unparsable): {summary['files_skipped']}[/warning]",
            highlight=False,
        )
