"""List the rules matchaudit knows about."""

from pathlib import Path

import click
from rich.table import Table

from matchaudit.rules.orchestrator import RulesOrchestrator
from matchaudit.ui import console
from matchaudit.utils.error_handler import handle_exceptions


@click.command("rules")
@click.option("--project-path", default=".", help="Root directory holding .pf/config.json")
@handle_exceptions
def rules(project_path):
    """Show discovered rules with their keys and messages."""
    orchestrator = RulesOrchestrator(Path(project_path).resolve())

    table = Table(title="Rules")
    table.add_column("Name", style="cmd", no_wrap=True)
    table.add_column("Key", no_wrap=True)
    table.add_column("Category", no_wrap=True)
    table.add_column("Message")

    for rule in orchestrator.iter_rules():
        metadata = rule.metadata
        key = metadata.rule_key if metadata and metadata.rule_key else "-"
        if metadata and metadata.deprecated_keys:
            key += f" (was {', '.join(metadata.deprecated_keys)})"
        table.add_row(rule.name, key, rule.category, metadata.message if metadata else "")

    console.print(table)

    stats = orchestrator.get_rule_stats()
    console.print(f"Total rules: {stats['total_rules']}", highlight=False)
