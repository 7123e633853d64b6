"""matchaudit CLI - Main entry point and command registration hub."""
# ruff: noqa: E402 - Intentional lazy loading: commands imported after cli group definition

import click

from matchaudit import __version__


@click.group()
@click.version_option(version=__version__, prog_name="matchaudit")
@click.help_option("-h", "--help")
def cli():
    """matchaudit - find if/elif chains that should be match statements

    \b
    QUICK START:
      matchaudit check src/          # Analyze a directory
      matchaudit check app.py --format json
      matchaudit rules               # List available rules

    \b
    For detailed options: matchaudit <command> --help"""
    pass


from matchaudit.commands.check import check
from matchaudit.commands.rules import rules

cli.add_command(check)
cli.add_command(rules)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == "__main__":
    main()
