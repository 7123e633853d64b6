"""Command-line subcommands for matchaudit."""
