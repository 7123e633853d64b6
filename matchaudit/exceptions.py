"""Custom exceptions for matchaudit.

Contains exception classes for specific failure modes that require
explicit handling rather than generic error propagation.
"""


class SourceParseError(Exception):
    """Raised when a Python source file cannot be turned into a syntax tree.

    Attributes:
        file_path: File that failed to parse
        line: Line reported by the parser, if any
        reason: Parser message
    """

    def __init__(self, file_path: str, line: int | None, reason: str):
        location = f"{file_path}:{line}" if line else file_path
        super().__init__(f"Cannot parse {location}: {reason}")
        self.file_path = file_path
        self.line = line
        self.reason = reason


class ConfigError(Exception):
    """Raised when a configuration value cannot be used for analysis."""
