"""Centralized exit codes for the matchaudit CLI."""


class ExitCodes:
    """Process exit codes shared by all commands."""

    SUCCESS = 0

    # Only with --fail-on-findings
    FINDINGS = 1

    # Unexpected failure; traceback in the error log
    ERROR = 2

    @classmethod
    def get_description(cls, code: int) -> str:
        """Get human-readable description for an exit code."""
        descriptions = {
            cls.SUCCESS: "Success - No issues found",
            cls.FINDINGS: "Conditional chains that should be match statements were found",
            cls.ERROR: "Analysis failed",
        }
        return descriptions.get(code, f"Unknown exit code: {code}")
