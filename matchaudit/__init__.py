"""matchaudit - flags if/elif chains that should be match statements."""

__version__ = "1.0.0"
