"""Centralized constants for matchaudit utils package.

This module provides a single source of truth for paths, directories,
and configuration values used across utility modules.
"""

from pathlib import Path

# ============================================================================
# OUTPUT DIRECTORIES
# ============================================================================

# Primary output directory for all matchaudit artifacts
PF_DIR = Path("./.pf")

# Log files
ERROR_LOG_FILE = PF_DIR / "error.log"


# ============================================================================
# FILE PROCESSING LIMITS
# ============================================================================

# Maximum file size to analyze (default: 2MB)
DEFAULT_MAX_FILE_SIZE = 2 * 1024 * 1024

# Directories never descended into when expanding a path
DEFAULT_EXCLUDED_DIRS = frozenset({
    ".git", ".hg", ".svn", ".pf", ".venv", "venv", "env",
    "__pycache__", "node_modules", "build", "dist", ".tox", ".mypy_cache",
})

# ============================================================================
# ENVIRONMENT VARIABLES
# ============================================================================

ENV_PREFIX = "MATCHAUDIT"
ENV_LOG_LEVEL = "MATCHAUDIT_LOG_LEVEL"
ENV_LOG_JSON = "MATCHAUDIT_LOG_JSON"
ENV_LOG_FILE = "MATCHAUDIT_LOG_FILE"
ENV_REQUEST_ID = "MATCHAUDIT_REQUEST_ID"
