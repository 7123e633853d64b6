"""Turns unexpected failures inside a command into a short CLI error."""

import traceback
from collections.abc import Callable
from datetime import datetime
from functools import wraps
from typing import Any

import click

from matchaudit.utils.logging import logger

from .constants import ERROR_LOG_FILE
from .exit_codes import ExitCodes

RULE = "=" * 80


def _append_error_log(command: str, error: Exception) -> None:
    ERROR_LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
    with open(ERROR_LOG_FILE, "a", encoding="utf-8") as f:
        f.write(f"\n{RULE}\n")
        f.write(f"[{datetime.now().isoformat()}] Error in command: {command}\n")
        f.write(f"{RULE}\n")
        f.write(f"{type(error).__name__}: {error}\n\n")
        f.write(traceback.format_exc())
        f.write(f"{RULE}\n\n")


def handle_exceptions(func: Callable[..., Any]) -> Callable[..., Any]:
    """Log unexpected exceptions and re-raise them as ``click.ClickException``.

    The full traceback is appended to ``.pf/error.log`` and the command
    exits with ``ExitCodes.ERROR``, so a crash is never mistaken for the
    findings exit code. click's own exits and aborts pass through.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except (click.ClickException, click.exceptions.Exit, click.Abort):
            raise
        except Exception as e:
            logger.opt(exception=True).error(
                "Command '{cmd}' failed: {err}",
                cmd=func.__name__,
                err=str(e),
            )
            _append_error_log(func.__name__, e)

            error = click.ClickException(
                f"{type(e).__name__}: {e}\n\nFull traceback logged to: {ERROR_LOG_FILE}"
            )
            error.exit_code = ExitCodes.ERROR
            raise error from e

    return wrapper
