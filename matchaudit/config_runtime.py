"""Runtime configuration for matchaudit - centralized configuration management."""

import copy
import json
import os
from pathlib import Path
from typing import Any

from matchaudit.exceptions import ConfigError
from matchaudit.utils.constants import DEFAULT_MAX_FILE_SIZE, ENV_PREFIX
from matchaudit.utils.logging import logger

DEFAULTS = {
    "paths": {
        "raw_report": "./.pf/raw/match_case.json",
    },
    "limits": {
        "max_file_size": DEFAULT_MAX_FILE_SIZE,
        "max_variable_usage": 2,
    },
    "report": {
        "max_rows": 50,
        "snippet_context_lines": 2,
    },
    "scan": {
        "exclude": [],
    },
}


def load_runtime_config(root: str = ".") -> dict[str, Any]:
    """
    Load runtime configuration from .pf/config.json and environment variables.

    Config priority (highest to lowest):
    1. Environment variables (MATCHAUDIT_<SECTION>_<KEY>)
    2. .pf/config.json file
    3. Built-in defaults

    Args:
        root: Root directory to look for config file

    Returns:
        Configuration dictionary with merged values

    Raises:
        ConfigError: If the merged usage threshold is below 1
    """
    cfg = copy.deepcopy(DEFAULTS)

    path = Path(root) / ".pf" / "config.json"
    try:
        if path.exists():
            with open(path, encoding="utf-8") as f:
                user = json.load(f)

            if isinstance(user, dict):
                for section in cfg:
                    if section in user and isinstance(user[section], dict):
                        for key, value in user[section].items():
                            if key in cfg[section] and isinstance(value, type(cfg[section][key])):
                                cfg[section][key] = value
            else:
                logger.warning("Ignoring {path}: top-level value is not an object", path=path)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Could not load config file from {path}: {err}", path=path, err=e)
        logger.info("Continuing with default configuration")

    for section in cfg:
        for key in cfg[section]:
            env_var = f"{ENV_PREFIX}_{section.upper()}_{key.upper()}"
            if env_var in os.environ:
                value = os.environ[env_var]
                try:
                    default_value = cfg[section][key]
                    if isinstance(default_value, bool):
                        cfg[section][key] = value.lower() in ("1", "true", "yes")
                    elif isinstance(default_value, int):
                        cfg[section][key] = int(value)
                    elif isinstance(default_value, float):
                        cfg[section][key] = float(value)
                    elif isinstance(default_value, list):
                        cfg[section][key] = [v.strip() for v in value.split(",") if v.strip()]
                    else:
                        cfg[section][key] = value
                except (ValueError, AttributeError) as e:
                    logger.warning(
                        "Invalid value for environment variable {var}: '{value}' - {err}",
                        var=env_var,
                        value=value,
                        err=e,
                    )
                    logger.info("Using default value: {default}", default=cfg[section][key])

    if cfg["limits"]["max_variable_usage"] < 1:
        raise ConfigError(
            f"limits.max_variable_usage must be at least 1, got {cfg['limits']['max_variable_usage']}"
        )

    return cfg
