"""Runtime configuration for featcheck - centralized configuration management."""

import copy
import json
import os
from pathlib import Path
from typing import Any

from featcheck.utils.constants import (
    BACKEND_NATIVE,
    BUILD_DIR,
    CONFIG_FILE,
    ENV_PREFIX,
    FEATURES_TABLE,
    FORMAT_TEXT,
    MANIFEST_NAME,
    SOURCE_EXTENSION,
)
from featcheck.utils.logging import logger

DEFAULTS = {
    "scan": {
        "backend": BACKEND_NATIVE,
        "source_extension": SOURCE_EXTENSION,
        "manifest_name": MANIFEST_NAME,
        "features_table": FEATURES_TABLE,
        "build_dir": BUILD_DIR,
        "rg_binary": "rg",
        "excluded_paths": [],
        "excluded_features": [],
    },
    "timeouts": {
        "rg_scan": 300,
    },
    "report": {
        "format": FORMAT_TEXT,
    },
}


def load_runtime_config(root: str = ".") -> dict[str, Any]:
    """
    Load runtime configuration from .featcheck/config.json and environment variables.

    Config priority (highest to lowest):
    1. Environment variables (FEATCHECK_* prefixed)
    2. .featcheck/config.json file under the scan root
    3. Built-in defaults

    Args:
        root: Root directory to look for config file. A file root is
              looked up from its parent directory.

    Returns:
        Configuration dictionary with merged values
    """
    cfg = copy.deepcopy(DEFAULTS)

    base = Path(root)
    if base.is_file():
        base = base.parent
    path = base / CONFIG_FILE
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
                                logger.warning(f"Ignoring config key {section}.{key} in {path}")
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load config file from {path}: {e}")
        logger.info("Continuing with default configuration")

    for section in cfg:
        for key in cfg[section]:
            env_var = f"{ENV_PREFIX}_{section.upper()}_{key.upper()}"
            if env_var in os.environ:
                value = os.environ[env_var]
                try:
                    default_value = cfg[section][key]
                    if isinstance(default_value, int):
                        cfg[section][key] = int(value)
                    elif isinstance(default_value, list):
                        cfg[section][key] = [v.strip() for v in value.split(",") if v.strip()]
                    else:
                        cfg[section][key] = value
                except ValueError as e:
                    logger.warning(
                        f"Invalid value for environment variable {env_var}: '{value}' - {e}"
                    )
                    logger.info(f"Using default value: {cfg[section][key]}")

    return cfg
