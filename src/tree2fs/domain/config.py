from __future__ import annotations

"""
Configuration Domain Management.

Provides the default session configuration and its JSON persistence in the
user data directory. Saved values are merged over defaults so that new keys
always exist.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from tree2fs.domain.constants import CURRENT_CONFIG_VERSION, DEFAULT_INDENT_WIDTH
from tree2fs.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"

# Keys persisted between runs; tree_file is per-invocation only.
PERSISTED_KEYS = ("base_dir", "indent_width", "dry_run", "verbose", "skip_root", "strict_roots")

# -----------------------------------------------------------------------------
# DEFAULTS
# -----------------------------------------------------------------------------

def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    skip_root is tri-state: None lets the engine decide from the parsed
    tree (skip when there is a single top-level entry).

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        "tree_file": "",
        "base_dir": os.getcwd(),
        "indent_width": DEFAULT_INDENT_WIDTH,
        "dry_run": False,
        "verbose": False,
        "skip_root": None,
        "strict_roots": False,
    }


def get_config_path() -> str:
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)

# -----------------------------------------------------------------------------
# PERSISTENCE
# -----------------------------------------------------------------------------

def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the saved configuration merged over defaults.

    A missing or corrupted file is not an error: defaults are returned.

    Args:
        path: Config file location; defaults to the user data directory.

    Returns:
        Dict[str, Any]: The effective base configuration.
    """
    config = get_default_config()
    path = path or get_config_path()

    if not os.path.exists(path):
        logger.debug("Config file not found. Returning defaults.")
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config from '{path}': {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Using defaults.")
        return config

    saved = data.get("settings", {})
    if isinstance(saved, dict):
        config.update({k: v for k, v in saved.items() if k in PERSISTED_KEYS})
    return config


def save_config(config: Dict[str, Any], path: Optional[str] = None) -> str:
    """
    Persist the reusable part of a configuration to disk.

    Args:
        config: Configuration to save (tree_file is not persisted).
        path: Target file; defaults to the user data directory.

    Returns:
        str: The path written.

    Raises:
        OSError: The file could not be written.
    """
    path = path or get_config_path()
    payload = {
        "version": CURRENT_CONFIG_VERSION,
        "settings": {k: config[k] for k in PERSISTED_KEYS if k in config},
    }

    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)

    logger.info(f"Configuration saved to {path}")
    return path
