from __future__ import annotations

"""
Configuration Domain Management.

Handles persistent storage of user preferences using JSON in the user
data directory, with default fallback when the file is missing or broken.
"""

import json
import logging
import os
from typing import Any, Dict

from icounter.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE = os.path.join(get_user_data_dir(), "config.json")
CURRENT_CONFIG_VERSION = "1.0.0"


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.
    This dictionary drives the behavior of the counting pipeline.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        "root_path": os.getcwd(),

        # Counting
        "show_hidden": False,
        "max_workers": 0,

        # Display
        "depth": 0,
        "show_percent": False,
        "ignore_colors": False,
    }

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """
    Load the stored configuration, merged over the defaults.

    Returns:
        Dict[str, Any]: The loaded configuration or defaults on failure.
    """
    config = get_default_config()

    if not os.path.exists(CONFIG_FILE):
        logger.debug("Config file not found. Returning defaults.")
        return config

    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return config

    # The root path is a per-run input, never persisted
    settings = data.get("settings", {})
    if isinstance(settings, dict):
        config.update({k: v for k, v in settings.items() if k in config and k != "root_path"})
    return config


def save_config(config: Dict[str, Any]) -> None:
    """
    Persist user preferences to disk.

    Args:
        config: The configuration dictionary to save.
    """
    settings = {k: v for k, v in config.items() if k != "root_path"}
    payload = {"version": CURRENT_CONFIG_VERSION, "settings": settings}
    try:
        os.makedirs(os.path.dirname(CONFIG_FILE), exist_ok=True)
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
        logger.debug(f"Configuration saved to {CONFIG_FILE}")
    except OSError as e:
        logger.error(f"Failed to save config: {e}")
