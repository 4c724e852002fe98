"""
Configuration loading for TokenLens.

Handles loading configuration from ~/.tokenlens/config.json with sensible defaults.
"""

import copy
import json
from pathlib import Path
from typing import Any, Dict, Optional

from tokenlens.models.entities import DateRange, ViewOptions

DEFAULT_CONFIG: Dict[str, Any] = {
    # Reference zone for every hour/day bucket
    "timezone": "UTC",

    # Default view modes
    "model_view": "individual",
    "granularity": "daily",

    # Display options
    "display": {
        "color_enabled": True,
        "table_max_width": 120
    },

    # Web API
    "server": {
        "host": "127.0.0.1",
        "port": 3001,
        "max_upload_mb": 100
    }
}


def get_config_path() -> Path:
    """Get path to config file."""
    return Path.home() / ".tokenlens" / "config.json"


def load_config() -> Dict[str, Any]:
    """
    Load configuration from file, merging with defaults.

    Returns a complete configuration with all default values filled in.
    User config overrides defaults where specified.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    config_path = get_config_path()

    if config_path.exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                user_config = json.load(f)

            # Shallow merge nested sections
            for key in ['display', 'server']:
                if key in user_config and isinstance(user_config[key], dict):
                    config[key].update(user_config[key])

            # Direct override for simple values
            for key in ['timezone', 'model_view', 'granularity']:
                if key in user_config:
                    config[key] = user_config[key]

        except json.JSONDecodeError as e:
            print(f"Warning: Could not parse config file: {e}")
        except OSError as e:
            print(f"Warning: Error loading config: {e}")

    return config


def get_max_upload_bytes(config: Dict[str, Any]) -> int:
    """Upload size limit in bytes."""
    return int(config["server"]["max_upload_mb"]) * 1024 * 1024


def build_view_options(
    config: Dict[str, Any],
    model_view: Optional[str] = None,
    granularity: Optional[str] = None,
    timezone: Optional[str] = None,
    date_range: Optional[DateRange] = None,
) -> ViewOptions:
    """
    Build ViewOptions from config defaults plus explicit overrides.

    Raises:
        ValueError: if a view mode is not recognized
    """
    return ViewOptions(
        model_view=model_view or config.get("model_view", "individual"),
        granularity=granularity or config.get("granularity", "daily"),
        timezone=timezone or config.get("timezone", "UTC"),
        date_range=date_range or DateRange(),
    )
