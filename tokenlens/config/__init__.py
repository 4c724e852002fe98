"""Config package - configuration loading and view defaults."""

from .loader import load_config, get_config_path, build_view_options, DEFAULT_CONFIG

__all__ = ["load_config", "get_config_path", "build_view_options", "DEFAULT_CONFIG"]
