"""
burncalc configuration.

- Pydantic-based settings (environment variables, .env files)
- Optional YAML preset seeding the session and alert set
"""

from burncalc.config.loader import ConfigLoader, get_config_path, load_config
from burncalc.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "ConfigLoader",
    "load_config",
    "get_config_path",
]
