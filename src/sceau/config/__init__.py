"""
Configuration module for Sceau.
"""

from sceau.config.settings import (
    KNOWN_NETWORKS,
    Settings,
    get_settings,
    load_config,
    reset_settings,
)

__all__ = [
    "KNOWN_NETWORKS",
    "Settings",
    "get_settings",
    "load_config",
    "reset_settings",
]
