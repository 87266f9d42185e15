"""Core muninbox functionality."""

from muninbox.core.config import ConfigError, load_config
from muninbox.core.context import Context
from muninbox.core.discovery import Plugin, discover_plugins, find_plugin
from muninbox.core.metadata import MetadataError, parse_metadata, validate_metadata
from muninbox.core.mode import Mode
from muninbox.core.output import Output
from muninbox.core.runner import PluginResult, run_plugin

__all__ = [
    "ConfigError",
    "Context",
    "MetadataError",
    "Mode",
    "Output",
    "Plugin",
    "PluginResult",
    "discover_plugins",
    "find_plugin",
    "load_config",
    "parse_metadata",
    "run_plugin",
    "validate_metadata",
]
