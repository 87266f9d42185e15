"""Configuration loading with layered overrides."""

from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:
    from muninbox.core.context import Context


class ConfigError(Exception):
    """Error loading or validating configuration."""

    pass


DEFAULTS: dict[str, Any] = {
    "file_nr_path": "/proc/sys/fs/file-nr",
    "warning_ratio": 0.92,
    "critical_ratio": 0.98,
    "log_dir": None,
}

SYSTEM_CONFIG = "/etc/muninbox/config.yaml"
USER_CONFIG = ".config/muninbox/config.yaml"

# Environment overrides, as set by munin-node from plugin-conf.d env.* lines
ENV_PREFIX = "MUNINBOX_"

RATIO_KEYS = ("warning_ratio", "critical_ratio")

# Keys where null means "disabled"
NULLABLE_KEYS = ("log_dir",)


def load_config_file(context: "Context", path: str) -> dict[str, Any]:
    """
    Load a YAML config file if it exists.

    Args:
        context: Execution context
        path: Path to the YAML file

    Returns:
        Parsed mapping, or an empty dict if the file is missing

    Raises:
        ConfigError: If the file is not valid YAML or not a mapping
    """
    try:
        content = context.read_file(path)
    except FileNotFoundError:
        return {}
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config {path}: {e}")

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config {path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a YAML mapping: {path}")

    return data


def _coerce(key: str, value: Any) -> Any:
    """Convert a raw config value to the type of its default."""
    if value is None:
        if key in NULLABLE_KEYS:
            return None
        raise ConfigError(f"{key} must not be empty")

    if key in RATIO_KEYS:
        try:
            ratio = float(value)
        except (TypeError, ValueError):
            raise ConfigError(f"{key} must be a number, got {value!r}")
        if not 0 <= ratio <= 1:
            raise ConfigError(f"{key} must be between 0 and 1, got {ratio}")
        return ratio

    return str(value)


def load_config(context: "Context") -> dict[str, Any]:
    """
    Load configuration with defaults -> system -> user -> env precedence.

    Args:
        context: Execution context

    Returns:
        Config dict containing every key of DEFAULTS

    Raises:
        ConfigError: If a layer is malformed or a value is invalid
    """
    config = dict(DEFAULTS)

    # System config, relocatable through MUNINBOX_CONFIG
    system_path = context.get_env(f"{ENV_PREFIX}CONFIG") or SYSTEM_CONFIG
    layers = [system_path]

    # User config
    home = context.get_env("HOME")
    if home:
        layers.append(f"{home.rstrip('/')}/{USER_CONFIG}")

    for path in layers:
        for key, value in load_config_file(context, path).items():
            if key in DEFAULTS:
                config[key] = value

    # Environment
    for key in DEFAULTS:
        value = context.get_env(f"{ENV_PREFIX}{key.upper()}")
        if value is not None and value != "":
            config[key] = value

    return {key: _coerce(key, value) for key, value in config.items()}
