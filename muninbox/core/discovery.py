"""Plugin discovery and loading."""

import importlib
import importlib.util
from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType

from muninbox.core.metadata import MetadataError, parse_metadata

# Plugins bundled with the package
PLUGINS_DIR = Path(__file__).resolve().parent.parent / "plugins"


@dataclass
class Plugin:
    """Represents a discovered muninbox plugin."""

    name: str
    path: Path
    category: str
    brief: str
    capabilities: list[str] = field(default_factory=list)

    @classmethod
    def from_path(cls, path: Path) -> "Plugin | None":
        """
        Create Plugin from file path.

        Args:
            path: Path to plugin module

        Returns:
            Plugin instance, or None if no valid metadata
        """
        try:
            content = path.read_text()
        except OSError:
            return None

        try:
            metadata = parse_metadata(content)
        except MetadataError:
            return None

        if metadata is None:
            return None

        return cls(
            name=path.stem,
            path=path,
            category=str(metadata["category"]),
            brief=str(metadata["brief"]),
            capabilities=list(metadata.get("capabilities") or []),
        )

    def supports(self, capability: str) -> bool:
        """True if the plugin declares the capability."""
        return capability in self.capabilities

    def load(self) -> ModuleType:
        """Import the plugin module and return it."""
        if self.path.resolve().parent == PLUGINS_DIR:
            return importlib.import_module(f"muninbox.plugins.{self.name}")

        spec = importlib.util.spec_from_file_location(
            f"muninbox.plugins.{self.name}", self.path
        )
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot load plugin from {self.path}")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module


def discover_plugins(directory: Path | None = None) -> list[Plugin]:
    """
    Discover all plugins in directory.

    Args:
        directory: Directory to search (default: bundled plugins)

    Returns:
        List of discovered Plugin objects, sorted by name
    """
    directory = directory or PLUGINS_DIR
    plugins = []

    for path in sorted(directory.glob("*.py")):
        if path.name.startswith("_") or not path.is_file():
            continue
        plugin = Plugin.from_path(path)
        if plugin is not None:
            plugins.append(plugin)

    return plugins


def find_plugin(name: str, directory: Path | None = None) -> Plugin | None:
    """Find a plugin by name, with or without the .py suffix."""
    for plugin in discover_plugins(directory):
        if plugin.name == name or f"{plugin.name}.py" == name:
            return plugin
    return None
