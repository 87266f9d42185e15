"""In-process plugin execution."""

from dataclasses import dataclass
from pathlib import Path

from muninbox.core.config import ConfigError, load_config
from muninbox.core.context import Context
from muninbox.core.discovery import Plugin
from muninbox.core.logging import Invocation, record_invocation
from muninbox.core.mode import Mode
from muninbox.core.output import Output


@dataclass
class PluginResult:
    """Result of running a plugin."""

    plugin_name: str
    mode: Mode
    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        """True if plugin completed successfully."""
        return self.returncode == 0



def run_plugin(
    plugin: Plugin,
    args: list[str] | None = None,
    context: Context | None = None,
) -> PluginResult:
    """
    Run a plugin and capture its output.

    Args:
        plugin: Plugin to run
        args: Arguments to pass to the plugin
        context: Optional execution context (for testing)

    Returns:
        PluginResult with output and exit code
    """
    args = args or []
    context = context or Context()
    mode = Mode.from_args(args)

    module = plugin.load()
    output = Output()
    returncode = module.run(args, output, context)

    # A broken config is reported by the plugin itself; it only disables logging here
    try:
        log_dir = load_config(context)["log_dir"]
    except ConfigError:
        log_dir = None

    stderr = output.error_text()
    if log_dir:
        try:
            record_invocation(
                Path(log_dir),
                Invocation(
                    plugin=plugin.name,
                    mode=mode,
                    returncode=returncode,
                    summary=output.summary,
                    errors=output.errors,
                ),
            )
        except OSError as e:
            stderr += f"cannot write log to {log_dir}: {e}\n"

    return PluginResult(
        plugin_name=plugin.name,
        mode=mode,
        returncode=returncode,
        stdout=output.to_text(),
        stderr=stderr,
    )
