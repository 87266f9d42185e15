"""JSONL log of plugin invocations."""

import json
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

from muninbox.core.mode import Mode


def get_log_path(plugin_name: str, base_path: Path) -> Path:
    """
    Get the log file path for a plugin.

    Args:
        plugin_name: Name of the plugin
        base_path: Base directory for logs

    Returns:
        Path to the log file: {base}/{date}/{plugin}.jsonl
    """
    today = date.today().isoformat()
    return Path(base_path) / today / f"{plugin_name}.jsonl"


@dataclass
class Invocation:
    """One run of a plugin as munin-node saw it."""

    plugin: str
    mode: Mode
    returncode: int
    summary: str | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return self.returncode != 0 or bool(self.errors)

    def to_entry(self) -> dict[str, Any]:
        """Log entry; failures carry their diagnostics, successes their summary."""
        entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": "error" if self.failed else "info",
            "plugin": self.plugin,
            "mode": self.mode.value,
            "returncode": self.returncode,
        }
        if self.failed:
            entry["errors"] = self.errors
        else:
            entry["summary"] = self.summary
        return entry


def record_invocation(base_path: Path, invocation: Invocation) -> Path:
    """
    Append an invocation to the plugin's log for today.

    Nothing is written to stdout, which belongs to the plugin protocol.

    Returns:
        Path of the log file written

    Raises:
        OSError: If the log directory or file cannot be written
    """
    log_path = get_log_path(invocation.plugin, base_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    with open(log_path, "a") as f:
        f.write(json.dumps(invocation.to_entry()) + "\n")
    return log_path


def query_logs(
    base_path: Path,
    plugin: str,
    log_date: date | None = None,
    mode: Mode | None = None,
    errors_only: bool = False,
    limit: int | None = None,
) -> list[dict[str, Any]]:
    """
    Query logged invocations.

    Args:
        base_path: Base directory for logs
        plugin: Plugin name to query
        log_date: Date to query (default: today)
        mode: Only invocations in this mode
        errors_only: Only failed invocations
        limit: Maximum number of entries to return

    Returns:
        List of log entries matching criteria
    """
    if log_date is None:
        log_date = date.today()

    log_file = Path(base_path) / log_date.isoformat() / f"{plugin}.jsonl"

    if not log_file.exists():
        return []

    results = []

    with open(log_file) as f:
        for line in f:
            if not line.strip():
                continue
            try:
                entry = json.loads(line)
            except json.JSONDecodeError:
                continue
            if mode is not None and entry.get("mode") != mode.value:
                continue
            if errors_only and entry.get("level") != "error":
                continue
            results.append(entry)
            if limit and len(results) >= limit:
                break

    return results
