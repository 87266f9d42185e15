"""Command-line interface for muninbox."""

import argparse
import json
import sys
from datetime import date
from pathlib import Path

from muninbox import __version__
from muninbox.core import (
    ConfigError,
    Context,
    Mode,
    discover_plugins,
    find_plugin,
    load_config,
    parse_metadata,
    run_plugin,
    validate_metadata,
)
from muninbox.core.logging import query_logs


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="muninbox",
        description="Multi-call Munin plugins",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"muninbox {__version__}",
    )
    parser.add_argument(
        "--plugins-dir",
        type=Path,
        default=None,
        help="Directory containing plugins (default: bundled plugins)",
    )
    parser.add_argument(
        "--format",
        choices=["plain", "json"],
        default="plain",
        help="Output format (default: plain)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # list command
    list_parser = subparsers.add_parser("list", help="List available plugins")
    list_parser.add_argument(
        "--capability",
        "-c",
        help="Only list plugins with this capability (e.g., autoconf)",
    )

    # show command
    show_parser = subparsers.add_parser("show", help="Show plugin details")
    show_parser.add_argument("plugin", help="Plugin name to show")

    # run command
    run_parser = subparsers.add_parser("run", help="Run a plugin")
    run_parser.add_argument("plugin", help="Plugin name to run")
    run_parser.add_argument(
        "args",
        nargs="*",
        help="Arguments to pass to the plugin (config, autoconf or none)",
    )

    # logs command
    logs_parser = subparsers.add_parser("logs", help="Show logged plugin invocations")
    logs_parser.add_argument("plugin", help="Plugin name")
    logs_parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Day to show, YYYY-MM-DD (default: today)",
    )
    logs_parser.add_argument(
        "--mode",
        choices=[mode.value for mode in Mode],
        default=None,
        help="Only show invocations in this mode (config, autoconf, fetch)",
    )
    logs_parser.add_argument(
        "--errors",
        action="store_true",
        help="Only show failed invocations",
    )
    logs_parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of entries to show",
    )

    return parser


def cmd_list(args: argparse.Namespace) -> int:
    """List available plugins."""
    plugins = discover_plugins(args.plugins_dir)
    if args.capability:
        plugins = [p for p in plugins if p.supports(args.capability)]

    if not plugins:
        print("No plugins found.")
        return 0

    for plugin in plugins:
        if args.format == "json":
            print(json.dumps({
                "name": plugin.name,
                "category": plugin.category,
                "capabilities": plugin.capabilities,
                "brief": plugin.brief,
            }))
        else:
            print(f"{plugin.name:30} {plugin.brief}")

    return 0


def cmd_show(args: argparse.Namespace) -> int:
    """Show plugin details."""
    plugin = find_plugin(args.plugin, args.plugins_dir)
    if plugin is None:
        print(f"Plugin not found: {args.plugin}", file=sys.stderr)
        return 2

    warnings = validate_metadata(parse_metadata(plugin.path.read_text()) or {})

    if args.format == "json":
        print(json.dumps({
            "name": plugin.name,
            "path": str(plugin.path),
            "category": plugin.category,
            "capabilities": plugin.capabilities,
            "brief": plugin.brief,
            "warnings": warnings,
        }, indent=2))
    else:
        print(f"Name:         {plugin.name}")
        print(f"Path:         {plugin.path}")
        print(f"Category:     {plugin.category}")
        print(f"Capabilities: {', '.join(plugin.capabilities) or '(none)'}")
        print(f"Brief:        {plugin.brief}")
        for warning in warnings:
            print(f"  WARNING: {warning}")

    return 0


def run_by_name(name: str, plugin_args: list[str], plugins_dir: Path | None = None) -> int:
    """Run a plugin and relay its output and exit status."""
    plugin = find_plugin(name, plugins_dir)
    if plugin is None:
        print(f"Plugin not found: {name}", file=sys.stderr)
        return 2

    result = run_plugin(plugin, args=plugin_args)

    print(result.stdout, end="")
    if result.stderr:
        print(result.stderr, file=sys.stderr, end="")

    return result.returncode


def cmd_run(args: argparse.Namespace) -> int:
    """Run a plugin."""
    return run_by_name(args.plugin, args.args, args.plugins_dir)


def cmd_logs(args: argparse.Namespace) -> int:
    """Show logged plugin invocations."""
    try:
        log_dir = load_config(Context())["log_dir"]
    except ConfigError as e:
        print(str(e), file=sys.stderr)
        return 1

    if not log_dir:
        print("Logging is disabled (set log_dir or MUNINBOX_LOG_DIR)", file=sys.stderr)
        return 1

    entries = query_logs(
        Path(log_dir),
        args.plugin,
        log_date=args.date,
        mode=Mode(args.mode) if args.mode else None,
        errors_only=args.errors,
        limit=args.limit,
    )

    for entry in entries:
        if args.format == "json":
            print(json.dumps(entry))
        else:
            detail = entry.get("summary") or "; ".join(entry.get("errors", []))
            print(
                f"{entry.get('timestamp', '?'):32} {entry.get('level', '?').upper():7} "
                f"{entry.get('mode', '?'):8} rc={entry.get('returncode', '?')} {detail}"
            )

    return 0


def main(argv: list[str] | None = None, prog: str | None = None) -> int:
    """
    Main entry point.

    When invoked under a plugin's name (a symlink in /etc/munin/plugins or
    the plugin's console script), the arguments go straight to that plugin.
    """
    if argv is None:
        argv = sys.argv[1:]
    if prog is None:
        prog = Path(sys.argv[0]).name

    if find_plugin(prog) is not None:
        return run_by_name(prog, argv)

    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "list": cmd_list,
        "show": cmd_show,
        "run": cmd_run,
        "logs": cmd_logs,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
