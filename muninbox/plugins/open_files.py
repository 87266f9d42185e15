#!/usr/bin/env python3
# muninbox:
#   category: system
#   capabilities: [autoconf]
#   brief: Linux open file table usage
#
#%# family=auto
#%# capabilities=autoconf

"""
Report Linux open file table usage.

Reads /proc/sys/fs/file-nr, which holds three counters:

    allocated  free  max

``free`` is a legacy field and reads 0 on current kernels. The plugin
graphs the number of handles in use against the kernel limit and warns
at 92% / 98% of that limit.

Exit codes:
    0: Report written (autoconf always exits 0)
    1: Counter file missing, unreadable or malformed
"""

import re
from dataclasses import dataclass

from muninbox.core.config import ConfigError, load_config
from muninbox.core.context import Context
from muninbox.core.mode import Mode
from muninbox.core.output import Output

FILE_NR = "/proc/sys/fs/file-nr"

# What fscanf("%d") accepts: optional sign, ASCII digits
INTEGER_PATTERN = re.compile(r"^[+-]?[0-9]+$")

WARNING_RATIO = 0.92
CRITICAL_RATIO = 0.98

GRAPH = [
    "graph_title File table usage",
    "graph_args --base 1000 -l 0",
    "graph_vlabel number of open files",
    "graph_category system",
    "graph_info This graph monitors the Linux open files table.",
    "used.label open files",
    "used.info The number of currently open files.",
    "max.label max open files",
    f"max.info The maximum supported number of open files. Tune by modifying {FILE_NR}.",
]


class FileNrError(Exception):
    """The counter file could not be turned into a report."""

    pass


class ResourceUnavailable(FileNrError):
    """The counter file cannot be opened."""

    pass


class MalformedData(FileNrError):
    """The counter file lacks the expected integer fields."""

    pass


@dataclass(frozen=True)
class FileNr:
    """Counters from /proc/sys/fs/file-nr."""

    allocated: int
    free: int
    max: int

    @property
    def used(self) -> int:
        # free above allocated cannot describe handles; ignore it
        if self.free > self.allocated:
            return self.allocated
        return self.allocated - self.free


def read_counter_file(context: Context, path: str = FILE_NR) -> str:
    """Read the counter file.

    Raises:
        ResourceUnavailable: If the file cannot be opened
        MalformedData: If the file is not text
    """
    try:
        return context.read_file(path)
    except UnicodeDecodeError:
        raise MalformedData(f"cannot read from {path}")
    except OSError:
        raise ResourceUnavailable(f"cannot open {path}")


def parse_file_nr(content: str, path: str = FILE_NR) -> FileNr:
    """Parse file-nr content.

    Format: allocated  free  max
    Example: 3200  0  9223372036854775807

    Only the three leading fields are read; anything after them is ignored.
    """
    fields = content.split()[:3]
    if len(fields) < 3 or not all(INTEGER_PATTERN.match(field) for field in fields):
        raise MalformedData(f"cannot read from {path}")

    return FileNr(*(int(field) for field in fields))


def compute_thresholds(
    file_max: int,
    warning_ratio: float = WARNING_RATIO,
    critical_ratio: float = CRITICAL_RATIO,
) -> tuple[int, int]:
    """Return (warning, critical), truncated toward zero."""
    return int(file_max * warning_ratio), int(file_max * critical_ratio)


def render_config(
    file_max: int,
    warning_ratio: float = WARNING_RATIO,
    critical_ratio: float = CRITICAL_RATIO,
) -> list[str]:
    """Graph definition followed by thresholds derived from the limit."""
    warning, critical = compute_thresholds(file_max, warning_ratio, critical_ratio)
    return GRAPH + [
        f"used.warning {warning}",
        f"used.critical {critical}",
    ]


def render_fetch(file_nr: FileNr) -> list[str]:
    """Current usage and limit."""
    return [
        f"used.value {file_nr.used}",
        f"max.value {file_nr.max}",
    ]


def autoconf(output: Output, context: Context, path: str = FILE_NR) -> int:
    """Answer yes if the counter file is readable, without opening it."""
    if context.file_readable(path):
        return output.yes()
    return output.no(f"{path} not readable")


def run(args: list[str], output: Output, context: Context) -> int:
    """
    Main entry point.

    Args:
        args: Command-line arguments
        output: Output helper
        context: Execution context

    Returns:
        0 = report written, 1 = error
    """
    mode = Mode.from_args(args)

    try:
        config = load_config(context)
    except ConfigError as e:
        if mode is Mode.AUTOCONF:
            return output.no(str(e))
        output.error(str(e))
        return 1

    path = config["file_nr_path"]

    if mode is Mode.AUTOCONF:
        return autoconf(output, context, path)

    try:
        file_nr = parse_file_nr(read_counter_file(context, path), path)
    except FileNrError as e:
        output.error(str(e))
        return 1

    if mode is Mode.CONFIG:
        output.emit(
            *render_config(
                file_nr.max, config["warning_ratio"], config["critical_ratio"]
            )
        )
    else:
        output.emit(*render_fetch(file_nr))

    output.set_summary(f"used={file_nr.used} max={file_nr.max}")
    return 0


if __name__ == "__main__":
    import sys

    output = Output()
    code = run(sys.argv[1:], output, Context())
    output.render()
    sys.exit(code)
