"""Buffered plugin-protocol output."""

import sys
from typing import TextIO


class Output:
    """
    Helper for Munin plugin output.

    Protocol lines are buffered and only written once the plugin has
    finished. Diagnostics replace the data: if any error was recorded,
    nothing reaches stdout.
    """

    def __init__(self):
        self.lines: list[str] = []
        self.errors: list[str] = []
        self._summary: str | None = None
        self._printed: bool = False

    def emit(self, *lines: str) -> None:
        """Buffer protocol lines."""
        self.lines.extend(lines)

    def error(self, message: str) -> None:
        """Record a diagnostic for stderr."""
        self.errors.append(message)

    def yes(self) -> int:
        """Answer an autoconf probe positively."""
        self.emit("yes")
        return 0

    def no(self, reason: str | None = None) -> int:
        """
        Answer an autoconf probe negatively.

        A negative answer is data, not a failure, so this still returns 0.
        """
        if reason:
            self.emit(f"no ({reason})")
        else:
            self.emit("no")
        return 0

    def set_summary(self, summary: str) -> None:
        """Set a one-line summary."""
        self._summary = summary

    @property
    def summary(self) -> str:
        """Get summary or generate one from errors."""
        if self._summary:
            return self._summary
        if self.errors:
            return f"Error: {self.errors[0]}"
        return "ok"

    @property
    def ok(self) -> bool:
        """True if no error was recorded."""
        return not self.errors

    def to_text(self) -> str:
        """Return protocol text, or an empty string after an error."""
        if self.errors or not self.lines:
            return ""
        return "\n".join(self.lines) + "\n"

    def error_text(self) -> str:
        """Return diagnostics as text."""
        if not self.errors:
            return ""
        return "\n".join(self.errors) + "\n"

    def render(self, stdout: TextIO | None = None, stderr: TextIO | None = None) -> None:
        """Write protocol text to stdout and diagnostics to stderr, once."""
        if self._printed:
            return
        self._printed = True

        stdout = stdout or sys.stdout
        stderr = stderr or sys.stderr

        stdout.write(self.to_text())
        stderr.write(self.error_text())
        stdout.flush()
