"""Execution context for testability."""

import os


class Context:
    """
    Wraps filesystem and environment access for testability.

    In production: touches the real system
    In tests: can be replaced with MockContext
    """

    def read_file(self, path: str) -> str:
        """
        Read file contents.

        The handle is scoped to this call and closed on every exit path.

        Raises:
            OSError: If the file cannot be opened or read
            UnicodeDecodeError: If the file is not valid text
        """
        with open(path, encoding="utf-8") as f:
            return f.read()

    def file_readable(self, path: str) -> bool:
        """Check read access without opening the file."""
        return os.access(path, os.R_OK)

    def get_env(self, key: str, default: str | None = None) -> str | None:
        """Get environment variable."""
        return os.environ.get(key, default)
