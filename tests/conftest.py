"""Shared test fixtures."""

import sys
from pathlib import Path

import pytest

# Add project root to path for plugin imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class MockContext:
    """Mock Context for testing plugins without real system access."""

    def __init__(
        self,
        file_contents: dict[str, str | Exception] | None = None,
        unreadable: list[str] | None = None,
        env: dict[str, str] | None = None,
    ):
        self.file_contents = file_contents or {}
        self.unreadable = set(unreadable or [])
        self.env = env or {}
        self.files_read: list[str] = []

    def read_file(self, path: str) -> str:
        """Return mocked file content."""
        self.files_read.append(path)
        if path in self.unreadable:
            raise PermissionError(f"Permission denied: {path}")
        if path not in self.file_contents:
            raise FileNotFoundError(f"No mock content for: {path}")
        content = self.file_contents[path]
        if isinstance(content, Exception):
            raise content
        return content

    def file_readable(self, path: str) -> bool:
        """Check if path is mocked and not marked unreadable."""
        return path in self.file_contents and path not in self.unreadable

    def get_env(self, key: str, default: str | None = None) -> str | None:
        """Return mocked environment variable."""
        return self.env.get(key, default)


@pytest.fixture
def mock_context():
    """Factory fixture for creating MockContext instances."""
    def _create(**kwargs) -> MockContext:
        return MockContext(**kwargs)
    return _create


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return FIXTURES_DIR


def load_fixture(category: str, name: str) -> str:
    """Load a fixture file by category and name."""
    fixture_path = FIXTURES_DIR / category / name
    if not fixture_path.exists():
        raise FileNotFoundError(f"Fixture not found: {fixture_path}")
    return fixture_path.read_text()
