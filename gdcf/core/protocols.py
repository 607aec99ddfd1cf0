"""Protocols for pluggable behavior."""

from pathlib import Path
from typing import Any, Protocol


class ProgressCallback(Protocol):
    """Protocol defining a progress callback function."""

    def update(self, message: str, **fields: Any) -> None:
        """Update progress with a message."""
        ...


class TestPathPredicate(Protocol):
    """Decides whether a file belongs to test code."""

    def is_test_path(self, path: Path) -> bool:
        """Return True if `path` is test code."""
        ...
