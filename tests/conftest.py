from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def project(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Write files (paths relative to the root) into a temp dir and return its root."""

    def _make(files: dict[str, str]) -> Path:
        for rel, content in files.items():
            full = tmp_path / rel
            full.parent.mkdir(parents=True, exist_ok=True)
            full.write_text(content, encoding="utf-8")
        return tmp_path.resolve()

    return _make
