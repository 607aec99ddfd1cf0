"""File system traversal for .gd and .tscn files."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from gdcf.core.constants import SCENE_EXTENSION, SOURCE_EXTENSION

logger = logging.getLogger(__name__)


def normalize_exclude_dir(pattern: str) -> str:
    """Reduce `**/name` or `path/name` to the directory name (`**/addons` -> `addons`)."""
    name = pattern.replace("\\", "/").rstrip("/")
    return name.rsplit("/", 1)[-1]


def canonical_path(path: Path) -> Path:
    """Resolve symlinks and `..`; fall back to the given path when that fails."""
    try:
        return path.resolve(strict=True)
    except (OSError, RuntimeError):
        return path


def _matches_extension(path: Path, extension: str) -> bool:
    return path.name.lower().endswith(extension.lower())


def _walk(
    directory: Path,
    excluded: set[str],
    extension: str,
    result: list[Path],
    seen: set[Path],
) -> None:
    # Symlinked directories can form cycles
    real = canonical_path(directory)
    if real in seen:
        return
    seen.add(real)

    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        logger.debug(f"Cannot list {directory}: {e}")
        return

    dirs = [p for p in entries if p.is_dir()]
    files = [p for p in entries if p.is_file()]
    matching = [p for p in files if _matches_extension(p, extension)]

    logger.debug(f"[walk] dirpath={directory}")
    logger.debug(f"[walk]   dirs={[d.name for d in dirs]}")
    logger.debug(f"[walk]   {extension} here={[f.name for f in matching]}")
    result.extend(matching)

    for d in dirs:
        if d.name in excluded:
            logger.debug(f"[walk] skipping excluded directory {d}")
            continue
        _walk(d, excluded, extension, result, seen)


def iter_files(
    root: Path,
    extension: str,
    exclude_dirs: Iterable[str] | None = None,
) -> list[Path]:
    """
    Recursively collect files under `root` with the given extension (case-insensitive).

    Directories whose name matches an entry of `exclude_dirs` are skipped with
    their whole subtree. A root that is not a directory yields no files.
    """
    root_path = canonical_path(root)
    excluded = {normalize_exclude_dir(p) for p in exclude_dirs or ()}

    logger.debug(f"[walk] root={root_path} exclude_dirs={sorted(excluded)}")
    if not root_path.is_dir():
        return []

    result: list[Path] = []
    _walk(root_path, excluded, extension, result, set())
    return result


def iter_gd_files(root: Path, exclude_dirs: Iterable[str] | None = None) -> list[Path]:
    return iter_files(root, SOURCE_EXTENSION, exclude_dirs)


def iter_tscn_files(root: Path, exclude_dirs: Iterable[str] | None = None) -> list[Path]:
    return iter_files(root, SCENE_EXTENSION, exclude_dirs)
