"""Scan a directory: .gd definitions and references, .tscn references."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from gdcf.core.definitions import DefinitionExtractor
from gdcf.core.files import iter_gd_files, iter_tscn_files
from gdcf.core.models import ScanResult
from gdcf.core.protocols import ProgressCallback
from gdcf.core.references import ReferenceExtractor
from gdcf.core.scenes import SceneReferenceExtractor
from gdcf.core.source import read_source

logger = logging.getLogger(__name__)


class Scanner:
    """Runs the extractors over a tree and merges their results."""

    def __init__(self) -> None:
        self.definitions = DefinitionExtractor()
        self.references = ReferenceExtractor()
        self.scenes = SceneReferenceExtractor()

    def scan_source(self, path: Path, text: str, result: ScanResult) -> None:
        """Fold one normalized GDScript text into `result`."""
        result.definitions.extend(self.definitions.extract(path, text))
        for name, line in self.references.extract(text):
            result.add_reference(name, path, line)

    def scan_scene(self, path: Path, text: str, result: ScanResult) -> None:
        """Fold one normalized .tscn text into `result`."""
        for name, line in self.scenes.extract(text):
            result.add_reference(name, path, line)

    def scan_directory(
        self,
        root: Path,
        exclude_dirs: Iterable[str] | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> ScanResult:
        """
        Scan a directory for .gd and .tscn files.

        Files that cannot be read are skipped; the scan carries on.

        Args:
            root: Directory to scan
            exclude_dirs: Directory names whose subtrees are skipped
            progress_callback: Notified once per file

        Returns:
            ScanResult with definitions from .gd files and references from both kinds
        """
        exclude_dirs = list(exclude_dirs or ())
        gd_files = iter_gd_files(root, exclude_dirs)
        tscn_files = iter_tscn_files(root, exclude_dirs)

        logger.debug(f"Found {len(gd_files)} .gd and {len(tscn_files)} .tscn files to scan")
        if progress_callback is not None:
            progress_callback.update("Scanning...", total=len(gd_files) + len(tscn_files))

        result = ScanResult()
        for path, scan_text in [(p, self.scan_source) for p in gd_files] + [
            (p, self.scan_scene) for p in tscn_files
        ]:
            if progress_callback is not None:
                progress_callback.update(f"Scanning {path.name}", advance=1)
            try:
                text = read_source(path)
            except OSError as e:
                logger.debug(f"Skipping unreadable file {path}: {e}")
                continue

            logger.debug(f"Processing {path}")
            scan_text(path, text, result)
            result.files_scanned += 1

        logger.debug(
            f"Collected {len(result.definitions)} definitions and "
            f"{result.total_references} references from {result.files_scanned} files"
        )
        return result


def scan_directory(root: Path, exclude_dirs: Iterable[str] | None = None) -> ScanResult:
    return Scanner().scan_directory(root, exclude_dirs)
