"""Main dead code detector."""

import logging
import time
from collections.abc import Iterable
from pathlib import Path

from gdcf.core.analyzer import (
    DefaultTestPathPredicate,
    DirectoryTestPathPredicate,
    ReachabilityAnalyzer,
)
from gdcf.core.constants import DEFAULT_EXCLUDE_DIRS
from gdcf.core.files import canonical_path
from gdcf.core.models import DetectionReport, ScanResult
from gdcf.core.protocols import ProgressCallback, TestPathPredicate
from gdcf.core.scanner import Scanner

logger = logging.getLogger(__name__)


class DeadCodeDetector:
    """Main class for detecting unused and test-only functions in a Godot project."""

    def __init__(
        self,
        exclude_dirs: Iterable[str] | None = None,
        test_dirs: Iterable[str] | None = None,
        verbose: bool = False,
    ) -> None:
        if exclude_dirs is None:
            exclude_dirs = DEFAULT_EXCLUDE_DIRS
        self.exclude_dirs = list(exclude_dirs)
        self.test_dirs = list(test_dirs or ())
        self.verbose = verbose
        self.scanner = Scanner()

        logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    def _resolve_root(self, path: Path) -> Path:
        if not path.exists():
            raise ValueError(f"Path does not exist: {path}")
        if not path.is_dir():
            raise ValueError(f"Not a directory: {path}")
        return canonical_path(path)

    def test_path_predicate(self, root: Path) -> TestPathPredicate:
        """Directories given with `test_dirs` replace the default naming rule."""
        if self.test_dirs:
            return DirectoryTestPathPredicate(root, self.test_dirs)
        return DefaultTestPathPredicate(root)

    def scan_corpus(
        self,
        path: Path,
        progress_callback: ProgressCallback | None = None,
    ) -> ScanResult:
        """Collect definitions and references without classifying them."""
        root = self._resolve_root(path)
        return self.scanner.scan_directory(root, self.exclude_dirs, progress_callback)

    def scan(
        self,
        path: Path,
        progress_callback: ProgressCallback | None = None,
    ) -> DetectionReport:
        """
        Scan a path for unused and test-only functions.

        Args:
            path: Project directory to scan
            progress_callback: Optional progress reporter

        Returns:
            DetectionReport with the findings and scan statistics

        Raises:
            ValueError: if `path` does not exist or is not a directory
        """
        start_time = time.time()

        root = self._resolve_root(path)
        scan = self.scanner.scan_directory(root, self.exclude_dirs, progress_callback)

        if progress_callback is not None:
            progress_callback.update("Analyzing references...")
        analysis = ReachabilityAnalyzer(scan, self.test_path_predicate(root)).analyze()

        scan_duration = time.time() - start_time
        logger.debug(
            f"Scanned {scan.files_scanned} files in {scan_duration:.2f}s: "
            f"{len(analysis.unused)} unused, {len(analysis.test_only)} test-only"
        )

        return DetectionReport(
            root=root,
            unused=analysis.unused,
            test_only=analysis.test_only,
            files_scanned=scan.files_scanned,
            total_functions=len(scan.definitions),
            total_references=scan.total_references,
            scan_duration=scan_duration,
        )
