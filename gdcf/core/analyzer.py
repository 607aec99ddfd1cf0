"""Analyze scan results: unused functions and test-only referenced functions."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from gdcf.core.constants import (
    TEST_DIR_NAMES,
    TEST_STEM_PREFIX,
    TEST_STEM_SUFFIX,
    is_engine_callback,
    is_test_function,
)
from gdcf.core.files import canonical_path
from gdcf.core.models import AnalysisResult, FunctionDefinition, ReferenceSite, ScanResult
from gdcf.core.protocols import TestPathPredicate
from gdcf.core.scanner import scan_directory

logger = logging.getLogger(__name__)


class DefaultTestPathPredicate:
    """
    Test code is anything under a `tests/` or `test/` directory below the root,
    or a file named `test_*` / `*_test`. Comparisons ignore case.
    """

    def __init__(self, root: Path) -> None:
        self.root = canonical_path(root)

    def is_test_path(self, path: Path) -> bool:
        path = canonical_path(path)
        try:
            rel = path.relative_to(self.root)
        except ValueError:
            return False

        if any(part.lower() in TEST_DIR_NAMES for part in rel.parts):
            return True
        stem = path.stem.lower()
        return stem.startswith(TEST_STEM_PREFIX) or stem.endswith(TEST_STEM_SUFFIX)


class DirectoryTestPathPredicate:
    """Test code is anything under one of the given directories (relative to root)."""

    def __init__(self, root: Path, test_dirs: Iterable[str]) -> None:
        self.test_bases = [canonical_path(root / d) for d in test_dirs]

    def is_test_path(self, path: Path) -> bool:
        path = canonical_path(path)
        return any(path.is_relative_to(base) for base in self.test_bases)


class ReachabilityAnalyzer:
    """Classify each definition of a ScanResult as used, unused or test-only."""

    def __init__(self, scan: ScanResult, is_test_path: TestPathPredicate) -> None:
        self.scan = scan
        self.is_test_path = is_test_path
        self._canonical: dict[Path, Path] = {}
        self._def_sites = {
            (self._canonical_path(fd.file), fd.line, fd.name) for fd in scan.definitions
        }

    def _canonical_path(self, path: Path) -> Path:
        if path not in self._canonical:
            self._canonical[path] = canonical_path(path)
        return self._canonical[path]

    def qualifying_references(self, definition: FunctionDefinition) -> set[ReferenceSite]:
        """References to the definition's name, minus hits on a declaration line of that name."""
        return {
            site
            for site in self.scan.references_to(definition.name)
            if (self._canonical_path(site.path), site.line, definition.name) not in self._def_sites
        }

    def find_unused(self) -> list[FunctionDefinition]:
        """
        Return definitions that are never referenced.

        Engine callbacks, test functions and hooks, and definitions tagged with
        an ignore marker are always considered used.
        """
        unused = []
        for fd in self.scan.definitions:
            if is_engine_callback(fd.name) or is_test_function(fd.name) or fd.ignore_dead_code:
                continue
            if not self.qualifying_references(fd):
                unused.append(fd)

        logger.debug(f"Found {len(unused)} unused functions out of {len(self.scan.definitions)}")
        return unused

    def find_test_only(self) -> list[FunctionDefinition]:
        """Return functions defined in application code that only test code references."""
        test_only = []
        for fd in self.scan.definitions:
            if is_engine_callback(fd.name) or fd.ignore_dead_code:
                continue
            if self.is_test_path.is_test_path(fd.file):
                continue
            refs = self.qualifying_references(fd)
            if refs and all(self.is_test_path.is_test_path(site.path) for site in refs):
                test_only.append(fd)

        logger.debug(f"Found {len(test_only)} functions referenced only from tests")
        return test_only

    def analyze(self) -> AnalysisResult:
        return AnalysisResult(unused=self.find_unused(), test_only=self.find_test_only())


def find_unused_functions(
    root: Path,
    scan: ScanResult | None = None,
    exclude_dirs: Iterable[str] | None = None,
) -> list[FunctionDefinition]:
    """Unused functions under `root`, scanning first when no ScanResult is given."""
    if scan is None:
        scan = scan_directory(root, exclude_dirs)
    return ReachabilityAnalyzer(scan, DefaultTestPathPredicate(root)).find_unused()


def find_only_test_referenced_functions(
    root: Path,
    is_test_path: TestPathPredicate | None = None,
    scan: ScanResult | None = None,
    exclude_dirs: Iterable[str] | None = None,
) -> list[FunctionDefinition]:
    """Functions only referenced from test code, scanning first when no ScanResult is given."""
    if is_test_path is None:
        is_test_path = DefaultTestPathPredicate(root)
    if scan is None:
        scan = scan_directory(root, exclude_dirs)
    return ReachabilityAnalyzer(scan, is_test_path).find_test_only()
