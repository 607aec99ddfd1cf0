"""
Godot Dead Code Finder - Find unused functions in Godot GDScript codebases.
"""

__version__ = "0.1.0"

from gdcf.core.analyzer import (
    DefaultTestPathPredicate,
    DirectoryTestPathPredicate,
    ReachabilityAnalyzer,
    find_only_test_referenced_functions,
    find_unused_functions,
)
from gdcf.core.detector import DeadCodeDetector
from gdcf.core.models import FunctionDefinition, ReferenceSite, ScanResult
from gdcf.core.scanner import Scanner, scan_directory

__all__ = [
    "DeadCodeDetector",
    "DefaultTestPathPredicate",
    "DirectoryTestPathPredicate",
    "FunctionDefinition",
    "ReachabilityAnalyzer",
    "ReferenceSite",
    "ScanResult",
    "Scanner",
    "find_only_test_referenced_functions",
    "find_unused_functions",
    "scan_directory",
]
