"""Base formatter interface for output formatting."""

from pathlib import Path
from typing import Protocol

from gdcf.core.models import DetectionReport


class BaseFormatter(Protocol):
    """Base class for output formatters."""

    def format(self, report: DetectionReport) -> str:
        """Format the detection report into a string."""
        ...

    def save(self, report: DetectionReport, output_file: Path) -> None:
        """Save formatted report to a file."""
        content = self.format(report)
        output_file.write_text(content, encoding="utf-8")
