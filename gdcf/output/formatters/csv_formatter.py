"""CSV formatter for spreadsheet-compatible output."""

import csv
from io import StringIO

from gdcf.core.models import DetectionReport
from gdcf.output.formatters.enums import Category
from gdcf.output.formatters.protocols import BaseFormatter


class CsvFormatter(BaseFormatter):
    """Format results as CSV."""

    def format(self, report: DetectionReport) -> str:
        """Format the report as CSV."""
        output = StringIO()
        writer = csv.writer(output)

        # Write header
        writer.writerow(["Category", "File", "Function", "Line", "Static"])

        # Write data
        for category, functions in (
            (Category.UNUSED, report.unused),
            (Category.TEST_ONLY, report.test_only),
        ):
            for func in functions:
                writer.writerow(
                    [
                        category.value,
                        func.file,
                        func.name,
                        func.line,
                        func.is_static,
                    ]
                )

        return output.getvalue()
