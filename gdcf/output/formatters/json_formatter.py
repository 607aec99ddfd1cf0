"""JSON formatter for structured output."""

import json

from gdcf.core.models import DetectionReport, FunctionDefinition
from gdcf.output.formatters.protocols import BaseFormatter


def _function_entry(func: FunctionDefinition) -> dict[str, object]:
    return {
        "file": str(func.file),
        "name": func.name,
        "line": func.line,
        "static": func.is_static,
    }


class JsonFormatter(BaseFormatter):
    """Format results as JSON."""

    def format(self, report: DetectionReport) -> str:
        """Format the report as JSON."""
        data = {
            "summary": {
                "root": str(report.root),
                "files_scanned": report.files_scanned,
                "total_functions": report.total_functions,
                "total_references": report.total_references,
                "unused_functions_count": len(report.unused),
                "test_only_functions_count": len(report.test_only),
                "scan_duration": report.scan_duration,
            },
            "unused": [_function_entry(func) for func in report.unused],
            "test_only": [_function_entry(func) for func in report.test_only],
        }
        return json.dumps(data, indent=2, ensure_ascii=False)
