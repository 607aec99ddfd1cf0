from rich.console import Console

from gdcf.output.formatters.csv_formatter import CsvFormatter
from gdcf.output.formatters.enums import OutputFormat
from gdcf.output.formatters.json_formatter import JsonFormatter
from gdcf.output.formatters.protocols import BaseFormatter
from gdcf.output.formatters.tree_formatter import TreeFormatter


def get_formatter(output_format: OutputFormat, console: Console | None = None) -> BaseFormatter:
    """Get the appropriate formatter for the output format."""
    formatters = {
        OutputFormat.TREE: TreeFormatter(console),
        OutputFormat.JSON: JsonFormatter(),
        OutputFormat.CSV: CsvFormatter(),
    }

    return formatters[output_format]
