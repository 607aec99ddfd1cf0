"""Tree formatter for rich terminal output."""

from collections import defaultdict
from pathlib import Path

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from gdcf.core.models import DetectionReport, FunctionDefinition
from gdcf.output.formatters.protocols import BaseFormatter


class TreeFormatter(BaseFormatter):
    """Format results as a rich tree for terminal output."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def format(self, report: DetectionReport) -> str:
        """Format the report as rich trees."""
        if not report.has_findings:
            return "✅ No unused functions found!"

        # Print trees directly to console
        if report.unused:
            self._print_tree("🔍 Unused (never called)", report.unused, report.root)
        if report.test_only:
            self._print_tree(
                "🧪 Only called from test code (not from main app)", report.test_only, report.root
            )
        self._print_summary(report)
        return ""  # Return empty string since we printed directly

    def _print_tree(self, title: str, functions: list[FunctionDefinition], root: Path) -> None:
        """Print functions grouped by directory and file."""
        funcs_by_file: dict[Path, list[FunctionDefinition]] = defaultdict(list)
        for func in functions:
            funcs_by_file[func.file].append(func)

        root_tree = Tree(f"{title} (total {len(functions)} functions)", guide_style="dim")
        dir_nodes: dict[tuple[str, ...], Tree] = {(): root_tree}

        for file in sorted(funcs_by_file.keys()):
            file_funcs = sorted(funcs_by_file[file], key=lambda f: f.line)

            try:
                rel = file.relative_to(root)
            except ValueError:
                rel = file

            parts = rel.parts
            if not parts:
                continue

            parent_key: tuple[str, ...] = ()
            parent_node: Tree = root_tree
            for part in parts[:-1]:
                key = (*parent_key, part)
                if key not in dir_nodes:
                    # Folder node (with trailing slash)
                    parent_node = parent_node.add(
                        f"[bold blue]{part}/[/bold blue]", guide_style="dim"
                    )
                    dir_nodes[key] = parent_node
                else:
                    parent_node = dir_nodes[key]
                parent_key = key

            file_node = parent_node.add(f"[bold green]{parts[-1]}[/bold green]", guide_style="dim")

            for func in file_funcs:
                func_text = Text(f"{func.name} ", style="magenta")
                func_text.append(f"(line {func.line})", style="grey50")
                if func.is_static:
                    func_text.append(" static", style="cyan")
                file_node.add(func_text)

        self.console.print(root_tree)

    def _print_summary(self, report: DetectionReport) -> None:
        self.console.print("\n📊 Summary:")
        self.console.print(f"   Files scanned: {report.files_scanned}")
        self.console.print(f"   Function definitions: {report.total_functions}")
        self.console.print(f"   Unused functions: {len(report.unused)}")
        self.console.print(f"   Test-only functions: {len(report.test_only)}")
        self.console.print(f"   Scan duration: {report.scan_duration:.2f}s")
