"""CLI interface for Godot dead code finder."""

import logging
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TextColumn,
)

from gdcf.core.constants import DEFAULT_EXCLUDE_DIRS
from gdcf.core.detector import DeadCodeDetector
from gdcf.core.files import iter_gd_files, iter_tscn_files
from gdcf.core.models import DetectionReport, ScanResult
from gdcf.output.formatters.enums import OutputFormat
from gdcf.output.formatters.formatter_factory import get_formatter
from gdcf.output.progress.callbacks import RichProgressCallback

app = typer.Typer(
    name="gdcf",
    help="🔍 Find functions that are never called in a Godot GDScript codebase",
    no_args_is_help=True,
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)

DEFAULT_PATH = Path(".")


def _relative(path: Path, root: Path) -> Path:
    try:
        return path.relative_to(root)
    except ValueError:
        return path


def _print_file_list(root: Path, exclude_dirs: list[str]) -> None:
    """List every .gd and .tscn path the scan will read."""
    err_console.print(f"Scanning: {root}", markup=False)
    for label, paths in (
        (".gd", iter_gd_files(root, exclude_dirs)),
        (".tscn", iter_tscn_files(root, exclude_dirs)),
    ):
        err_console.print(
            f"  Recursive {label} search (case-insensitive) matched {len(paths)} path(s):"
        )
        for p in sorted(paths, key=lambda p: str(p).lower()):
            err_console.print(f"    {_relative(p, root)}", markup=False)


def _print_summary(report: DetectionReport) -> None:
    err_console.print(f"Scanning: {report.root}", markup=False)
    err_console.print(f"  Files scanned: {report.files_scanned}")
    err_console.print(f"  Total function definitions: {report.total_functions}")
    err_console.print(f"  Total references: {report.total_references}")


def _print_debug_function(root: Path, name: str, scan: ScanResult) -> None:
    """Show every definition and reference found for one function name."""
    err_console.print(f"Debug: searching for references to '{name}'", markup=False)
    definitions = [fd for fd in scan.definitions if fd.name == name]
    references = sorted(scan.references_to(name), key=lambda r: (str(r.path), r.line))

    err_console.print(f"  Definitions found: {len(definitions)}")
    for fd in definitions:
        err_console.print(f"    {_relative(fd.file, root)}:{fd.line}: {fd.name}", markup=False)
    err_console.print(f"  References found: {len(references)}")
    for site in references:
        err_console.print(f"    {_relative(site.path, root)}:{site.line}", markup=False)

    if not definitions:
        err_console.print(f"[yellow]  Warning: no definition found for '{name}'[/yellow]")
    elif not references:
        err_console.print(f"[yellow]  Warning: no references found for '{name}'[/yellow]")


@app.command()
def check(
    path: Annotated[
        Path,
        typer.Argument(
            exists=True,
            file_okay=False,
            dir_okay=True,
            help="Root directory to scan",
        ),
    ] = DEFAULT_PATH,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="No output; only exit with code 1 if unused or test-only functions are found",
        ),
    ] = False,
    test_dirs: Annotated[
        list[str] | None,
        typer.Option(
            "--test-dir",
            "--tests-dir",
            help="Directory (relative to root) treated as test code; repeatable "
            "(default: tests/, test/, test_*.gd, *_test.gd)",
        ),
    ] = None,
    exclude_dirs: Annotated[
        list[str] | None,
        typer.Option(
            "--exclude-dir",
            help="Directory name (or **/name) to exclude from the scan; repeatable "
            "(default: addons)",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--output",
            "-o",
            help="Output format: tree, json, csv",
        ),
    ] = OutputFormat.TREE,
    output_file: Annotated[
        Path | None,
        typer.Option(
            "--output-file",
            "-f",
            help="Save results to file",
        ),
    ] = None,
    debug_function: Annotated[
        str | None,
        typer.Option(
            "--debug-function",
            help="Show all definitions and references found for a function name",
        ),
    ] = None,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            count=True,
            help="-v: scan summary, -vv: list every scanned file, -vvv: debug logging",
        ),
    ] = 0,
) -> None:
    """
    Scan a Godot project for unused functions.

    Functions never referenced anywhere are reported as unused; functions
    referenced only from test code are reported separately.

    Examples:
        gdcf check ./my-game
        gdcf check --exclude-dir addons --test-dir tests
        gdcf check -o json -f results.json
        gdcf check --debug-function _on_button_pressed
    """
    if verbose >= 3:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)

    exclude = exclude_dirs or list(DEFAULT_EXCLUDE_DIRS)
    detector = DeadCodeDetector(
        exclude_dirs=exclude,
        test_dirs=test_dirs,
        verbose=verbose >= 3,
    )
    root = path.resolve()

    if verbose >= 2 and not quiet:
        _print_file_list(root, exclude)

    if debug_function:
        scan = detector.scan_corpus(root)
        _print_debug_function(root, debug_function, scan)
        raise typer.Exit(0)

    try:
        if quiet:
            report = detector.scan(root)
        else:
            with Progress(
                MofNCompleteColumn(),
                BarColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=err_console,
                transient=True,
            ) as progress:
                task_id = progress.add_task("Scanning for dead code...", total=None)
                report = detector.scan(
                    root, progress_callback=RichProgressCallback(progress, task_id)
                )
    except Exception as e:
        err_console.print(f"[red]Error during scan: {e}[/red]")
        if verbose:
            err_console.print_exception()
        raise typer.Exit(1)

    if quiet:
        raise typer.Exit(1 if report.has_findings else 0)

    if verbose >= 1:
        _print_summary(report)

    formatter = get_formatter(output_format, console)

    if output_format == OutputFormat.TREE:
        message = formatter.format(report)
        if message:
            console.print(message)
    elif output_file:
        formatter.save(report, output_file)
        console.print(f"Results saved to {output_file}", style="green", markup=False)
    else:
        console.print(formatter.format(report), markup=False, highlight=False, soft_wrap=True)

    if report.has_findings:
        console.print(
            f"[yellow]⚠️  Found {len(report.unused)} unused and "
            f"{len(report.test_only)} test-only function(s)[/yellow]"
        )
        raise typer.Exit(1)
    if output_format != OutputFormat.TREE:
        console.print("[green]✅ No unused functions found![/green]")


@app.command("version")
def cli_version() -> None:
    """Show version information."""
    try:
        console.print(version("godot-dead-code-finder"))
    except PackageNotFoundError:
        console.print("unknown")


if __name__ == "__main__":
    app()
