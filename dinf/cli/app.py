from __future__ import annotations

import logging
from dataclasses import replace
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from result import Err

from dinf.config.defaults import DEFAULT_PATH, default_config
from dinf.config.loader import load_config, sample_config_json
from dinf.config.schema import parse_top_count, split_globs
from dinf.models.dir_info import DirInfo, DirInfoResult, ScanError, ScanOptions
from dinf.services.formatting import format_count
from dinf.services.patterns import compile_globs
from dinf.services.processor import process_dir_info
from dinf.services.report import render_report
from dinf.ui.app import DinfApp

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger("dinf")


def _configure_logging(verbose: bool) -> None:
    handler = RichHandler(console=err_console, show_path=False, show_time=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def _truncate_path(path: str, max_width: int = 80) -> str:
    if len(path) <= max_width:
        return path
    keep = max_width - 3
    return f"...{path[-keep:]}"


def _scan_with_status(path: str, options: ScanOptions) -> DirInfoResult:
    with err_console.status(f"[bold #8abeb7]Scanning {escape(_truncate_path(path))}...[/]") as status:

        def on_progress(current_path: str, files: int, directories: int) -> None:
            status.update(
                f"[bold #8abeb7]Scanning...[/] [#b5bd68]{files:,} files, {directories:,} dirs[/]"
                + f"  [#81a2be]{escape(_truncate_path(current_path))}[/]"
            )

        return process_dir_info(path, options, progress_callback=on_progress)


def _print_error(error: ScanError) -> None:
    console.print(f"[red]ERROR - {escape(error.message)}[/]")


def run(
    paths: Annotated[list[str] | None, typer.Argument(help="Base directory paths to analyze.")] = None,
    top: Annotated[str | None, typer.Option("--top", "-n", help="Number of biggest files to display.")] = None,
    glob: Annotated[str | None, typer.Option("--glob", "-g", help="Globs, comma separated.")] = None,
    no_ext: Annotated[bool, typer.Option("--no-ext", help="Do not group sizes by extension.")] = False,
    summary: Annotated[
        bool, typer.Option("--summary", "-s", help="Show only number of files and total size.")
    ] = False,
    interactive: Annotated[bool, typer.Option("--interactive", "-i", help="Browse results in a TUI.")] = False,
    sample_config: Annotated[bool, typer.Option("--sample-config", help="Print sample config JSON.")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log skipped entries and scan details.")] = False,
) -> None:
    _configure_logging(verbose)

    if sample_config:
        console.print(sample_config_json(), markup=False, highlight=False)
        raise typer.Exit(0)

    config_result = load_config()
    if isinstance(config_result, Err):
        console.print(f"[yellow]{escape(config_result.unwrap_err())} Using defaults.[/]")
        config = default_config()
    else:
        config = config_result.unwrap()

    overrides: dict[str, object] = {}
    if top is not None:
        parsed = parse_top_count(top)
        if isinstance(parsed, Err):
            _print_error(parsed.unwrap_err())
            raise typer.Exit(1)
        overrides["top_count"] = parsed.unwrap()
    if glob is not None:
        overrides["glob_patterns"] = split_globs(glob)
    if no_ext:
        overrides["group_by_extension"] = False
    if summary:
        overrides["summary_only"] = True
    if overrides:
        config = replace(config, **overrides)

    options = config.scan_options()
    number_format = config.number_format()

    if options.glob_patterns:
        compiled = compile_globs(options.glob_patterns)
        if isinstance(compiled, Err):
            _print_error(compiled.unwrap_err())
            raise typer.Exit(1)

    failed = False
    collected: list[DirInfo] = []
    rendered = 0
    for path in paths or [DEFAULT_PATH]:
        result = _scan_with_status(path, options)
        if isinstance(result, Err):
            error = result.unwrap_err()
            console.print(f"[red]Scan failed for {escape(error.target)}: {escape(error.message)}[/]")
            failed = True
            continue

        info = result.unwrap()
        if info.skipped_entries:
            console.print(
                f"[yellow]{format_count(info.skipped_entries, number_format)} entries skipped "
                + f"while scanning {escape(info.path_processed)}[/]"
            )
        if options.summary_only or interactive:
            collected.append(info)
            continue
        if rendered:
            console.print()
        render_report(console, [info], options, number_format)
        rendered += 1

    if interactive:
        if collected:
            DinfApp(collected, options.top_count, number_format).run()
    else:
        render_report(console, collected, options, number_format)

    if failed:
        raise typer.Exit(1)


def cli() -> None:
    typer.run(run)


if __name__ == "__main__":
    cli()
