from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from dinf.models.dir_info import DirInfo, ScanOptions
from dinf.services.formatting import NumberFormat, format_bytes, format_count


def _stats_panel(info: DirInfo, number_format: NumberFormat) -> Panel:
    body = (
        f"Number of files: [bold]{format_count(info.total_files, number_format)}[/bold]\n"
        f"Total size: [bold]{format_bytes(info.total_size)}[/bold]"
    )
    if info.skipped_entries:
        body += f"\nSkipped entries: [bold]{format_count(info.skipped_entries, number_format)}[/bold]"
    return Panel(
        body,
        title=f"Directory info on '{escape(info.path_processed)}'",
        border_style="blue",
    )


def _extensions_table(info: DirInfo, top_count: int) -> Table | None:
    if info.ext_stats is None:
        return None
    table = Table(title=f"Top {top_count} biggest size by extension", header_style="bold cyan")
    table.add_column("Size", justify="right")
    table.add_column("Extension")
    for stat in info.ext_stats.top_by_ext:
        table.add_row(format_bytes(stat.size), escape(stat.ext))
    if info.ext_stats.others_size > 0:
        table.add_section()
        table.add_row(format_bytes(info.ext_stats.others_size), "(others)")
    return table


def _top_files_table(info: DirInfo) -> Table:
    table = Table(title=f"Top {len(info.top_files)} biggest files", header_style="bold yellow")
    table.add_column("Size", justify="right")
    table.add_column("Path")
    for record in info.top_files:
        table.add_row(format_bytes(record.size), escape(record.path))
    return table


def render_dir_info(
    console: Console,
    info: DirInfo,
    top_count: int,
    number_format: NumberFormat = NumberFormat(),
) -> None:
    console.print(_stats_panel(info, number_format))
    ext_table = _extensions_table(info, top_count)
    if ext_table is not None:
        console.print(ext_table)
    console.print(_top_files_table(info))


def render_summary(
    console: Console,
    infos: Sequence[DirInfo],
    number_format: NumberFormat = NumberFormat(),
) -> None:
    table = Table(title="Summary", header_style="bold cyan")
    table.add_column("Path")
    table.add_column("Files", justify="right")
    table.add_column("Size", justify="right")

    for info in infos:
        table.add_row(
            escape(info.path_processed),
            format_count(info.total_files, number_format),
            format_bytes(info.total_size),
        )

    if len(infos) > 1:
        table.add_section()
        table.add_row(
            "[bold]Total[/bold]",
            f"[bold]{format_count(sum(i.total_files for i in infos), number_format)}[/bold]",
            f"[bold]{format_bytes(sum(i.total_size for i in infos))}[/bold]",
        )

    console.print(table)



def render_report(
    console: Console,
    infos: Sequence[DirInfo],
    options: ScanOptions,
    number_format: NumberFormat = NumberFormat(),
) -> None:
    """Print *infos* as one summary table or as a detailed report per path."""
    if options.summary_only:
        if infos:
            render_summary(console, infos, number_format)
        return
    for idx, info in enumerate(infos):
        if idx > 0:
            console.print()
        render_dir_info(console, info, options.top_count, number_format)
