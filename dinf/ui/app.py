from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from rich.markup import escape
from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Container
from textual.widgets import DataTable, Static

from dinf.models.dir_info import DirInfo
from dinf.services.formatting import NumberFormat, format_bytes, format_count, relative_bar

VIEWS: tuple[str, ...] = ("summary", "extensions", "files")

_VIEW_LABELS: dict[str, str] = {
    "summary": "Summary",
    "extensions": "By Extension",
    "files": "Biggest Files",
}

_VIEW_KEYS: dict[str, str] = {"s": "summary", "e": "extensions", "f": "files"}


@dataclass(slots=True)
class DisplayRow:
    name: str
    size_bytes: int
    detail: str = ""


class DinfApp(App[None]):
    CSS = """
    #app-grid {
        padding: 0 1;
    }
    #path-row, #tabs-row, #status-row {
        height: 1;
    }
    #content-table {
        height: 1fr;
    }
    """

    def __init__(
        self,
        infos: Sequence[DirInfo],
        top_count: int,
        number_format: NumberFormat = NumberFormat(),
        initial_view: str = "files",
    ) -> None:
        super().__init__()
        self.infos = list(infos)
        self.top_count = top_count
        self.number_format = number_format
        self.current_view = initial_view if initial_view in VIEWS else "files"
        self.info_index = 0
        self.rows: list[DisplayRow] = []

    @property
    def current_info(self) -> DirInfo | None:
        if not self.infos:
            return None
        return self.infos[self.info_index]

    def compose(self) -> ComposeResult:
        yield Container(
            Static(id="path-row"),
            Static(id="tabs-row"),
            DataTable(id="content-table"),
            Static(id="status-row"),
            id="app-grid",
        )

    def on_mount(self) -> None:
        table = self.query_one("#content-table", DataTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        table.focus()
        self._refresh_all()

    def _refresh_all(self) -> None:
        self._render_header_rows()
        self._render_content_table()
        self._render_footer_row()

    def _render_header_rows(self) -> None:
        info = self.current_info
        if info is None:
            path_text = "[#81a2be]Path:[/] (none)"
        else:
            path_text = (
                f"[#81a2be]Path:[/] {escape(info.path_processed)}"
                + f"    [#b5bd68]Files:[/] {format_count(info.total_files, self.number_format)}"
                + f"    [#f0c674]Size:[/] {format_bytes(info.total_size)}"
            )
        self.query_one("#path-row", Static).update(Text.from_markup(path_text))

        tab_items: list[str] = []
        for view in VIEWS:
            label = _VIEW_LABELS[view]
            if view == "extensions":
                label = f"Top {self.top_count} {label}"
            if view == self.current_view:
                tab_items.append(f"[bold #1d1f21 on #b5bd68] {label} [/] ")
            else:
                tab_items.append(f"[#c5c8c6 on #373b41] {label} [/] ")
        self.query_one("#tabs-row", Static).update(Text.from_markup(" ".join(tab_items)))

    def _build_rows(self) -> list[DisplayRow]:
        info = self.current_info
        if self.current_view == "summary":
            return [
                DisplayRow(
                    name=item.path_processed,
                    size_bytes=item.total_size,
                    detail=f"{format_count(item.total_files, self.number_format)} files",
                )
                for item in self.infos
            ]
        if info is None:
            return []
        if self.current_view == "extensions":
            if info.ext_stats is None:
                return []
            rows = [DisplayRow(name=stat.ext, size_bytes=stat.size) for stat in info.ext_stats.top_by_ext]
            if info.ext_stats.others_size > 0:
                rows.append(DisplayRow(name="(others)", size_bytes=info.ext_stats.others_size))
            return rows
        return [DisplayRow(name=record.path, size_bytes=record.size) for record in info.top_files]

    def _render_content_table(self) -> None:
        table = self.query_one("#content-table", DataTable)
        table.clear(columns=True)
        table.add_column("NAME")
        table.add_column("SIZE")
        table.add_column("BAR")
        table.add_column("DETAIL")

        self.rows = self._build_rows()
        if not self.rows:
            table.add_row("(no data)", "", "", "")
            return

        if self.current_view == "summary":
            total = max(1, sum(item.total_size for item in self.infos))
        else:
            info = self.current_info
            total = max(1, info.total_size if info is not None else 0)
        for row in self.rows:
            table.add_row(
                Text(row.name),
                format_bytes(row.size_bytes),
                relative_bar(row.size_bytes, total),
                row.detail,
            )

    def _render_footer_row(self) -> None:
        position = f"Path {self.info_index + 1}/{len(self.infos)}" if self.infos else "No paths"
        hints = "q quit | Tab or s/e/f views | n/p next/prev path | j/k move"
        self.query_one("#status-row", Static).update(Text.from_markup(f"[#969896]{position} | {hints}[/]"))

    def _set_view(self, view: str) -> None:
        if view not in VIEWS:
            return
        self.current_view = view
        self._refresh_all()

    def _set_info(self, index: int) -> None:
        if not self.infos:
            return
        self.info_index = index % len(self.infos)
        self._refresh_all()

    def _move_selection(self, delta: int) -> None:
        table = self.query_one("#content-table", DataTable)
        target = max(0, min(table.row_count - 1, table.cursor_row + delta))
        table.move_cursor(row=target, animate=False)

    def on_key(self, event) -> None:  # type: ignore[no-untyped-def]
        key = event.key
        if key in {"q", "ctrl+c"}:
            self.exit()
        elif key == "tab":
            self._set_view(VIEWS[(VIEWS.index(self.current_view) + 1) % len(VIEWS)])
        elif key in {"shift+tab", "backtab"}:
            self._set_view(VIEWS[(VIEWS.index(self.current_view) - 1) % len(VIEWS)])
        elif key in _VIEW_KEYS:
            self._set_view(_VIEW_KEYS[key])
        elif key == "n":
            self._set_info(self.info_index + 1)
        elif key == "p":
            self._set_info(self.info_index - 1)
        elif key == "j":
            self._move_selection(1)
        elif key == "k":
            self._move_selection(-1)
        else:
            return
        event.stop()
