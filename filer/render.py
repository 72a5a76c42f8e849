from __future__ import annotations

import csv, io, json
from typing import Dict, List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .models import DATE_FMT, DirectoryStatistics, FileRecord, OrganizeResult

CSV_HEADER = ["name", "path", "size", "size_human", "modified", "mode", "is_dir", "extension"]


def _console(console: Optional[Console]) -> Console:
    return console or Console()


# ——— file listings ———

def files_to_json(files: List[FileRecord]) -> str:
    return json.dumps([f.to_dict() for f in files], indent=2, ensure_ascii=False)


def files_to_csv(files: List[FileRecord]) -> str:
    buf = io.StringIO()
    w = csv.writer(buf, lineterminator="\n")
    w.writerow(CSV_HEADER)
    for f in files:
        w.writerow([
            f.name,
            f.path,
            f.size,
            f.size_human,
            f.modified_at.strftime(DATE_FMT),
            f.permission_string,
            "true" if f.is_directory else "false",
            f.extension,
        ])
    return buf.getvalue()


def files_table(files: List[FileRecord]) -> Table:
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold cyan")
    table.add_column("MODE", no_wrap=True)
    table.add_column("SIZE", justify="right", no_wrap=True)
    table.add_column("MODIFIED", no_wrap=True)
    table.add_column("NAME")
    for f in files:
        name = escape(f.name) + ("/" if f.is_directory else "")
        table.add_row(f.permission_string[:10], f.size_human, f.modified_at.strftime(DATE_FMT), name)
    return table


def print_files(files: List[FileRecord], fmt: str, console: Optional[Console] = None) -> None:
    con = _console(console)
    if fmt == "json":
        con.out(files_to_json(files), highlight=False)
        return
    if fmt == "csv":
        con.out(files_to_csv(files), end="", highlight=False)
        return
    if not files:
        con.print("No files found")
        return
    con.print(files_table(files))
    con.print(f"Total: {len(files)} items")


# ——— statistics ———

def stats_to_json(stats: DirectoryStatistics) -> str:
    return json.dumps(stats.to_dict(), indent=2, ensure_ascii=False)


def print_stats(
    stats: DirectoryStatistics,
    fmt: str,
    show_extensions: bool = True,
    top_n: int = 10,
    console: Optional[Console] = None,
) -> None:
    con = _console(console)
    if fmt == "json":
        con.out(stats_to_json(stats), highlight=False)
        return

    con.print(f"[bold underline]Directory Statistics for: {escape(stats.path)}[/]")
    summary = Table(box=None, show_header=False)
    summary.add_column(style="bold")
    summary.add_column()
    summary.add_row("Files", str(stats.total_files))
    summary.add_row("Directories", str(stats.total_dirs))
    summary.add_row("Total Size", f"{stats.total_size_human} ({stats.total_size} bytes)")
    if stats.total_files > 0:
        summary.add_row("Average Size", f"{stats.average_size_human} per file")
    con.print(summary)

    notable = Table(title="Notable Files", box=box.SIMPLE, show_header=False)
    notable.add_column(style="bold")
    notable.add_column()
    notable.add_column(justify="right")
    if stats.largest_file is not None:
        notable.add_row("Largest", escape(stats.largest_file.name), stats.largest_file.size_human)
    if stats.oldest_file is not None:
        notable.add_row("Oldest", escape(stats.oldest_file.name), stats.oldest_file.modified_at.strftime("%Y-%m-%d"))
    if stats.newest_file is not None:
        notable.add_row("Newest", escape(stats.newest_file.name), stats.newest_file.modified_at.strftime("%Y-%m-%d"))
    if notable.row_count:
        con.print(notable)

    if show_extensions and stats.extensions:
        exts = Table(title="File Extensions", box=box.SIMPLE, header_style="bold magenta")
        exts.add_column("EXT")
        exts.add_column("FILES", justify="right")
        exts.add_column("SHARE", justify="right")
        ranked = stats.top_extensions()
        shown = ranked[:top_n] if top_n > 0 else ranked
        for ext, count in shown:
            exts.add_row(escape("." + ext), str(count), f"{count / stats.total_files * 100:.1f}%")
        rest = sum(c for _, c in ranked[len(shown):])
        if rest:
            exts.add_row("...", str(rest), "others")
        con.print(exts)

    con.print(
        f"Summary: {stats.total_files + stats.total_dirs} items "
        f"({stats.total_files} files, {stats.total_dirs} dirs) totaling {stats.total_size_human}"
    )


# ——— organize preview ———

def print_organize_plan(categories: Dict[str, List[str]], console: Optional[Console] = None) -> None:
    con = _console(console)
    con.print("Files will be organized as follows:")
    total = 0
    for category, names in categories.items():
        con.print(f"\n[bold]{escape(category.title())}/[/] ({len(names)} files):")
        for name in names:
            con.print(f"  - {escape(name)}")
            total += 1
    con.print(f"\nTotal files to organize: {total}")


def print_organize_result(result: OrganizeResult, console: Optional[Console] = None) -> None:
    con = _console(console)
    if result.complete:
        con.print(f"[green]Organized {result.moved} files into {len(result.categories)} categories[/]")
        return
    con.print(
        f"[yellow]Stopped after moving {result.moved} of {result.total_files} files:[/] {escape(str(result.error))}"
    )
