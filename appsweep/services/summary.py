from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from appsweep.models.scan import FoundArtifact, ScanResult
from appsweep.services.formatting import format_bytes, shorten_home


def _artifacts_table(title: str, artifacts: list[FoundArtifact], home: str) -> Table:
    table = Table(title=title, header_style="bold yellow", title_justify="left")
    table.add_column("Path")
    table.add_column("Type", justify="center")
    table.add_column("Size", justify="right")
    for item in artifacts:
        table.add_row(
            escape(shorten_home(item.location, home)),
            "DIR" if item.is_directory else "FILE",
            format_bytes(item.size),
        )
    return table


def render_header(console: Console, result: ScanResult) -> None:
    app = result.descriptor
    console.print(f"[bold #81a2be]{escape(app.effective_name)}[/]  [dim]{app.bundle_identifier}[/]")
    console.print(f"[dim]{escape(app.bundle_location)}[/]")
    if app.discovered_paths:
        console.print(f"[dim]Paths referenced by the executable: {escape(', '.join(app.discovered_paths))}[/]")


def render_result(console: Console, result: ScanResult, home: str) -> None:
    render_header(console, result)
    if not result.artifacts:
        console.print("[green]No leftover files found.[/]")
        return

    for category, artifacts in result.grouped_by_category():
        console.print(_artifacts_table(category.label, artifacts, home))

    table = Table(show_header=False, box=None)
    table.add_column("Label")
    table.add_column("Value", justify="right")
    table.add_row("[bold]Items[/bold]", f"[bold]{len(result.artifacts):,}[/bold]")
    table.add_row("[bold]Total[/bold]", f"[bold]{format_bytes(result.total_size)}[/bold]")
    table.add_row("Selected", f"{result.selected_count:,} / {format_bytes(result.selected_size)}")
    console.print(table)
