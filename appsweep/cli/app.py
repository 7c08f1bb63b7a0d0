from __future__ import annotations

import json
import logging
import sys
import threading
import time
from dataclasses import dataclass, replace
from typing import Annotated

import typer
from rich.console import Console, Group
from rich.live import Live
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.spinner import Spinner
from rich.text import Text
from result import Err

from appsweep.config.defaults import default_config
from appsweep.config.loader import load_config, sample_config_json
from appsweep.models.app import ApplicationDescriptor
from appsweep.models.scan import ScanError, ScanErrorCode, ScanOutcome, ScanResult
from appsweep.scan import Scanner, default_scanner
from appsweep.services.bundle import read_bundle
from appsweep.services.formatting import format_bytes
from appsweep.services.fs import DEFAULT_FS
from appsweep.services.summary import render_result
from appsweep.services.trash import move_to_trash

console = Console()

FULL_DISK_ACCESS_HINT = (
    "Some locations could not be read. Grant Full Disk Access to your terminal in "
    "System Settings > Privacy & Security to see everything."
)


@dataclass(slots=True)
class _ScanProgress:
    current_path: str
    finished: int
    total: int
    start_time: float


def _truncate_path(path: str, max_width: int = 110) -> str:
    if len(path) <= max_width:
        return path
    keep = max_width - 3
    return f"...{path[-keep:]}"


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("appsweep")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not logger.handlers:
        handler = RichHandler(console=Console(stderr=True), show_path=False, show_time=verbose)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)


def _render_scan_panel(progress: _ScanProgress, name: str, phase: str) -> Panel:
    elapsed = time.perf_counter() - progress.start_time
    body = Group(
        Spinner("dots", text=phase, style="bold #8abeb7"),
        Text.from_markup(f"[#81a2be]Location:[/] {escape(_truncate_path(progress.current_path))}"),
        Text.from_markup(
            f"[#b5bd68]Checked:[/] {progress.finished}/{progress.total or '?'} locations"
            + f"    [#de935f]Elapsed:[/] {elapsed:.1f}s"
        ),
    )
    return Panel(
        body,
        title=f"[bold #81a2be]appsweep - {escape(name)}[/]",
        border_style="#373b41",
    )


def _scan_with_progress(app: ApplicationDescriptor, scanner: Scanner) -> ScanOutcome:
    lock = threading.Lock()
    done = threading.Event()
    result: ScanOutcome | None = None
    progress = _ScanProgress(
        current_path=app.bundle_location,
        finished=0,
        total=0,
        start_time=time.perf_counter(),
    )

    def on_progress(current_path: str, finished: int, total: int) -> None:
        with lock:
            progress.current_path = current_path
            progress.finished = finished
            progress.total = total

    def scan_worker() -> None:
        nonlocal result
        try:
            result = scanner.scan(app, progress_callback=on_progress)
        except Exception as exc:  # noqa: BLE001
            result = Err(
                ScanError(
                    code=ScanErrorCode.INTERNAL,
                    path=app.bundle_location,
                    message=f"Unhandled scan failure: {exc}",
                )
            )
        finally:
            done.set()

    thread = threading.Thread(target=scan_worker, daemon=True)
    thread.start()

    name = app.effective_name
    with Live(
        _render_scan_panel(progress, name, "Looking for leftovers..."),
        console=console,
        refresh_per_second=12,
        transient=True,
    ) as live:
        while not done.is_set():
            with lock:
                snapshot = replace(progress)
            live.update(_render_scan_panel(snapshot, name, "Looking for leftovers..."))
            time.sleep(0.08)

    thread.join()
    if result is None:
        return Err(
            ScanError(
                code=ScanErrorCode.INTERNAL,
                path=app.bundle_location,
                message="Scan did not complete",
            )
        )
    return result


def _dispose(result: ScanResult, assume_yes: bool) -> None:
    selected = result.selected_artifacts()
    if not selected:
        console.print("[yellow]Nothing selected to remove.[/]")
        return
    prompt = f"Move {len(selected)} item(s) ({format_bytes(result.selected_size)}) to Trash?"
    if not assume_yes and not typer.confirm(prompt, default=False):
        console.print("Aborted.")
        return

    outcome = move_to_trash([a.location for a in selected])
    if outcome.succeeded:
        console.print(f"[green]Moved {len(outcome.succeeded)} item(s) to Trash.[/]")
    if not outcome.failed:
        return
    names = ", ".join(path.rsplit("/", 1)[-1] for path, _ in outcome.failed)
    console.print(f"[red]Could not move {len(outcome.failed)} item(s) to Trash ({escape(names)}).[/]")
    for path, reason in outcome.failed:
        console.print(f"  [red]{escape(path)}[/]: {escape(reason)}")
    if result.access_denied:
        console.print("[yellow]Enable Full Disk Access in System Settings to allow deletion of protected files.[/]")
    else:
        console.print("[yellow]These may require admin privileges; try removing them manually.[/]")
    raise typer.Exit(1)


def run(
    path: Annotated[str, typer.Argument(help="Application bundle (.app) to look for leftovers of.")] = "",
    json_output: Annotated[bool, typer.Option("--json", help="Print the result as JSON.")] = False,
    delete: Annotated[bool, typer.Option("--delete", "-d", help="Move found leftovers to Trash.")] = False,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Do not ask before moving to Trash.")] = False,
    offline: Annotated[bool, typer.Option("--offline", help="Use only the bundled community mappings.")] = False,
    no_system: Annotated[bool, typer.Option("--no-system", help="Skip /Library and receipts.")] = False,
    workers: Annotated[int | None, typer.Option("--workers", "-w", help="Number of probe workers.")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")] = False,
    sample_config: Annotated[bool, typer.Option("--sample-config", help="Print sample config JSON.")] = False,
) -> None:
    if sys.platform == "win32":
        console.print("[red]Windows is not supported.[/]")
        raise typer.Exit(1)

    if sample_config:
        console.print(sample_config_json())
        raise typer.Exit(0)

    _configure_logging(verbose)

    if not path:
        console.print("[red]Pass the path of an application bundle, e.g. /Applications/Foo.app[/]")
        raise typer.Exit(2)

    config_result = load_config()
    if isinstance(config_result, Err):
        console.print(f"[yellow]{escape(config_result.unwrap_err())} Using defaults.[/]")
        config = default_config()
    else:
        config = config_result.unwrap()

    overrides: dict[str, object] = {}
    if workers is not None:
        overrides["scan_workers"] = max(1, workers)
    if no_system:
        overrides["include_system_locations"] = False
    if overrides:
        config = replace(config, **overrides)

    bundle_result = read_bundle(path)
    if isinstance(bundle_result, Err):
        error = bundle_result.unwrap_err()
        console.print(f"[red]{escape(error.message)}: {escape(error.path)}[/]")
        raise typer.Exit(1)
    app = bundle_result.unwrap()

    scanner = default_scanner(config, offline=offline)
    scan_result = scanner.scan(app) if json_output else _scan_with_progress(app, scanner)
    if isinstance(scan_result, Err):
        error = scan_result.unwrap_err()
        console.print(f"[red]Scan failed for {escape(error.path)}: {escape(error.message)}[/]")
        raise typer.Exit(1)
    result = scan_result.unwrap()

    if json_output:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    else:
        render_result(console, result, DEFAULT_FS.home())
        if result.access_denied:
            console.print(f"[yellow]{FULL_DISK_ACCESS_HINT}[/]")

    if delete:
        _dispose(result, assume_yes=yes)


def cli() -> None:
    typer.run(run)


if __name__ == "__main__":
    cli()
