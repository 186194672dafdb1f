"""CLI entry point for regatta clash checks."""

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .constants import (
    ALL_COLLECTIONS,
    DEFAULT_LIMIT_PER_COLLECTION,
    DEFAULT_MAX_ISSUES,
    DEFAULT_SNAPSHOT_DIR,
    LEVEL_ERROR,
)
from .engine import ClashEngine, summarize
from .exceptions import RegattaClashError
from .exporters import get_exporter
from .loader import RaceSnapshot, SnapshotLoader
from .models import ClashReport
from .repair import generate_repair_playbook, to_json, to_markdown
from .validators import run_validation

app = typer.Typer(
    name="regatta-clash",
    help="Find boat and blade clashes in regatta entries",
    add_completion=False,
)
console = Console()


class OutputFormat(str, Enum):
    """Output format options."""

    json = "json"
    csv = "csv"
    excel = "excel"


FILE_SUFFIXES = {OutputFormat.json: ".json", OutputFormat.excel: ".xlsx"}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _split_option(value: str | None) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def _load_snapshot(snapshot_dir: Path) -> RaceSnapshot:
    """Load a snapshot, exiting with status 1 on loader errors."""
    try:
        with console.status("[bold green]Loading snapshot..."):
            return SnapshotLoader(snapshot_dir).load()
    except RegattaClashError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


def _select_race(snapshot: RaceSnapshot, race: str | None) -> str | None:
    """Pick the race to check: the requested one, or the only one present."""
    race_ids = snapshot.race_ids
    if race is not None:
        if race not in race_ids:
            console.print(f"[bold red]Error:[/bold red] Race not found: {race}")
            raise typer.Exit(1)
        return race
    if len(race_ids) > 1:
        console.print(
            "[bold red]Error:[/bold red] Snapshot holds several races, "
            f"pass --race (one of: {', '.join(race_ids)})"
        )
        raise typer.Exit(1)
    return race_ids[0] if race_ids else None


@app.command()
def clashes(
    snapshot_dir: Annotated[
        Path,
        typer.Argument(help="Directory with one file per collection"),
    ] = DEFAULT_SNAPSHOT_DIR,
    race: Annotated[
        Optional[str],
        typer.Option("--race", "-r", help="Race id to check"),
    ] = None,
    days: Annotated[
        Optional[str],
        typer.Option("--days", help="Comma-separated day labels in race order"),
    ] = None,
    show_all: Annotated[
        bool,
        typer.Option("--all", "-a", help="Also list silenced clashes"),
    ] = False,
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="Output file or directory path"),
    ] = None,
    format: Annotated[
        OutputFormat,
        typer.Option("-f", "--format", help="Output format"),
    ] = OutputFormat.json,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Show detailed output"),
    ] = False,
) -> None:
    """List boat and blade clashes of a race."""
    _configure_logging(verbose)
    snapshot = _load_snapshot(snapshot_dir)
    race_id = _select_race(snapshot, race)
    if race_id is not None:
        snapshot = snapshot.for_race(race_id)

    day_order = _split_option(days) or snapshot.day_order() or None
    engine = ClashEngine(day_order=day_order, race_id=race_id)
    report = engine.report(
        snapshot.entries,
        snapshot.division_groups,
        snapshot.silences,
        snapshot.blade_silences,
        snapshot.blades,
    )

    console.print(f"\n[bold]Clashes for race:[/bold] {race_id or '(all entries)'}")
    console.print(f"  Boat clashes: {len(report.boat_clashes)}")
    console.print(f"  Blade clashes: {len(report.blade_clashes)}")
    console.print(f"  Unresolved: {report.total_unresolved}")
    _show_clash_tables(report, show_all)

    if output:
        exporter = get_exporter(format.value)
        if format == OutputFormat.csv:
            output_path = output
        else:
            output_path = output if output.suffix else output.with_suffix(FILE_SUFFIXES[format])

        with console.status(f"[bold green]Exporting to {format.value}..."):
            exporter.export(report, output_path)

        console.print(f"\n[bold green]✓[/bold green] Exported to: {output_path}")


def _show_clash_tables(report: ClashReport, show_all: bool) -> None:
    """Print clash tables, unresolved only unless ``show_all``."""
    boat_clashes = report.boat_clashes if show_all else report.unresolved_boat_clashes
    blade_clashes = report.blade_clashes if show_all else report.unresolved_blade_clashes

    if not boat_clashes and not blade_clashes:
        console.print("\n[bold green]✓ No clashes[/bold green]")
        return

    if boat_clashes:
        boat_table = Table(title="Boat Clashes")
        boat_table.add_column("Day", style="cyan")
        boat_table.add_column("Group", style="blue")
        boat_table.add_column("Boat", style="magenta")
        boat_table.add_column("Crews", style="red")
        if show_all:
            boat_table.add_column("Silenced", style="yellow")

        for clash in boat_clashes:
            row = [clash.day, clash.group, clash.boat, str(clash.count)]
            if show_all:
                row.append("yes" if clash.silenced else "")
            boat_table.add_row(*row)

        console.print(boat_table)

    if blade_clashes:
        blade_table = Table(title="Blade Clashes")
        blade_table.add_column("Day", style="cyan")
        blade_table.add_column("Group", style="blue")
        blade_table.add_column("Blades", style="magenta")
        blade_table.add_column("Used", style="red")
        blade_table.add_column("Available", style="green")
        if show_all:
            blade_table.add_column("Silenced", style="yellow")

        for clash in blade_clashes:
            row = [clash.day, clash.group, clash.blade, str(clash.used), str(clash.amount)]
            if show_all:
                row.append("yes" if clash.silenced else "")
            blade_table.add_row(*row)

        console.print(blade_table)


@app.command()
def summary(
    snapshot_dir: Annotated[
        Path,
        typer.Argument(help="Directory with one file per collection"),
    ] = DEFAULT_SNAPSHOT_DIR,
    race: Annotated[
        Optional[str],
        typer.Option("--race", "-r", help="Only summarize this race"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Show detailed output"),
    ] = False,
) -> None:
    """Show which races have unresolved boat or blade clashes."""
    _configure_logging(verbose)
    snapshot = _load_snapshot(snapshot_dir)
    race_ids = [_select_race(snapshot, race)] if race else snapshot.race_ids

    if not race_ids:
        console.print("[bold yellow]Warning:[/bold yellow] No races found in snapshot")
        raise typer.Exit(1)

    table = Table(title="Race Clash Summary")
    table.add_column("Race", style="cyan")
    table.add_column("Boat", style="magenta")
    table.add_column("Blade", style="magenta")
    table.add_column("Any", style="bold")

    for race_id in race_ids:
        race_snapshot = snapshot.for_race(race_id)
        flags = summarize(
            race_snapshot.entries,
            race_snapshot.division_groups,
            race_snapshot.silences,
            race_snapshot.blade_silences,
            race_snapshot.blades,
            race_id=race_id,
        )
        name = race_snapshot.race.name if race_snapshot.race else race_id
        table.add_row(
            name,
            _flag(flags.has_boat_clash),
            _flag(flags.has_blade_clash),
            _flag(flags.has_any_clash),
        )

    console.print(table)


def _flag(value: bool) -> str:
    return "[red]clash[/red]" if value else "[green]ok[/green]"


@app.command()
def validate(
    snapshot_dir: Annotated[
        Path,
        typer.Argument(help="Directory with one file per collection"),
    ] = DEFAULT_SNAPSHOT_DIR,
    limit: Annotated[
        int,
        typer.Option("--limit", help="Documents scanned per collection"),
    ] = DEFAULT_LIMIT_PER_COLLECTION,
    max_issues: Annotated[
        int,
        typer.Option("--max-issues", help="Stop after this many issues"),
    ] = DEFAULT_MAX_ISSUES,
    collections: Annotated[
        Optional[str],
        typer.Option("--collections", "-c", help="Comma-separated collections to scan"),
    ] = None,
    playbook: Annotated[
        Optional[Path],
        typer.Option("--playbook", "-p", help="Write a repair playbook (.md or .json)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Show detailed output"),
    ] = False,
) -> None:
    """Validate snapshot documents and suggest repairs."""
    _configure_logging(verbose)
    targets = _split_option(collections) or list(ALL_COLLECTIONS)

    try:
        loader = SnapshotLoader(snapshot_dir)
        with console.status("[bold green]Validating snapshot..."):
            raw = {name: loader.read_collection(name) for name in targets}
            result = run_validation(
                raw,
                limit_per_collection=limit,
                max_issues=max_issues,
                collections=targets,
            )
    except RegattaClashError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    console.print(f"\n[bold]Validation Results for:[/bold] {snapshot_dir}")
    console.print(f"  Documents scanned: {result.scanned}")

    if not result.issues:
        console.print("[bold green]✓ No issues found[/bold green]")
    else:
        table = Table(title=f"Issues ({len(result.issues)})")
        table.add_column("Level")
        table.add_column("Collection", style="cyan")
        table.add_column("Document", style="blue")
        table.add_column("Field", style="magenta")
        table.add_column("Message")

        for issue in result.issues:
            level = "[red]error[/red]" if issue.level == LEVEL_ERROR else "[yellow]warn[/yellow]"
            table.add_row(level, issue.collection, issue.doc_id, issue.field or "", issue.message)

        console.print(table)

    if playbook:
        repairs = generate_repair_playbook(result.issues)
        text = to_json(repairs) if playbook.suffix == ".json" else to_markdown(repairs)
        playbook.parent.mkdir(parents=True, exist_ok=True)
        playbook.write_text(text, encoding="utf-8")
        console.print(
            f"\n[bold green]✓[/bold green] Playbook with {len(repairs.actions)} actions "
            f"written to: {playbook}"
        )

    if result.has_errors:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
