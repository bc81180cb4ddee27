"""Typer CLI for the drill catalog.

Commands:
    - list: drill 목록 (카테고리 필터)
    - add: drill 추가
    - practice: 연습 기록 (숙련도 갱신)
    - pick: 가중치 랜덤 drill 미리보기 (--skip으로 다음 후보)
"""

from __future__ import annotations

import time
from datetime import datetime
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from defense_drill.cli._common import console, make_rng, open_store
from defense_drill.core.exceptions import DrillNotFoundError
from defense_drill.core.logger import setup_logger
from defense_drill.models.drill import Confidence, Drill
from defense_drill.notification.formatters import confidence_markup
from defense_drill.selection.selector import DrillSelector

app = typer.Typer(no_args_is_help=True)


def _parse_confidence(value: str) -> Confidence:
    try:
        return Confidence[value.upper()]
    except KeyError:
        console.print(f"[red]Invalid confidence: {value}[/red]")
        console.print(f"Valid: {', '.join(c.name.lower() for c in Confidence)}")
        raise typer.Exit(code=1) from None


def _format_last_drilled(millis: int) -> str:
    if millis <= 0:
        return "-"
    return datetime.fromtimestamp(millis / 1000).strftime("%Y-%m-%d %H:%M")


@app.command(name="list")
def list_drills(
    category: Annotated[
        str | None, typer.Option("--category", "-c", help="Filter by category name")
    ] = None,
    show_all: Annotated[
        bool, typer.Option("--all", "-a", help="Include drills not marked as known")
    ] = False,
) -> None:
    """Drill 목록."""
    setup_logger(console_level="WARNING")
    store = open_store()
    drills = store.list_drills(category, known_only=not show_all)

    if not drills:
        console.print("[yellow]No drills match the given filters.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold", title=f"Drills ({len(drills)})")
    table.add_column("ID", justify="right", width=4)
    table.add_column("Name", style="bold", min_width=16)
    table.add_column("Confidence", width=10)
    table.add_column("Last Drilled", width=16)
    table.add_column("Categories", min_width=12)

    for drill in drills:
        name = escape(drill.name)
        if drill.is_new_drill:
            name += " [cyan](new)[/cyan]"
        table.add_row(
            str(drill.id),
            name,
            confidence_markup(drill.confidence),
            _format_last_drilled(drill.last_drilled),
            ", ".join(drill.categories) or "-",
        )

    console.print(table)


@app.command()
def add(
    name: Annotated[str, typer.Argument(help="Drill name")],
    category: Annotated[
        list[str] | None, typer.Option("--category", "-c", help="Category (repeatable)")
    ] = None,
    confidence: Annotated[
        str, typer.Option("--confidence", help="high / medium / low")
    ] = "low",
    notes: Annotated[str, typer.Option("--notes", help="Free-form notes")] = "",
) -> None:
    """Drill 추가."""
    setup_logger(console_level="WARNING")
    store = open_store()
    drill = store.add_drill(
        Drill(
            id=0,
            name=name,
            confidence=_parse_confidence(confidence),
            categories=tuple(category or ()),
            notes=notes,
        )
    )
    console.print(f"[green]Added drill #{drill.id}: {escape(drill.name)}[/green]")


@app.command()
def practice(
    drill_id: Annotated[int, typer.Argument(help="Drill ID")],
    confidence: Annotated[
        str | None, typer.Option("--confidence", help="Updated confidence (high/medium/low)")
    ] = None,
) -> None:
    """연습 기록 (마지막 연습 시각 = 지금)."""
    setup_logger(console_level="WARNING")
    store = open_store()
    level = _parse_confidence(confidence) if confidence else None
    try:
        drill = store.record_practice(drill_id, int(time.time() * 1000), level)
    except DrillNotFoundError:
        console.print(f"[red]Drill not found: {drill_id}[/red]")
        raise typer.Exit(code=1) from None
    console.print(
        f"[green]Recorded practice for #{drill.id} {escape(drill.name)}[/green] "
        f"(confidence: {confidence_markup(drill.confidence)})"
    )


@app.command()
def pick(
    category: Annotated[
        str | None, typer.Option("--category", "-c", help="Pick only from this category")
    ] = None,
    skip: Annotated[
        int, typer.Option("--skip", "-s", min=0, help="Skip this many suggestions first")
    ] = 0,
    seed: Annotated[int | None, typer.Option("--seed", help="Random seed")] = None,
) -> None:
    """가중치 랜덤 drill 미리보기."""
    setup_logger(console_level="WARNING")
    store = open_store()
    selector = DrillSelector(store.list_drills(category), make_rng(seed))

    drill = selector.select_initial()
    for _ in range(skip):
        if drill is None:
            break
        console.print(f"[dim]Skipped: {escape(drill.name)}[/dim]")
        drill = selector.select_next()

    if drill is None:
        console.print("[yellow]No drills available to pick.[/yellow]")
        raise typer.Exit(code=1)

    console.print(
        f"[bold]Next drill:[/bold] #{drill.id} {escape(drill.name)} "
        f"({confidence_markup(drill.confidence)})"
    )
