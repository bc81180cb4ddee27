"""Typer CLI for weekly hour policies.

Commands:
    - list: 정책 목록 (이름별 묶음)
    - set: 정책 생성 / 수정 (--replace)
    - remove: 정책 삭제 (해당 시간 기본값으로 초기화)
    - enable / disable: 정책 활성화 토글
    - populate: 168개 weekly hour 기본값 생성
"""

from __future__ import annotations

from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from defense_drill.cli._common import console, open_store
from defense_drill.core.exceptions import PolicyNotFoundError, PolicyValidationError
from defense_drill.core.logger import setup_logger
from defense_drill.models.policy import HOURS_PER_DAY, MAX_WEEKLY_HOUR, Frequency

app = typer.Typer(no_args_is_help=True)

_DAY_NAMES = ("sun", "mon", "tue", "wed", "thu", "fri", "sat")


def parse_days(text: str) -> list[int]:
    """'mon-fri,sun' → [1, 2, 3, 4, 5, 0]."""
    days: list[int] = []
    for part in text.lower().split(","):
        part = part.strip()
        if not part:
            continue
        first, _, last = part.partition("-")
        if first[:3] not in _DAY_NAMES or (last and last[:3] not in _DAY_NAMES):
            msg = f"Unknown day: {part}"
            raise typer.BadParameter(msg)
        start = _DAY_NAMES.index(first[:3])
        end = _DAY_NAMES.index(last[:3]) if last else start
        if end < start:
            msg = f"Day range must not wrap the week: {part}"
            raise typer.BadParameter(msg)
        days.extend(range(start, end + 1))
    return days


def parse_weekly_hours(text: str) -> list[int]:
    """'0-5,30' → [0, 1, 2, 3, 4, 5, 30]."""
    hours: list[int] = []
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        first, _, last = part.partition("-")
        try:
            start = int(first)
            end = int(last) if last else start
        except ValueError:
            msg = f"Invalid weekly hour: {part}"
            raise typer.BadParameter(msg) from None
        if not 0 <= start <= end <= MAX_WEEKLY_HOUR:
            msg = f"Weekly hours must be within 0-{MAX_WEEKLY_HOUR}: {part}"
            raise typer.BadParameter(msg)
        hours.extend(range(start, end + 1))
    return hours


def _describe_hour(weekly_hour: int) -> str:
    day, hour = divmod(weekly_hour, HOURS_PER_DAY)
    return f"{_DAY_NAMES[day].capitalize()} {hour:02d}:00"


@app.command(name="list")
def list_policies() -> None:
    """정책 목록."""
    setup_logger(console_level="WARNING")
    store = open_store()
    groups = store.policies_by_name()
    if not groups:
        console.print("[yellow]No policies configured.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold", title=f"Policies ({len(groups)})")
    table.add_column("Name", style="bold", min_width=10)
    table.add_column("Frequency", min_width=19)
    table.add_column("Hours", justify="right", width=5)
    table.add_column("From", width=9)
    table.add_column("To", width=9)
    table.add_column("Active", width=6)

    for name, policies in groups.items():
        first, last = policies[0], policies[-1]
        active = all(p.active for p in policies)
        table.add_row(
            name,
            str(first.frequency),
            str(len(policies)),
            _describe_hour(first.weekly_hour),
            _describe_hour(last.weekly_hour),
            "[green]yes[/green]" if active else "[dim]no[/dim]",
        )

    console.print(table)


@app.command(name="set")
def set_policy(
    name: Annotated[str, typer.Argument(help="Policy name")],
    frequency: Annotated[
        str, typer.Option("--frequency", "-f", help="e.g. once_per_30_minutes")
    ],
    hours: Annotated[
        str | None, typer.Option("--hours", help="Weekly hours, e.g. '33-41,57'")
    ] = None,
    days: Annotated[
        str | None, typer.Option("--days", help="Days, e.g. 'mon-fri'")
    ] = None,
    start: Annotated[int, typer.Option("--from", min=0, max=23, help="First hour of day")] = 9,
    end: Annotated[int, typer.Option("--to", min=0, max=23, help="Last hour of day")] = 17,
    replace: Annotated[
        str | None, typer.Option("--replace", help="Existing policy name to update")
    ] = None,
) -> None:
    """정책 생성 또는 수정."""
    try:
        freq = Frequency(frequency)
    except ValueError:
        console.print(f"[red]Invalid frequency: {frequency}[/red]")
        console.print(f"Valid: {', '.join(f.value for f in Frequency if f.is_schedulable)}")
        raise typer.Exit(code=1) from None

    weekly_hours = parse_weekly_hours(hours) if hours else []
    if days:
        if end < start:
            console.print("[red]--to must not be earlier than --from[/red]")
            raise typer.Exit(code=1)
        weekly_hours.extend(
            day * HOURS_PER_DAY + hour for day in parse_days(days) for hour in range(start, end + 1)
        )

    setup_logger(console_level="WARNING")
    store = open_store()
    try:
        saved = store.save_policy_group(name, weekly_hours, freq, replacing=replace)
    except PolicyNotFoundError:
        console.print(f"[red]Policy not found: {replace}[/red]")
        raise typer.Exit(code=1) from None
    except PolicyValidationError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from None

    console.print(f"[green]Saved policy '{name}' ({len(saved)} hours, {freq})[/green]")


@app.command()
def remove(name: Annotated[str, typer.Argument(help="Policy name")]) -> None:
    """정책 삭제."""
    setup_logger(console_level="WARNING")
    store = open_store()
    try:
        count = store.remove_policy(name)
    except PolicyNotFoundError:
        console.print(f"[red]Policy not found: {name}[/red]")
        raise typer.Exit(code=1) from None
    console.print(f"[green]Removed policy '{name}' ({count} hours reset)[/green]")


def _toggle(name: str, active: bool) -> None:
    setup_logger(console_level="WARNING")
    store = open_store()
    try:
        store.set_policy_active(name, active)
    except PolicyNotFoundError:
        console.print(f"[red]Policy not found: {name}[/red]")
        raise typer.Exit(code=1) from None
    state = "enabled" if active else "disabled"
    console.print(f"[green]Policy '{name}' {state}[/green]")


@app.command()
def enable(name: Annotated[str, typer.Argument(help="Policy name")]) -> None:
    """정책 활성화."""
    _toggle(name, True)


@app.command()
def disable(name: Annotated[str, typer.Argument(help="Policy name")]) -> None:
    """정책 비활성화."""
    _toggle(name, False)


@app.command()
def populate() -> None:
    """168개 weekly hour 기본값 생성 (기존 정책 초기화)."""
    setup_logger(console_level="WARNING")
    store = open_store()
    count = store.populate_default_policies()
    console.print(f"[green]Populated {count} default weekly hours[/green]")
