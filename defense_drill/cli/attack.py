"""Typer CLI for simulated attacks.

Commands:
    - next: 현재 정책 기준 다음 알람 시각 미리보기
    - fire: 즉시 simulated attack 1회 (다음 알람 계산 포함)
    - run: asyncio 알람 루프 실행 (Ctrl+C로 종료)
"""

from __future__ import annotations

import asyncio
import contextlib
from typing import TYPE_CHECKING, Annotated

import typer
from loguru import logger

from defense_drill.attack.coordinator import AttackCoordinator
from defense_drill.cli._common import console, make_rng, make_rng_factory, open_store
from defense_drill.config.settings import get_settings
from defense_drill.core.logger import setup_logger, setup_logger_from_config
from defense_drill.notification.console import ConsoleAlertChannel
from defense_drill.notification.formatters import format_alarm_time
from defense_drill.scheduling.policy_scheduler import PolicyScheduler
from defense_drill.scheduling.timer import AsyncioAlarmTimer, system_clock_millis

if TYPE_CHECKING:
    from defense_drill.scheduling.timer import AlarmTimer
    from defense_drill.store.base import DrillStore

app = typer.Typer(no_args_is_help=True)


class _NoopTimer:
    """일회성 명령용 타이머 (arm 시각만 기록)."""

    def __init__(self) -> None:
        self.armed_at: int | None = None

    def arm_absolute(self, at_millis: int, token: str, callback: object) -> None:
        self.armed_at = at_millis

    def cancel(self, token: str) -> None:
        self.armed_at = None


def _build_coordinator(
    store: DrillStore,
    timer: AlarmTimer,
    seed: int | None,
) -> AttackCoordinator:
    settings = get_settings()
    return AttackCoordinator(
        store=store,
        scheduler=PolicyScheduler(make_rng(seed), tz=settings.get_tzinfo()),
        timer=timer,
        alert=ConsoleAlertChannel(console),
        rng_factory=make_rng_factory(seed),
        is_enabled=lambda: get_settings().simulated_attacks_enabled,
        category=settings.self_defense_category,
    )


@app.command(name="next")
def next_alarm(
    seed: Annotated[int | None, typer.Option("--seed", help="Random seed")] = None,
) -> None:
    """다음 알람 시각 미리보기."""
    settings = get_settings()
    setup_logger(console_level="WARNING")
    store = open_store()
    scheduler = PolicyScheduler(make_rng(seed), tz=settings.get_tzinfo())
    at_millis = scheduler.compute_next_alarm(
        system_clock_millis(), store.list_active_weekly_policies()
    )
    when = format_alarm_time(at_millis, settings.get_tzinfo())
    console.print(f"[bold]Next simulated attack:[/bold] {when}")


@app.command()
def fire(
    seed: Annotated[int | None, typer.Option("--seed", help="Random seed")] = None,
) -> None:
    """Simulated attack 즉시 1회."""
    setup_logger(console_level="WARNING")
    store = open_store()
    timer = _NoopTimer()
    coordinator = _build_coordinator(store, timer, seed)
    drill = coordinator.fire()
    if drill is None:
        console.print("[yellow]No self defense drills available.[/yellow]")
        raise typer.Exit(code=1)

    settings = get_settings()
    if not settings.simulated_attacks_enabled:
        console.print("[yellow]Simulated attacks are disabled, next alarm not armed.[/yellow]")
        return
    when = format_alarm_time(timer.armed_at, settings.get_tzinfo())
    console.print(f"Next simulated attack: {when}")


@app.command()
def run(
    seed: Annotated[int | None, typer.Option("--seed", help="Random seed")] = None,
) -> None:
    """알람 루프 실행 (Ctrl+C로 종료)."""
    setup_logger_from_config()
    if not get_settings().simulated_attacks_enabled:
        console.print(
            "[yellow]Simulated attacks are disabled (DRILL_SIMULATED_ATTACKS_ENABLED).[/yellow]"
        )
        raise typer.Exit(code=1)

    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(_run_loop(seed))


async def _run_loop(seed: int | None) -> None:
    store = open_store()
    timer = AsyncioAlarmTimer(loop=asyncio.get_running_loop())
    coordinator = _build_coordinator(store, timer, seed)

    next_at = coordinator.start()
    when = format_alarm_time(next_at, get_settings().get_tzinfo())
    console.print(f"Next simulated attack: {when}")
    try:
        await asyncio.Event().wait()
    finally:
        coordinator.stop()
        await timer.shutdown()
        logger.info("Simulated attack loop stopped")
