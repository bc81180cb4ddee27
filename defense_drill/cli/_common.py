"""CLI 공용 헬퍼: 설정 기반 저장소 / RNG 생성."""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.markup import escape

from defense_drill.config.settings import get_settings
from defense_drill.core.exceptions import StoreError
from defense_drill.selection.random_source import SeededRandom
from defense_drill.store.yaml_store import YamlDrillStore

if TYPE_CHECKING:
    from collections.abc import Callable

console = Console()

_DERIVED_SEED_SPACE = 2**32


def open_store() -> YamlDrillStore:
    """설정된 YAML 파일로 저장소 열기 (파일 손상 시 exit 1)."""
    settings = get_settings()
    try:
        return YamlDrillStore(path=settings.data_file)
    except StoreError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from None


def make_rng(seed: int | None) -> SeededRandom:
    """CLI 옵션 시드 우선, 없으면 설정 시드."""
    return SeededRandom(seed if seed is not None else get_settings().random_seed)


def make_rng_factory(seed: int | None) -> Callable[[], SeededRandom]:
    """호출마다 새 SeededRandom 생성. 시드가 있으면 파생 시드 순서도 재현됨."""
    seeds = make_rng(seed)
    return lambda: SeededRandom(seeds.next_long(0, _DERIVED_SEED_SPACE))
