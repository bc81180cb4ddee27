"""DrillStore protocol.

AttackCoordinator와 CLI가 의존하는 저장소 인터페이스입니다.
구현체: InMemoryDrillStore (테스트/임베딩), YamlDrillStore (로컬 파일).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from defense_drill.models.drill import Drill
    from defense_drill.models.policy import WeeklyHourPolicy


class DrillStore(Protocol):
    """AttackCoordinator가 소비하는 최소 저장소 인터페이스."""

    def list_drills(self, category: str | None = None, *, known_only: bool = True) -> list[Drill]:
        """카테고리 필터 (None이면 전체) + 선택 가능 drill 목록."""
        ...

    def list_active_weekly_policies(self) -> list[WeeklyHourPolicy]:
        """활성 weekly hour 정책 스냅샷."""
        ...
