"""DrillSelector — 가중치 기반 랜덤 drill 선택기.

새 drill은 절대 우선권을 가지며 균등 추출하고, 그 외에는
``1 + confidence + recency`` 가중치의 누적 분포에서 추출합니다.
``select_next()``는 직전에 고른 drill을 후보에서 제거한 뒤 다시 추출하므로
같은 drill이 연달아 나오지 않으며, 후보가 소진되면 None을 반환합니다.

Rules Applied:
    - #10 Python Standards: type hints, Protocol injection
"""

from __future__ import annotations

import bisect
import threading
import time
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from defense_drill.models.drill import Drill
    from defense_drill.selection.random_source import RandomSource

ONE_WEEK_MILLIS = 7 * 24 * 60 * 60 * 1000


def _system_millis() -> int:
    return int(time.time() * 1000)


def recency_factor(last_drilled: int, now_millis: int) -> int:
    """마지막 연습 이후 경과 시간 가중치.

    연습한 적 없거나 (0) 미래 시각이면 0. 그 외에는 경과 millis를
    1주일로 나눈 나머지이므로 가중치 상한은 1주일 분량입니다.

    Args:
        last_drilled: 마지막 연습 시각 (epoch millis)
        now_millis: 현재 시각 (epoch millis)

    Returns:
        0 이상의 정수 가중치
    """
    if last_drilled <= 0:
        return 0
    elapsed = now_millis - last_drilled
    if elapsed < 0:
        return 0
    return elapsed % ONE_WEEK_MILLIS


def drill_weight(drill: Drill, now_millis: int) -> int:
    """Drill 하나의 선택 가중치 (항상 1 이상)."""
    return drill.weight_base + recency_factor(drill.last_drilled, now_millis)


class DrillSelector:
    """Stateful weighted drill selector.

    인스턴스마다 독립된 working pool(id → Drill)을 소유합니다.
    모든 public 연산은 인스턴스 lock으로 상호 배제됩니다.
    스케줄링 주기마다 새 인스턴스를 만드는 것이 저렴합니다.

    Args:
        drills: 후보 drill 목록 (None 항목 허용, 자격 필터링은 호출자 책임)
        rng: RandomSource (시드 고정 가능)
        clock: epoch millis 반환 함수 (recency 계산용)
    """

    def __init__(
        self,
        drills: Iterable[Drill | None],
        rng: RandomSource,
        *,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self._original: tuple[Drill | None, ...] = tuple(drills)
        self._rng = rng
        self._clock = clock or _system_millis
        self._lock = threading.Lock()
        self._pool: dict[int, Drill] = _build_pool(self._original)
        self._last_selected_id: int | None = None

    @property
    def remaining(self) -> int:
        """현재 working pool 크기."""
        with self._lock:
            return len(self._pool)

    @property
    def last_selected_id(self) -> int | None:
        with self._lock:
            return self._last_selected_id

    def select_initial(self) -> Drill | None:
        """Pool에서 drill 하나를 추출 (제거 없음)."""
        with self._lock:
            return self._select()

    def select_next(self) -> Drill | None:
        """직전 선택을 pool에서 제거한 뒤 새 drill 추출.

        Returns:
            직전과 다른 drill, pool이 소진되면 None
        """
        with self._lock:
            if self._last_selected_id is not None:
                self._pool.pop(self._last_selected_id, None)
            return self._select()

    def reset_skipped(self) -> None:
        """Skip된 drill을 모두 pool에 복원."""
        with self._lock:
            self._pool = _build_pool(self._original)
            self._last_selected_id = None
            logger.debug("DrillSelector reset ({} drills)", len(self._pool))

    def _select(self) -> Drill | None:
        drill_id = self._draw_id()
        self._last_selected_id = drill_id
        if drill_id is None:
            return None
        return self._pool[drill_id]

    def _draw_id(self) -> int | None:
        if not self._pool:
            return None

        new_ids: list[int] = []
        other_ids: list[int] = []
        cumulative: list[int] = []
        total_weight = 0
        now_millis = self._clock()

        for drill_id, drill in self._pool.items():
            if drill.is_new_drill:
                new_ids.append(drill_id)
                continue
            total_weight += drill_weight(drill, now_millis)
            other_ids.append(drill_id)
            cumulative.append(total_weight)

        # 새 drill은 가중치 경쟁 없이 균등 추출
        if new_ids:
            return new_ids[self._rng.next_long(0, len(new_ids))]

        if not other_ids:
            return None

        drawn = self._rng.next_long(0, total_weight)
        # drill i owns [cumulative[i-1], cumulative[i])
        index = bisect.bisect_right(cumulative, drawn)
        if index >= len(other_ids):
            logger.warning(
                "Weighted draw did not resolve (drawn={}, total={})", drawn, total_weight
            )
            return None
        return other_ids[index]


def _build_pool(drills: Iterable[Drill | None]) -> dict[int, Drill]:
    """None 제거 + id 기준 dict (중복 id는 마지막 항목 우선)."""
    return {drill.id: drill for drill in drills if drill is not None}
