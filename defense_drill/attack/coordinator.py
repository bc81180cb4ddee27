"""AttackCoordinator — simulated attack 알람 체인 오케스트레이션.

schedule: 기존 알람 취소 → PolicyScheduler로 다음 시각 계산 → (활성 시) 타이머 arm
fire:     self defense drill 조회 → DrillSelector로 1개 선택 → 알림 → schedule

fire 시점에 self defense drill이 하나도 없으면 다음 알람을 다시 arm하지 않고
종료합니다. 일시적으로 카테고리가 비어도 알람 체인 전체가 멈추는 동작이며,
외부에서 start()를 다시 호출해야 재개됩니다.

Rules Applied:
    - #10 Python Standards: Dependency injection, type hints
    - #15 Logging Standards: Context binding per attack cycle
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from defense_drill.config.settings import CATEGORY_NAME_SELF_DEFENSE
from defense_drill.logging.context import generate_cycle_id, get_drill_logger
from defense_drill.scheduling.timer import system_clock_millis
from defense_drill.selection.random_source import SeededRandom
from defense_drill.selection.selector import DrillSelector

if TYPE_CHECKING:
    from collections.abc import Callable

    from defense_drill.models.drill import Drill
    from defense_drill.scheduling.policy_scheduler import PolicyScheduler
    from defense_drill.scheduling.timer import AlarmTimer
    from defense_drill.selection.random_source import RandomSource
    from defense_drill.store.base import DrillStore

ALARM_TOKEN = "simulated_attack"


def _always_enabled() -> bool:
    return True


class AttackCoordinator:
    """Simulated attack 알람 체인 관리자.

    Args:
        store: drill / 정책 저장소
        scheduler: PolicyScheduler
        timer: AlarmTimer (arm_absolute / cancel)
        alert: 선택된 drill을 받는 알림 콜백
        rng_factory: fire마다 새 DrillSelector에 줄 RandomSource 생성 함수
        clock: epoch millis 반환 함수
        is_enabled: 알림 활성화 플래그 조회 함수
        category: simulated attack 대상 카테고리 이름
    """

    def __init__(
        self,
        store: DrillStore,
        scheduler: PolicyScheduler,
        timer: AlarmTimer,
        alert: Callable[[Drill], object],
        *,
        rng_factory: Callable[[], RandomSource] = SeededRandom,
        clock: Callable[[], int] = system_clock_millis,
        is_enabled: Callable[[], bool] = _always_enabled,
        category: str = CATEGORY_NAME_SELF_DEFENSE,
    ) -> None:
        self._store = store
        self._scheduler = scheduler
        self._timer = timer
        self._alert = alert
        self._rng_factory = rng_factory
        self._clock = clock
        self._is_enabled = is_enabled
        self._category = category
        self._lock = threading.Lock()
        self._next_alarm: int | None = None

    @property
    def next_alarm(self) -> int | None:
        """마지막으로 arm한 알람 시각 (없으면 None)."""
        return self._next_alarm

    def start(self) -> int | None:
        """알람 체인 시작 (최초 실행 또는 설정 변경 후)."""
        return self.schedule()

    def stop(self) -> None:
        """Pending 알람 취소."""
        with self._lock:
            self._timer.cancel(ALARM_TOKEN)
            self._next_alarm = None
        get_drill_logger().info("Simulated attacks stopped")

    def schedule(self) -> int | None:
        """기존 알람 취소 후 다음 알람 arm (cancel-then-arm).

        Returns:
            arm한 알람 시각 (epoch millis), arm하지 않았으면 None
        """
        log = get_drill_logger(cycle_id=generate_cycle_id())
        with self._lock:
            self._timer.cancel(ALARM_TOKEN)
            self._next_alarm = None

            next_alarm = self._scheduler.compute_next_alarm(
                self._clock(), self._store.list_active_weekly_policies()
            )
            if next_alarm is None:
                log.info("No active weekly policies, simulated attack not scheduled")
                return None
            if not self._is_enabled():
                log.info("Simulated attacks disabled, alarm not armed")
                return None

            self._timer.arm_absolute(next_alarm, ALARM_TOKEN, self.fire)
            self._next_alarm = next_alarm

        log.info("Next simulated attack armed at {}", next_alarm)
        return next_alarm

    def fire(self) -> Drill | None:
        """알람 콜백: drill 하나를 골라 알림 후 다음 알람 schedule.

        Returns:
            알림으로 보낸 drill (없으면 None)
        """
        log = get_drill_logger(cycle_id=generate_cycle_id())
        drills = self._store.list_drills(self._category)
        if not drills:
            # 다음 알람을 arm하지 않음 (체인 정지)
            log.warning("No drills in category '{}', simulated attacks halted", self._category)
            return None

        selector = DrillSelector(drills, self._rng_factory(), clock=self._clock)
        drill = selector.select_initial()
        if drill is not None:
            self._alert(drill)
            log.bind(drill_id=drill.id).info("Simulated attack sent: {}", drill.name)
        else:
            log.warning("No drill could be selected from {} candidates", len(drills))

        self.schedule()
        return drill
