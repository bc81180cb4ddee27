"""PolicyScheduler — weekly hour 정책 기반 다음 알람 시각 계산.

상태가 없는 순수 계산기이므로 여러 스레드에서 동시에 호출해도 안전합니다.
난수만 주입된 RandomSource에서 가져옵니다.

알고리즘 개요:
    1. 비활성 / 이름 없음 / NO_ATTACKS 정책 제외 → 비면 None
    2. weekly_hour 기준 중복 제거 + 오름차순 정렬
    3. 현재 weekly hour가 마지막 정책 이후면 첫 정책 윈도우 시작에서 추출 (다음 주)
    4. 현재 시간이 정책에 없으면 다음 정책 윈도우 시작에서 추출
    5. 현재 시간이 정책에 있으면 now + [lower, upper) 후보를 만들고,
       후보가 다른 시간으로 넘어가면 사이 구간 (주 경계 순환 포함)의 공백 / 빈도 변경을 검사
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from defense_drill.models.policy import HOURS_PER_WEEK
from defense_drill.scheduling.weekly_hour import (
    next_occurrence_start,
    validate_weekly_hour,
    weekly_hour_of,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from datetime import tzinfo

    from defense_drill.models.policy import WeeklyHourPolicy
    from defense_drill.selection.random_source import RandomSource


def active_sorted_policies(policies: Iterable[WeeklyHourPolicy]) -> list[WeeklyHourPolicy]:
    """스케줄 가능한 정책만 남기고 weekly_hour 기준 중복 제거 + 정렬.

    같은 weekly_hour가 여러 번 나오면 먼저 나온 항목을 유지합니다.
    """
    by_hour: dict[int, WeeklyHourPolicy] = {}
    for policy in policies:
        if not policy.is_schedulable:
            continue
        validate_weekly_hour(policy.weekly_hour)
        by_hour.setdefault(policy.weekly_hour, policy)
    return [by_hour[hour] for hour in sorted(by_hour)]


class PolicyScheduler:
    """Weekly policy → 다음 알람 절대 시각 (epoch millis).

    Args:
        rng: RandomSource (시드 고정 가능)
        tz: weekly hour 계산 타임존 (None이면 시스템 로컬)
    """

    def __init__(self, rng: RandomSource, *, tz: tzinfo | None = None) -> None:
        self._rng = rng
        self._tz = tz

    def compute_next_alarm(
        self,
        now_millis: int,
        policies: Iterable[WeeklyHourPolicy],
    ) -> int | None:
        """다음 알람 시각 계산.

        Args:
            now_millis: 현재 시각 (epoch millis)
            policies: weekly hour 정책 스냅샷 (비활성 포함 가능)

        Returns:
            다음 알람 시각 (epoch millis), 활성 정책이 없으면 None

        Raises:
            InvariantViolationError: weekly hour / 요일 매핑 불변식 위반
        """
        ordered = active_sorted_policies(policies)
        if not ordered:
            return None

        current = weekly_hour_of(now_millis, self._tz)

        if current > ordered[-1].weekly_hour:
            return self._window_start_draw(now_millis, ordered[0])

        index, policy = next(
            (i, p) for i, p in enumerate(ordered) if p.weekly_hour >= current
        )
        if policy.weekly_hour > current:
            return self._window_start_draw(now_millis, policy)

        frequency = policy.frequency
        candidate = now_millis + self._rng.next_long(
            frequency.lower_bound_millis, frequency.upper_bound_millis
        )
        return self._resolve_candidate(now_millis, candidate, current, index, ordered)

    def _resolve_candidate(
        self,
        now_millis: int,
        candidate: int,
        current: int,
        index: int,
        ordered: Sequence[WeeklyHourPolicy],
    ) -> int:
        """후보 시각이 다른 weekly hour로 넘어간 경우 사이 정책을 검사.

        사이 시간은 168로 순환하며 검사하므로 토요일 23시 → 일요일 0시로
        이어지는 정책도 연속 구간으로 취급합니다. 연속이 끊기면 후보가 마지막
        정책 이후에 있을 때는 첫 정책, 아니면 끊긴 지점의 정책 윈도우에서 추출합니다.
        """
        new_hour = weekly_hour_of(candidate, self._tz)
        if new_hour == current:
            return candidate
        # 토요일 23시를 넘겨 다음 주로 넘어간 경우 168 이상으로 펼침
        if new_hour < current:
            new_hour += HOURS_PER_WEEK
        wraps = new_hour > ordered[-1].weekly_hour

        frequency = ordered[index].frequency
        for offset, hour in enumerate(range(current + 1, new_hour + 1), start=1):
            covering = ordered[(index + offset) % len(ordered)]
            if covering.weekly_hour != hour % HOURS_PER_WEEK:
                # 공백 시간: 다음 정책 윈도우 시작으로
                logger.debug("Gap at weekly hour {} before policy '{}'", hour, covering.policy_name)
                return self._window_start_draw(now_millis, ordered[0] if wraps else covering)
            if covering.frequency != frequency:
                logger.debug(
                    "Frequency changes at weekly hour {} ({} -> {})",
                    hour,
                    frequency,
                    covering.frequency,
                )
                return self._window_start_draw(now_millis, ordered[0] if wraps else covering)

        return candidate

    def _window_start_draw(self, now_millis: int, policy: WeeklyHourPolicy) -> int:
        """정책 윈도우 시작 시각 + [0, upper) (하한 없음).

        현재 시간 슬롯이 대상이면 (후보가 한 바퀴 돈 경우) 다음 주 발생을 사용합니다.
        """
        start = next_occurrence_start(
            now_millis, policy.weekly_hour, self._tz, after_current_hour=True
        )
        return start + self._rng.next_long(0, policy.frequency.upper_bound_millis)
