"""Weekly hour policy 모델.

주(week)의 각 시간(0-167)마다 simulated attack 빈도를 지정하는 정책과
빈도별 ±20% 랜덤 윈도우를 정의합니다.

Rules Applied:
    - #11 Pydantic Modeling: frozen=True, Field constraints
    - #10 Python Standards: StrEnum, property
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

HOURS_PER_DAY = 24
DAYS_PER_WEEK = 7
HOURS_PER_WEEK = HOURS_PER_DAY * DAYS_PER_WEEK
MAX_WEEKLY_HOUR = HOURS_PER_WEEK - 1

_MILLIS_PER_MINUTE = 60 * 1000
_LOWER_BOUND_RATIO = 0.8
_UPPER_BOUND_RATIO = 1.2


class Frequency(StrEnum):
    """Simulated attack 빈도.

    NO_ATTACKS는 모든 스케줄링에서 제외되는 sentinel입니다.
    """

    NO_ATTACKS = "no_attacks"
    ONCE_PER_15_MINUTES = "once_per_15_minutes"
    ONCE_PER_30_MINUTES = "once_per_30_minutes"
    ONCE_PER_1_HOUR = "once_per_1_hour"
    ONCE_PER_90_MINUTES = "once_per_90_minutes"
    ONCE_PER_2_HOURS = "once_per_2_hours"
    ONCE_PER_3_HOURS = "once_per_3_hours"
    ONCE_PER_4_HOURS = "once_per_4_hours"
    ONCE_PER_6_HOURS = "once_per_6_hours"
    ONCE_PER_12_HOURS = "once_per_12_hours"

    @property
    def nominal_minutes(self) -> int:
        return _NOMINAL_MINUTES[self]

    @property
    def minimum_hours_needed(self) -> int:
        """이 빈도를 담을 수 있는 정책의 최소 시간 수."""
        return _MINIMUM_HOURS_NEEDED[self]

    @property
    def lower_bound_millis(self) -> int:
        """다음 알람까지 최소 지연 (명목 간격 × 0.8, 절사)."""
        if self is Frequency.NO_ATTACKS:
            return -1
        return int(self.nominal_minutes * _MILLIS_PER_MINUTE * _LOWER_BOUND_RATIO)

    @property
    def upper_bound_millis(self) -> int:
        """다음 알람까지 최대 지연 (명목 간격 × 1.2, 절사)."""
        if self is Frequency.NO_ATTACKS:
            return -1
        return int(self.nominal_minutes * _MILLIS_PER_MINUTE * _UPPER_BOUND_RATIO)

    @property
    def is_schedulable(self) -> bool:
        return self is not Frequency.NO_ATTACKS


_NOMINAL_MINUTES: dict[Frequency, int] = {
    Frequency.NO_ATTACKS: -1,
    Frequency.ONCE_PER_15_MINUTES: 15,
    Frequency.ONCE_PER_30_MINUTES: 30,
    Frequency.ONCE_PER_1_HOUR: 60,
    Frequency.ONCE_PER_90_MINUTES: 90,
    Frequency.ONCE_PER_2_HOURS: 2 * 60,
    Frequency.ONCE_PER_3_HOURS: 3 * 60,
    Frequency.ONCE_PER_4_HOURS: 4 * 60,
    Frequency.ONCE_PER_6_HOURS: 6 * 60,
    Frequency.ONCE_PER_12_HOURS: 12 * 60,
}

_MINIMUM_HOURS_NEEDED: dict[Frequency, int] = {
    Frequency.NO_ATTACKS: -1,
    Frequency.ONCE_PER_15_MINUTES: 1,
    Frequency.ONCE_PER_30_MINUTES: 1,
    Frequency.ONCE_PER_1_HOUR: 1,
    Frequency.ONCE_PER_90_MINUTES: 2,
    Frequency.ONCE_PER_2_HOURS: 2,
    Frequency.ONCE_PER_3_HOURS: 3,
    Frequency.ONCE_PER_4_HOURS: 4,
    Frequency.ONCE_PER_6_HOURS: 6,
    Frequency.ONCE_PER_12_HOURS: 12,
}


class WeeklyHourPolicy(BaseModel):
    """한 weekly hour에 대한 정책.

    같은 policy_name을 공유하는 여러 시간이 하나의 정책(윈도우)을 구성합니다.

    Attributes:
        weekly_hour: 0 = 일요일 00:00 (로컬), 1시간 단위 증가, 167 = 토요일 23:00
        policy_name: 정책 이름 (활성 시 비어있지 않음)
        frequency: 알람 빈도
        active: 활성 여부
    """

    model_config = ConfigDict(frozen=True)

    weekly_hour: int = Field(ge=0, le=MAX_WEEKLY_HOUR)
    policy_name: str = ""
    frequency: Frequency = Frequency.NO_ATTACKS
    active: bool = False

    @property
    def is_schedulable(self) -> bool:
        """스케줄링 대상 여부 (활성 + 이름 있음 + NO_ATTACKS 아님)."""
        return self.active and bool(self.policy_name) and self.frequency.is_schedulable

    @classmethod
    def default(cls, weekly_hour: int) -> WeeklyHourPolicy:
        """'삭제'된 시간의 기본값 (비활성, NO_ATTACKS, 이름 없음)."""
        return cls(weekly_hour=weekly_hour)
