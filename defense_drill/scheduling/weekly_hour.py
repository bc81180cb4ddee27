"""Weekly hour 변환 유틸리티.

Weekly hour는 0(일요일 00:00 로컬)부터 1시간 단위로 증가하여 167(토요일 23:00)까지
순환하는 주 단위 시간 슬롯입니다. 모든 함수는 epoch millis와 tzinfo를 받으며,
tz가 None이면 시스템 로컬 시간을 사용합니다.
"""

from __future__ import annotations

from datetime import datetime, time, timedelta, tzinfo

from defense_drill.core.exceptions import InvariantViolationError
from defense_drill.models.policy import DAYS_PER_WEEK, HOURS_PER_DAY, MAX_WEEKLY_HOUR

# Python weekday() (월=0) → 일요일 기준 요일 (일=0)
_SUNDAY_BASED_DAY: dict[int, int] = {
    0: 1,  # Monday
    1: 2,
    2: 3,
    3: 4,
    4: 5,
    5: 6,
    6: 0,  # Sunday
}


def to_local(millis: int, tz: tzinfo | None = None) -> datetime:
    """Epoch millis → 로컬 datetime (tz가 None이면 naive 로컬)."""
    return datetime.fromtimestamp(millis / 1000, tz=tz)


def to_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def day_of_week(moment: datetime) -> int:
    """일요일=0 .. 토요일=6."""
    day = _SUNDAY_BASED_DAY.get(moment.weekday())
    if day is None:
        msg = "Unmapped calendar day"
        raise InvariantViolationError(msg, context={"weekday": moment.weekday()})
    return day


def validate_weekly_hour(weekly_hour: int) -> int:
    if not 0 <= weekly_hour <= MAX_WEEKLY_HOUR:
        msg = "Weekly hour out of range"
        raise InvariantViolationError(msg, context={"weekly_hour": weekly_hour})
    return weekly_hour


def weekly_hour_of(millis: int, tz: tzinfo | None = None) -> int:
    """Epoch millis가 속한 weekly hour."""
    moment = to_local(millis, tz)
    return validate_weekly_hour(day_of_week(moment) * HOURS_PER_DAY + moment.hour)


def next_occurrence_start(
    now_millis: int,
    weekly_hour: int,
    tz: tzinfo | None = None,
    *,
    after_current_hour: bool = False,
) -> int:
    """weekly_hour의 다음 (오늘 포함) 발생 시각, 정시로 절사.

    기본적으로 현재 시간 슬롯 자체도 '오늘' 발생으로 간주하여 그 시작 시각을
    반환합니다. after_current_hour=True이면 현재 슬롯은 다음 주 발생으로 넘깁니다.

    Args:
        now_millis: 기준 시각 (epoch millis)
        weekly_hour: 대상 weekly hour (0-167)
        tz: 타임존 (None이면 시스템 로컬)
        after_current_hour: 현재 시간 슬롯을 제외할지 여부

    Returns:
        대상 시간 슬롯 시작 시각 (epoch millis)
    """
    validate_weekly_hour(weekly_hour)
    now = to_local(now_millis, tz)
    target_day, target_hour = divmod(weekly_hour, HOURS_PER_DAY)

    days_ahead = (target_day - day_of_week(now)) % DAYS_PER_WEEK
    passed = target_hour <= now.hour if after_current_hour else target_hour < now.hour
    if days_ahead == 0 and passed:
        days_ahead = DAYS_PER_WEEK

    target_date = now.date() + timedelta(days=days_ahead)
    start = datetime.combine(target_date, time(hour=target_hour), tzinfo=tz)
    return to_millis(start)
