"""Shared fixtures for tests.

이 모듈은 테스트에서 공통으로 사용되는 픽스처를 제공합니다.

Rules Applied:
    - #17 Testing Standards: Pytest fixtures, deterministic clocks / RNG stubs
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from loguru import logger

from defense_drill.config.settings import CATEGORY_NAME_SELF_DEFENSE, clear_settings_cache
from defense_drill.logging.context import clear_context
from defense_drill.models.drill import Confidence, Drill

# ---------------------------------------------------------------------------
# 디렉토리 경로 → pytest 마커 자동 매핑
# ---------------------------------------------------------------------------
_DIR_MARKER_MAP: dict[str, str] = {
    "/cli/": "integration",
    "/attack/": "integration",
    "/store/": "integration",
    "/notification/": "unit",
    "/scheduling/": "unit",
    "/selection/": "unit",
    "/core/": "unit",
    "/models/": "unit",
    "/config/": "unit",
    "/logging/": "unit",
}


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """디렉토리 경로 기반 자동 마커 부여."""
    for item in items:
        fspath = str(item.fspath)
        for dir_pattern, marker_name in _DIR_MARKER_MAP.items():
            if dir_pattern in fspath:
                item.add_marker(getattr(pytest.mark, marker_name))
                break


# 2024-01-03 (수요일) 10:30 UTC → weekly hour 82
NOW = datetime(2024, 1, 3, 10, 30, tzinfo=UTC)
ONE_DAY = timedelta(days=1)


def to_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


NOW_MILLIS = to_millis(NOW)


class LowRandom:
    """항상 구간 하한을 반환하는 RandomSource stub."""

    def __init__(self) -> None:
        self.calls: list[tuple[int, int]] = []

    def next_long(self, lower: int, upper: int) -> int:
        self.calls.append((lower, upper))
        return lower


class HighRandom:
    """항상 구간 최댓값 (upper - 1)을 반환하는 RandomSource stub."""

    def __init__(self) -> None:
        self.calls: list[tuple[int, int]] = []

    def next_long(self, lower: int, upper: int) -> int:
        self.calls.append((lower, upper))
        return max(lower, upper - 1)


class FixedRandom:
    """지정한 값을 순서대로 반환하는 RandomSource stub."""

    def __init__(self, *values: int) -> None:
        self._values = list(values)

    def next_long(self, lower: int, upper: int) -> int:
        return self._values.pop(0)


@pytest.fixture(autouse=True)
def _reset_global_state():
    """설정 캐시 / 로깅 컨텍스트 초기화."""
    clear_settings_cache()
    clear_context()
    yield
    clear_settings_cache()
    clear_context()


@pytest.fixture
def log_records() -> list[dict[str, object]]:
    """loguru 레코드 캡처 (message + extra)."""
    records: list[dict[str, object]] = []

    def _sink(message: object) -> None:
        record = message.record  # type: ignore[attr-defined]
        records.append(
            {"level": record["level"].name, "message": record["message"], **record["extra"]}
        )

    handler_id = logger.add(_sink, level="DEBUG")
    yield records
    logger.remove(handler_id)


@pytest.fixture
def fixed_clock():
    """NOW에 고정된 epoch millis 시계."""
    return lambda: NOW_MILLIS


@pytest.fixture
def self_defense_drills() -> list[Drill]:
    """Self Defense 카테고리 drill 3개 (모두 연습 이력 있음)."""
    return [
        Drill(
            id=1,
            name="Rear choke escape",
            confidence=Confidence.HIGH,
            last_drilled=to_millis(NOW - ONE_DAY),
            categories=(CATEGORY_NAME_SELF_DEFENSE,),
        ),
        Drill(
            id=2,
            name="Wrist grab release",
            confidence=Confidence.MEDIUM,
            last_drilled=to_millis(NOW - 2 * ONE_DAY),
            categories=(CATEGORY_NAME_SELF_DEFENSE,),
        ),
        Drill(
            id=3,
            name="Headlock defense",
            confidence=Confidence.LOW,
            last_drilled=to_millis(NOW - 3 * ONE_DAY),
            categories=(CATEGORY_NAME_SELF_DEFENSE, "Grappling"),
        ),
    ]
