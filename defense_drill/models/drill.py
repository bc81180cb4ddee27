"""Drill 데이터 모델.

Rules Applied:
    - #11 Pydantic Modeling: frozen=True, ConfigDict
    - #10 Python Standards: IntEnum, modern typing
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Confidence(IntEnum):
    """Drill 숙련도 (self-assessed).

    값이 클수록 덜 숙련된 drill이며 선택 가중치가 커집니다.
    - HIGH (0): 자신 있음
    - MEDIUM (2): 보통
    - LOW (4): 자신 없음
    """

    HIGH = 0
    MEDIUM = 2
    LOW = 4


class Drill(BaseModel):
    """단일 drill 스냅샷.

    저장소가 소유하며, DrillSelector / AttackCoordinator는 읽기 전용으로 빌려 씁니다.

    Attributes:
        id: 고유 ID (후보 집합 내 유일)
        name: 표시 이름
        confidence: 숙련도 가중치 (0/2/4)
        last_drilled: 마지막 연습 시각 (epoch millis, 0 = 연습한 적 없음)
        is_new_drill: 아직 사용자에게 노출된 적 없는 drill (미지정 시 last_drilled <= 0)
        is_known_drill: 사용자가 알고 있어 선택 대상이 되는 drill
        categories: 카테고리 이름 (외부 참조)
        sub_categories: 서브카테고리 이름 (외부 참조)
        notes: 사용자 메모
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=0)
    name: str = Field(min_length=1)
    confidence: Confidence = Confidence.LOW
    last_drilled: int = Field(default=0, ge=0)
    is_new_drill: bool = False
    is_known_drill: bool = True
    categories: tuple[str, ...] = ()
    sub_categories: tuple[str, ...] = ()
    notes: str = ""

    @model_validator(mode="before")
    @classmethod
    def _default_new_flag(cls, data: Any) -> Any:
        if isinstance(data, dict) and "is_new_drill" not in data:
            return {**data, "is_new_drill": int(data.get("last_drilled") or 0) <= 0}
        return data

    @property
    def weight_base(self) -> int:
        """1 + confidence (모든 drill은 최소 1의 가중치를 가짐)."""
        return 1 + int(self.confidence)

    def in_category(self, category: str) -> bool:
        return category in self.categories

    def practiced(self, at_millis: int, confidence: Confidence | None = None) -> Self:
        """연습 기록을 반영한 새 스냅샷 반환."""
        return self.model_copy(
            update={
                "last_drilled": at_millis,
                "is_new_drill": False,
                "confidence": self.confidence if confidence is None else confidence,
            }
        )
