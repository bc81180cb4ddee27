"""Simulated attack 알림 데이터 모델.

Rules Applied:
    - #11 Pydantic Modeling: frozen=True, ConfigDict
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from defense_drill.models.drill import Confidence, Drill


class AttackAlert(BaseModel):
    """알림 채널에 전달되는 simulated attack.

    Attributes:
        drill_id: 제안 drill ID
        drill_name: 제안 drill 이름
        confidence: 현재 숙련도
        is_new_drill: 처음 노출되는 drill 여부
        issued_at: 발행 시각 (UTC)
    """

    model_config = ConfigDict(frozen=True)

    drill_id: int
    drill_name: str
    confidence: Confidence
    is_new_drill: bool = False
    issued_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def from_drill(cls, drill: Drill, issued_at: datetime | None = None) -> AttackAlert:
        return cls(
            drill_id=drill.id,
            drill_name=drill.name,
            confidence=drill.confidence,
            is_new_drill=drill.is_new_drill,
            issued_at=issued_at or datetime.now(UTC),
        )
