"""Injectable random source.

Drill 선택과 알람 시각 계산에 쓰이는 난수를 주입 가능하게 분리합니다.
테스트에서는 시드 고정 또는 stub으로 결정적으로 재현합니다.
"""

from __future__ import annotations

import random
from typing import Protocol


class RandomSource(Protocol):
    """Protocol for a uniform integer source."""

    def next_long(self, lower: int, upper: int) -> int:
        """Return a uniform integer in ``[lower, upper)``."""
        ...


class SeededRandom:
    """``random.Random`` 기반 RandomSource.

    Args:
        seed: 시드 (None이면 OS 엔트로피)
    """

    def __init__(self, seed: int | None = None) -> None:
        self._random = random.Random(seed)

    def next_long(self, lower: int, upper: int) -> int:
        # 빈 구간은 하한 반환
        if upper <= lower:
            return lower
        return self._random.randrange(lower, upper)
