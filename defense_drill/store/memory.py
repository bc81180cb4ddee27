"""In-memory drill / weekly policy store.

- Drill: list_drills, get_drill, add_drill, record_practice, list_categories
- Policy: list_all_policies, list_active_weekly_policies, insert_policies,
  delete_policies, populate_default_policies, policies_by_name
- Policy group: save_policy_group, set_policy_active, remove_policy

모든 연산은 인스턴스 RLock으로 직렬화됩니다. YamlDrillStore는 변경 후
``_persist()`` 훅에서 파일로 기록합니다.
"""

from __future__ import annotations

import threading
from collections import defaultdict
from typing import TYPE_CHECKING

from pydantic import ValidationError

from defense_drill.core.exceptions import (
    DrillNotFoundError,
    PolicyNotFoundError,
    PolicyValidationError,
)
from defense_drill.core.logger import get_context_logger
from defense_drill.models.policy import HOURS_PER_WEEK, Frequency, WeeklyHourPolicy

if TYPE_CHECKING:
    from collections.abc import Iterable

    from defense_drill.models.drill import Confidence, Drill


class InMemoryDrillStore:
    """메모리 기반 DrillStore 구현.

    Args:
        drills: 초기 drill 목록
        policies: 초기 weekly hour 정책 (weekly_hour 기준 upsert)
    """

    def __init__(
        self,
        drills: Iterable[Drill] = (),
        policies: Iterable[WeeklyHourPolicy] = (),
    ) -> None:
        self._lock = threading.RLock()
        self._drills: dict[int, Drill] = {d.id: d for d in drills}
        self._policies: dict[int, WeeklyHourPolicy] = {p.weekly_hour: p for p in policies}

    # ─── Drills ──────────────────────────────────────────────────────

    def list_drills(self, category: str | None = None, *, known_only: bool = True) -> list[Drill]:
        """카테고리 / known 필터 적용 drill 목록 (id 순)."""
        with self._lock:
            drills = sorted(self._drills.values(), key=lambda d: d.id)
        if category is not None:
            drills = [d for d in drills if d.in_category(category)]
        if known_only:
            drills = [d for d in drills if d.is_known_drill]
        return drills

    def get_drill(self, drill_id: int) -> Drill:
        with self._lock:
            drill = self._drills.get(drill_id)
        if drill is None:
            msg = "Drill not found"
            raise DrillNotFoundError(msg, context={"drill_id": drill_id})
        return drill

    def add_drill(self, drill: Drill) -> Drill:
        """Drill 추가 또는 교체. id가 0이면 다음 id를 할당."""
        with self._lock:
            if drill.id == 0:
                next_id = max(self._drills, default=0) + 1
                drill = drill.model_copy(update={"id": next_id})
            self._drills[drill.id] = drill
            self._persist()
        get_context_logger(drill_id=drill.id, operation="add_drill").info(
            "Drill saved: #{} {}", drill.id, drill.name
        )
        return drill

    def record_practice(
        self,
        drill_id: int,
        at_millis: int,
        confidence: Confidence | None = None,
    ) -> Drill:
        """연습 기록 (last_drilled 갱신, new 플래그 해제, 숙련도 갱신)."""
        with self._lock:
            updated = self.get_drill(drill_id).practiced(at_millis, confidence)
            self._drills[drill_id] = updated
            self._persist()
        get_context_logger(drill_id=drill_id, operation="practice").info(
            "Practice recorded: #{} confidence={}", drill_id, updated.confidence.name
        )
        return updated

    def list_categories(self) -> list[str]:
        with self._lock:
            names = {c for d in self._drills.values() for c in d.categories}
        return sorted(names)

    # ─── Policies ────────────────────────────────────────────────────

    def list_all_policies(self) -> list[WeeklyHourPolicy]:
        with self._lock:
            return [self._policies[h] for h in sorted(self._policies)]

    def list_active_weekly_policies(self) -> list[WeeklyHourPolicy]:
        return [p for p in self.list_all_policies() if p.active]

    def insert_policies(self, *policies: WeeklyHourPolicy) -> int:
        """weekly_hour 기준 생성 또는 갱신. 기록된 개수 반환."""
        with self._lock:
            for policy in policies:
                self._policies[policy.weekly_hour] = policy
            self._persist()
        return len(policies)

    def delete_policies(self, *weekly_hours: int) -> int:
        """정책 '삭제' = 해당 시간을 기본값 (비활성, NO_ATTACKS, 이름 없음)으로 초기화."""
        return self.insert_policies(*(WeeklyHourPolicy.default(h) for h in weekly_hours))

    def populate_default_policies(self) -> int:
        """168개 weekly hour 전체를 기본값으로 채움."""
        return self.insert_policies(*(WeeklyHourPolicy.default(h) for h in range(HOURS_PER_WEEK)))

    def policies_by_name(self) -> dict[str, list[WeeklyHourPolicy]]:
        """정책 이름 → 해당 시간 목록 (이름 순, 시간 오름차순)."""
        grouped: dict[str, list[WeeklyHourPolicy]] = defaultdict(list)
        for policy in self.list_all_policies():
            if policy.policy_name:
                grouped[policy.policy_name].append(policy)
        return {name: grouped[name] for name in sorted(grouped)}

    # ─── Policy groups ───────────────────────────────────────────────

    def save_policy_group(
        self,
        name: str,
        weekly_hours: Iterable[int],
        frequency: Frequency,
        *,
        replacing: str | None = None,
        active: bool = True,
    ) -> list[WeeklyHourPolicy]:
        """이름이 같은 weekly hour 묶음을 하나의 정책으로 저장.

        Args:
            name: 정책 이름
            weekly_hours: 정책이 덮는 weekly hour 목록
            frequency: 알람 빈도 (NO_ATTACKS 불가)
            replacing: 수정 대상 기존 정책 이름 (None이면 신규 생성)
            active: 활성 여부

        Returns:
            저장된 정책 목록 (시간 오름차순)

        Raises:
            PolicyValidationError: 이름 누락 / 시간 충돌 / 최소 시간 미달
            PolicyNotFoundError: replacing 정책이 존재하지 않음
        """
        name = name.strip()
        hours = sorted(set(weekly_hours))
        self._validate_group(name, hours, frequency)

        try:
            policies = [
                WeeklyHourPolicy(
                    weekly_hour=hour, policy_name=name, frequency=frequency, active=active
                )
                for hour in hours
            ]
        except ValidationError as exc:
            msg = "Invalid weekly hour"
            raise PolicyValidationError(msg, context={"policy": name, "hours": hours}) from exc

        with self._lock:
            existing = self.policies_by_name()
            if replacing is not None and replacing not in existing:
                msg = "Policy to update does not exist"
                raise PolicyNotFoundError(msg, context={"policy": replacing})
            if name in existing and name != replacing:
                msg = "Policy name already in use"
                raise PolicyValidationError(msg, context={"policy": name})

            owners = {
                p.weekly_hour: p.policy_name for p in self.list_all_policies() if p.policy_name
            }
            conflicts = sorted(
                {owners[h] for h in hours if owners.get(h) not in (None, name, replacing)}
            )
            if conflicts:
                msg = "Weekly hours already belong to another policy"
                raise PolicyValidationError(msg, context={"policy": name, "conflicts": conflicts})

            if replacing is not None:
                removed = [p.weekly_hour for p in existing[replacing] if p.weekly_hour not in hours]
                if removed:
                    self.delete_policies(*removed)

            self.insert_policies(*policies)

        get_context_logger(policy=name, operation="save_policy_group").info(
            "Policy '{}' saved ({} hours, {})", name, len(policies), frequency
        )
        return policies

    def set_policy_active(self, name: str, active: bool) -> list[WeeklyHourPolicy]:
        with self._lock:
            group = self.policies_by_name().get(name)
            if group is None:
                msg = "Policy not found"
                raise PolicyNotFoundError(msg, context={"policy": name})
            updated = [p.model_copy(update={"active": active}) for p in group]
            self.insert_policies(*updated)
        return updated

    def remove_policy(self, name: str) -> int:
        with self._lock:
            group = self.policies_by_name().get(name)
            if group is None:
                msg = "Policy not found"
                raise PolicyNotFoundError(msg, context={"policy": name})
            return self.delete_policies(*(p.weekly_hour for p in group))

    @staticmethod
    def _validate_group(name: str, hours: list[int], frequency: Frequency) -> None:
        if not name:
            msg = "Policy name must not be empty"
            raise PolicyValidationError(msg)
        if not hours:
            msg = "Policy must cover at least one weekly hour"
            raise PolicyValidationError(msg, context={"policy": name})
        if not frequency.is_schedulable:
            msg = "Policy frequency must allow attacks"
            raise PolicyValidationError(msg, context={"policy": name})
        if len(hours) < frequency.minimum_hours_needed:
            msg = "Policy window is shorter than its frequency"
            raise PolicyValidationError(
                msg,
                context={
                    "policy": name,
                    "hours": len(hours),
                    "minimum_hours": frequency.minimum_hours_needed,
                },
            )

    def _persist(self) -> None:
        """변경 후 훅 (메모리 저장소는 no-op)."""
