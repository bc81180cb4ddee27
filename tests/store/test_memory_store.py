"""InMemoryDrillStore 테스트."""

from __future__ import annotations

import pytest

from defense_drill.core.exceptions import (
    DrillNotFoundError,
    PolicyNotFoundError,
    PolicyValidationError,
)
from defense_drill.models.drill import Confidence, Drill
from defense_drill.models.policy import Frequency, WeeklyHourPolicy
from defense_drill.store.memory import InMemoryDrillStore
from tests.conftest import NOW_MILLIS

SELF_DEFENSE = "Self Defense"


@pytest.fixture
def store(self_defense_drills: list[Drill]) -> InMemoryDrillStore:
    hidden = Drill(id=10, name="Hidden", is_known_drill=False, categories=(SELF_DEFENSE,))
    forms = Drill(id=11, name="Kata", categories=("Forms",))
    return InMemoryDrillStore(drills=[*self_defense_drills, hidden, forms])


class TestDrills:
    def test_list_known_sorted(self, store: InMemoryDrillStore) -> None:
        assert [d.id for d in store.list_drills()] == [1, 2, 3, 11]

    def test_list_by_category(self, store: InMemoryDrillStore) -> None:
        assert [d.id for d in store.list_drills(SELF_DEFENSE)] == [1, 2, 3]
        assert [d.id for d in store.list_drills("Grappling")] == [3]

    def test_list_including_unknown(self, store: InMemoryDrillStore) -> None:
        ids = [d.id for d in store.list_drills(SELF_DEFENSE, known_only=False)]
        assert ids == [1, 2, 3, 10]

    def test_get_missing(self, store: InMemoryDrillStore) -> None:
        with pytest.raises(DrillNotFoundError) as exc_info:
            store.get_drill(999)
        assert exc_info.value.context == {"drill_id": 999}

    def test_add_assigns_next_id(self, store: InMemoryDrillStore) -> None:
        drill = store.add_drill(Drill(id=0, name="Front kick"))
        assert drill.id == 12
        assert drill.is_new_drill
        assert store.get_drill(12).name == "Front kick"

    def test_add_into_empty_store(self) -> None:
        assert InMemoryDrillStore().add_drill(Drill(id=0, name="First")).id == 1

    def test_add_replaces_same_id(self, store: InMemoryDrillStore) -> None:
        store.add_drill(Drill(id=1, name="Renamed"))
        assert store.get_drill(1).name == "Renamed"

    def test_record_practice(self, store: InMemoryDrillStore) -> None:
        store.add_drill(Drill(id=20, name="Fresh"))

        updated = store.record_practice(20, NOW_MILLIS, Confidence.MEDIUM)

        assert updated.last_drilled == NOW_MILLIS
        assert not updated.is_new_drill
        assert updated.confidence is Confidence.MEDIUM
        assert store.get_drill(20) == updated

    def test_record_practice_keeps_confidence(self, store: InMemoryDrillStore) -> None:
        updated = store.record_practice(3, NOW_MILLIS)
        assert updated.confidence is Confidence.LOW

    def test_record_practice_missing(self, store: InMemoryDrillStore) -> None:
        with pytest.raises(DrillNotFoundError):
            store.record_practice(999, NOW_MILLIS)

    def test_practice_log_carries_drill_context(
        self, store: InMemoryDrillStore, log_records: list[dict[str, object]]
    ) -> None:
        store.record_practice(2, NOW_MILLIS)
        record = log_records[-1]
        assert record["drill_id"] == 2
        assert record["operation"] == "practice"

    def test_list_categories(self, store: InMemoryDrillStore) -> None:
        assert store.list_categories() == ["Forms", "Grappling", SELF_DEFENSE]


class TestPolicies:
    def test_populate_defaults(self) -> None:
        store = InMemoryDrillStore()
        assert store.populate_default_policies() == 168

        policies = store.list_all_policies()
        assert [p.weekly_hour for p in policies] == list(range(168))
        assert not any(p.active for p in policies)
        assert store.list_active_weekly_policies() == []

    def test_insert_upserts_by_hour(self) -> None:
        store = InMemoryDrillStore()
        store.insert_policies(WeeklyHourPolicy(weekly_hour=5, policy_name="A", active=True))
        store.insert_policies(WeeklyHourPolicy(weekly_hour=5, policy_name="B", active=True))

        policies = store.list_all_policies()
        assert len(policies) == 1
        assert policies[0].policy_name == "B"

    def test_delete_resets_to_default(self) -> None:
        store = InMemoryDrillStore()
        store.save_policy_group("Morning", [8, 9], Frequency.ONCE_PER_1_HOUR)

        store.delete_policies(8)

        assert store.list_all_policies()[0] == WeeklyHourPolicy.default(8)
        assert [p.weekly_hour for p in store.list_active_weekly_policies()] == [9]

    def test_policies_by_name(self) -> None:
        store = InMemoryDrillStore()
        store.save_policy_group("Zeta", [30, 31], Frequency.ONCE_PER_1_HOUR)
        store.save_policy_group("Alpha", [2, 1], Frequency.ONCE_PER_30_MINUTES)

        groups = store.policies_by_name()
        assert list(groups) == ["Alpha", "Zeta"]
        assert [p.weekly_hour for p in groups["Alpha"]] == [1, 2]


class TestSavePolicyGroup:
    def test_creates_active_policies(self) -> None:
        store = InMemoryDrillStore()

        saved = store.save_policy_group("  Office ", [10, 9, 9, 11], Frequency.ONCE_PER_1_HOUR)

        assert [p.weekly_hour for p in saved] == [9, 10, 11]
        assert all(p.policy_name == "Office" and p.active for p in saved)
        assert store.list_active_weekly_policies() == saved

    def test_save_log_carries_policy_context(self, log_records: list[dict[str, object]]) -> None:
        InMemoryDrillStore().save_policy_group("Office", [9, 10], Frequency.ONCE_PER_1_HOUR)
        assert log_records[-1]["policy"] == "Office"
        assert log_records[-1]["operation"] == "save_policy_group"

    def test_inactive_group(self) -> None:
        store = InMemoryDrillStore()
        store.save_policy_group("Off", [1], Frequency.ONCE_PER_1_HOUR, active=False)
        assert store.list_active_weekly_policies() == []

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_name(self, name: str) -> None:
        with pytest.raises(PolicyValidationError, match="name must not be empty"):
            InMemoryDrillStore().save_policy_group(name, [1], Frequency.ONCE_PER_1_HOUR)

    def test_no_hours(self) -> None:
        with pytest.raises(PolicyValidationError, match="at least one"):
            InMemoryDrillStore().save_policy_group("Empty", [], Frequency.ONCE_PER_1_HOUR)

    def test_no_attacks_frequency(self) -> None:
        with pytest.raises(PolicyValidationError, match="frequency"):
            InMemoryDrillStore().save_policy_group("Quiet", [1], Frequency.NO_ATTACKS)

    def test_window_shorter_than_frequency(self) -> None:
        with pytest.raises(PolicyValidationError) as exc_info:
            InMemoryDrillStore().save_policy_group(
                "Short", [1, 2, 3], Frequency.ONCE_PER_12_HOURS
            )
        assert exc_info.value.context["minimum_hours"] == 12

    def test_invalid_weekly_hour(self) -> None:
        with pytest.raises(PolicyValidationError, match="Invalid weekly hour"):
            InMemoryDrillStore().save_policy_group("Bad", [167, 168], Frequency.ONCE_PER_1_HOUR)

    def test_duplicate_name(self) -> None:
        store = InMemoryDrillStore()
        store.save_policy_group("Office", [9], Frequency.ONCE_PER_1_HOUR)

        with pytest.raises(PolicyValidationError, match="already in use"):
            store.save_policy_group("Office", [20], Frequency.ONCE_PER_1_HOUR)

    def test_hour_conflict(self) -> None:
        store = InMemoryDrillStore()
        store.save_policy_group("Office", [9, 10], Frequency.ONCE_PER_1_HOUR)

        with pytest.raises(PolicyValidationError) as exc_info:
            store.save_policy_group("Gym", [10, 11], Frequency.ONCE_PER_1_HOUR)
        assert exc_info.value.context["conflicts"] == ["Office"]
        assert [p.weekly_hour for p in store.policies_by_name()["Office"]] == [9, 10]

    def test_replace_missing(self) -> None:
        with pytest.raises(PolicyNotFoundError):
            InMemoryDrillStore().save_policy_group(
                "New", [1], Frequency.ONCE_PER_1_HOUR, replacing="Ghost"
            )

    def test_replace_shrinks_and_renames(self) -> None:
        store = InMemoryDrillStore()
        store.save_policy_group("Office", [9, 10, 11], Frequency.ONCE_PER_1_HOUR)

        store.save_policy_group(
            "Work", [10, 11, 12], Frequency.ONCE_PER_30_MINUTES, replacing="Office"
        )

        groups = store.policies_by_name()
        assert list(groups) == ["Work"]
        assert [p.weekly_hour for p in groups["Work"]] == [10, 11, 12]
        assert all(p.frequency is Frequency.ONCE_PER_30_MINUTES for p in groups["Work"])
        # 제외된 9시는 기본값으로 초기화
        nine = next(p for p in store.list_all_policies() if p.weekly_hour == 9)
        assert nine == WeeklyHourPolicy.default(9)

    def test_replace_keeps_name(self) -> None:
        store = InMemoryDrillStore()
        store.save_policy_group("Office", [9, 10], Frequency.ONCE_PER_1_HOUR)
        store.save_policy_group(
            "Office", [9, 10, 11], Frequency.ONCE_PER_1_HOUR, replacing="Office"
        )
        assert len(store.policies_by_name()["Office"]) == 3


class TestPolicyToggles:
    def test_disable_and_enable(self) -> None:
        store = InMemoryDrillStore()
        store.save_policy_group("Office", [9, 10], Frequency.ONCE_PER_1_HOUR)

        store.set_policy_active("Office", False)
        assert store.list_active_weekly_policies() == []

        store.set_policy_active("Office", True)
        assert len(store.list_active_weekly_policies()) == 2

    def test_toggle_missing(self) -> None:
        with pytest.raises(PolicyNotFoundError):
            InMemoryDrillStore().set_policy_active("Ghost", True)

    def test_remove_policy(self) -> None:
        store = InMemoryDrillStore()
        store.save_policy_group("Office", [9, 10], Frequency.ONCE_PER_1_HOUR)

        assert store.remove_policy("Office") == 2
        assert store.policies_by_name() == {}

    def test_remove_missing(self) -> None:
        with pytest.raises(PolicyNotFoundError):
            InMemoryDrillStore().remove_policy("Ghost")
