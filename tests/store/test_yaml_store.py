"""YamlDrillStore 테스트."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
import yaml

from defense_drill.core.exceptions import StoreError
from defense_drill.models.drill import Confidence, Drill
from defense_drill.models.policy import Frequency
from defense_drill.store.yaml_store import YamlDrillStore
from tests.conftest import NOW_MILLIS

if TYPE_CHECKING:
    from pathlib import Path

_SAMPLE_YAML = {
    "drills": [
        {
            "id": 1,
            "name": "Rear choke escape",
            "confidence": 4,
            "last_drilled": 1_700_000_000_000,
            "categories": ["Self Defense"],
        },
        {
            "id": 2,
            "name": "Wrist grab release",
            "confidence": 0,
            "categories": ["Self Defense"],
        },
    ],
    "policies": [
        {
            "weekly_hour": 33,
            "policy_name": "Monday morning",
            "frequency": "once_per_30_minutes",
            "active": True,
        },
    ],
}


@pytest.fixture
def data_path(tmp_path: Path) -> Path:
    path = tmp_path / "defense_drill.yaml"
    path.write_text(
        yaml.dump(_SAMPLE_YAML, default_flow_style=False, allow_unicode=True),
        encoding="utf-8",
    )
    return path


class TestLoad:
    def test_loads_drills_and_policies(self, data_path: Path) -> None:
        store = YamlDrillStore(path=data_path)

        drills = store.list_drills("Self Defense")
        assert [d.name for d in drills] == ["Rear choke escape", "Wrist grab release"]
        assert drills[0].confidence is Confidence.LOW
        assert not drills[0].is_new_drill
        # last_drilled 없음 → 새 drill
        assert drills[1].is_new_drill

        policies = store.list_active_weekly_policies()
        assert len(policies) == 1
        assert policies[0].frequency is Frequency.ONCE_PER_30_MINUTES

    def test_missing_file_starts_empty(self, tmp_path: Path) -> None:
        store = YamlDrillStore(path=tmp_path / "missing.yaml")
        assert store.list_drills() == []
        assert store.list_all_policies() == []
        assert not (tmp_path / "missing.yaml").exists()

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert YamlDrillStore(path=path).list_drills() == []

    def test_invalid_content(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text(
            yaml.dump({"policies": [{"weekly_hour": 500, "policy_name": "Bad"}]}),
            encoding="utf-8",
        )
        with pytest.raises(StoreError, match="Invalid drill data file"):
            YamlDrillStore(path=path)


class TestPersist:
    def test_writes_on_change(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "data.yaml"
        store = YamlDrillStore(path=path)

        store.add_drill(Drill(id=0, name="Palm strike", categories=("Self Defense",)))

        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        assert raw["drills"][0]["name"] == "Palm strike"
        assert raw["drills"][0]["categories"] == ["Self Defense"]

    def test_changes_survive_reload(self, data_path: Path) -> None:
        store = YamlDrillStore(path=data_path)
        store.record_practice(2, NOW_MILLIS, Confidence.MEDIUM)
        store.save_policy_group("Evening", [42, 43], Frequency.ONCE_PER_1_HOUR)

        reloaded = YamlDrillStore(path=data_path)
        drill = reloaded.get_drill(2)
        assert drill.last_drilled == NOW_MILLIS
        assert drill.confidence is Confidence.MEDIUM
        assert not drill.is_new_drill
        assert list(reloaded.policies_by_name()) == ["Evening", "Monday morning"]

    def test_unknown_drills_persisted(self, tmp_path: Path) -> None:
        path = tmp_path / "data.yaml"
        store = YamlDrillStore(path=path)
        store.add_drill(Drill(id=5, name="Draft", is_known_drill=False))

        assert YamlDrillStore(path=path).list_drills(known_only=False)[0].name == "Draft"

    def test_frequency_stored_as_value(self, tmp_path: Path) -> None:
        path = tmp_path / "data.yaml"
        YamlDrillStore(path=path).save_policy_group("Night", [1], Frequency.ONCE_PER_1_HOUR)

        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        assert raw["policies"][0]["frequency"] == "once_per_1_hour"

    def test_write_failure_has_note(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        store = YamlDrillStore(path=blocker / "data.yaml")

        with pytest.raises(OSError) as exc_info:
            store.add_drill(Drill(id=0, name="Palm strike"))
        assert any("drill data file" in note for note in exc_info.value.__notes__)

    def test_path_property(self, data_path: Path) -> None:
        assert YamlDrillStore(path=data_path).path == data_path
