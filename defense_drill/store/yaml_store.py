"""YAML-based drill / weekly policy store.

data/defense_drill.yaml 단일 파일에 drill과 weekly hour 정책을 저장:

    drills:
      - id: 1
        name: Rear choke escape
        confidence: 4
        last_drilled: 0
        categories: [Self Defense]
    policies:
      - weekly_hour: 9
        policy_name: Weekday mornings
        frequency: once_per_30_minutes
        active: true

파일이 없으면 빈 저장소로 시작하고, 변경될 때마다 전체 파일을 다시 씁니다.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from loguru import logger
from pydantic import BaseModel, ConfigDict, ValidationError

from defense_drill.core.exceptions import StoreError, add_context_note
from defense_drill.models.drill import Drill
from defense_drill.models.policy import WeeklyHourPolicy
from defense_drill.store.memory import InMemoryDrillStore

_DEFAULT_PATH = Path("data/defense_drill.yaml")


class DrillDataFile(BaseModel):
    """YAML 파일 스키마."""

    model_config = ConfigDict(frozen=True)

    drills: list[Drill] = []
    policies: list[WeeklyHourPolicy] = []


class YamlDrillStore(InMemoryDrillStore):
    """YAML 파일 기반 DrillStore.

    Args:
        path: YAML 파일 경로
    """

    def __init__(self, path: Path = _DEFAULT_PATH) -> None:
        self._path = path
        data = _load(path)
        super().__init__(drills=data.drills, policies=data.policies)

    @property
    def path(self) -> Path:
        return self._path

    def _persist(self) -> None:
        data = DrillDataFile(
            drills=self.list_drills(known_only=False),
            policies=self.list_all_policies(),
        )
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                yaml.dump(
                    _serialize(data), default_flow_style=False, allow_unicode=True, sort_keys=False
                ),
                encoding="utf-8",
            )
        except OSError as exc:
            add_context_note(exc, f"Failed while writing drill data file {self._path}")
            raise


def _load(path: Path) -> DrillDataFile:
    if not path.exists():
        logger.info("Drill data file not found, starting empty: {}", path)
        return DrillDataFile()

    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    try:
        return DrillDataFile.model_validate(raw)
    except ValidationError as exc:
        msg = "Invalid drill data file"
        raise StoreError(msg, context={"path": str(path), "errors": exc.error_count()}) from exc


def _serialize(data: DrillDataFile) -> dict[str, Any]:
    """Enum / tuple을 YAML 친화적인 기본 타입으로 변환."""
    return data.model_dump(mode="json")
